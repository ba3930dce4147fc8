"""Configuration loading and validation for the module clients."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

import yaml
from eth_utils import is_hex_address, to_checksum_address
from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "defaults.yaml"
CONFIG_ENV_VAR = "HATS_MODULES_CONFIG"


def _checksum(value: str) -> str:
    if not isinstance(value, str) or not value.startswith("0x") or not is_hex_address(value):
        raise ValueError("Must be a 0x-prefixed 20-byte address")
    return to_checksum_address(value)


class ModuleDeploymentConfig(BaseModel):
    """Network specific settings of a single module type."""

    model_config = ConfigDict(frozen=True)

    implementation_address: str = Field(..., description="Address of the module implementation clone target")

    @field_validator("implementation_address")
    @classmethod
    def validate_address(cls, value: str) -> str:
        return _checksum(value)


class HatsModulesConfig(BaseModel):
    """Immutable configuration shared by every module client."""

    model_config = ConfigDict(frozen=True)

    factory_address: str = Field(..., description="Address of the shared Hats module factory")
    receipt_timeout: float = Field(120.0, gt=0, description="Seconds to wait for a transaction receipt")
    poll_latency: float = Field(0.1, gt=0, description="Seconds between receipt polls")
    modules: Dict[str, ModuleDeploymentConfig] = Field(default_factory=dict)

    @field_validator("factory_address")
    @classmethod
    def validate_factory(cls, value: str) -> str:
        return _checksum(value)

    def module(self, key: str) -> ModuleDeploymentConfig:
        try:
            return self.modules[key]
        except KeyError as exc:
            raise KeyError(f"No deployment configuration for module '{key}'") from exc


class ConnectionSettings(BaseModel):
    """How to reach a JSON-RPC node."""

    rpc_url: str = Field(..., description="HTTP JSON-RPC endpoint")
    private_key: Optional[SecretStr] = Field(None, description="Key used to sign transactions locally")
    enable_poa: bool = False
    request_timeout: float = Field(30.0, gt=0)

    @field_validator("rpc_url")
    @classmethod
    def validate_rpc_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("rpc_url must be an http(s) URL")
        return value

    @classmethod
    def from_env(cls, rpc_url: Optional[str] = None) -> "ConnectionSettings":
        url = rpc_url or os.environ.get("HATS_RPC_URL")
        if not url:
            raise ValueError("No RPC URL configured; pass --rpc-url or set HATS_RPC_URL")
        return cls(
            rpc_url=url,
            private_key=os.environ.get("HATS_PRIVATE_KEY") or None,
            enable_poa=os.environ.get("HATS_ENABLE_POA", "").lower() in {"1", "true", "yes"},
        )


def load_config(path: Optional[str | Path] = None) -> HatsModulesConfig:
    """Load configuration from YAML and return a HatsModulesConfig."""

    config_path = Path(path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file '{config_path}' not found")

    with config_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    return HatsModulesConfig(**data)


@lru_cache(maxsize=1)
def default_config() -> HatsModulesConfig:
    """Return the cached configuration used when a client is given none.

    Honours ``$HATS_MODULES_CONFIG`` and falls back to the packaged defaults.
    """

    return load_config()


__all__ = [
    "CONFIG_ENV_VAR",
    "ConnectionSettings",
    "DEFAULT_CONFIG_PATH",
    "HatsModulesConfig",
    "ModuleDeploymentConfig",
    "default_config",
    "load_config",
]
