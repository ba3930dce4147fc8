from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from fakes import FakeChain

from hats_modules import StakingEligibilityClient
from hats_modules.config import (
    CONFIG_ENV_VAR,
    ConnectionSettings,
    HatsModulesConfig,
    default_config,
    load_config,
)

FACTORY = "0xfe661c01891172046fee16d3a57c3cf456729efa"
IMPLEMENTATION = "0x5fbdb2315678afecb367f032d93f642f64180aa3"


def _write(tmp_path: Path, data) -> Path:
    path = tmp_path / "hats.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_packaged_defaults_cover_every_module():
    config = default_config()
    assert config.factory_address == "0xfE661c01891172046feE16D3a57c3Cf456729efA"
    assert set(config.modules) == {"staking", "jokerace"}
    assert config.receipt_timeout == 120
    assert default_config() is config


def test_load_config_checksums_addresses(tmp_path):
    path = _write(
        tmp_path,
        {"factory_address": FACTORY, "receipt_timeout": 5, "modules": {"staking": {"implementation_address": IMPLEMENTATION}}},
    )

    config = load_config(path)

    assert config.factory_address == "0xfE661c01891172046feE16D3a57c3Cf456729efA"
    assert config.module("staking").implementation_address == "0x5FbDB2315678afecb367f032d93F642f64180aa3"
    assert config.receipt_timeout == 5
    assert config.poll_latency == 0.1


def test_load_config_from_environment(tmp_path, monkeypatch):
    path = _write(tmp_path, {"factory_address": FACTORY})
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert load_config().modules == {}


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


@pytest.mark.parametrize("address", ["0x1234", "fe661c01891172046fee16d3a57c3cf456729efa", "not-an-address"])
def test_invalid_addresses_are_rejected(address):
    with pytest.raises(ValidationError):
        HatsModulesConfig(factory_address=address)


def test_non_positive_timeout_is_rejected():
    with pytest.raises(ValidationError):
        HatsModulesConfig(factory_address=FACTORY, receipt_timeout=0)


def test_unknown_module_key():
    with pytest.raises(KeyError, match="unknown"):
        HatsModulesConfig(factory_address=FACTORY).module("unknown")


def test_config_is_frozen():
    config = HatsModulesConfig(factory_address=FACTORY)
    with pytest.raises(ValidationError):
        config.receipt_timeout = 1


def test_connection_settings_from_env(monkeypatch):
    monkeypatch.setenv("HATS_RPC_URL", "http://127.0.0.1:8545")
    monkeypatch.setenv("HATS_PRIVATE_KEY", "0x" + "11" * 32)
    monkeypatch.setenv("HATS_ENABLE_POA", "true")

    settings = ConnectionSettings.from_env()

    assert settings.rpc_url == "http://127.0.0.1:8545"
    assert settings.private_key.get_secret_value() == "0x" + "11" * 32
    assert "11" * 32 not in repr(settings)
    assert settings.enable_poa is True


def test_connection_settings_explicit_url_wins(monkeypatch):
    monkeypatch.setenv("HATS_RPC_URL", "http://127.0.0.1:8545")
    monkeypatch.delenv("HATS_PRIVATE_KEY", raising=False)
    monkeypatch.delenv("HATS_ENABLE_POA", raising=False)

    settings = ConnectionSettings.from_env("https://rpc.example.org")

    assert settings.rpc_url == "https://rpc.example.org"
    assert settings.private_key is None
    assert settings.enable_poa is False


def test_connection_settings_require_url(monkeypatch):
    monkeypatch.delenv("HATS_RPC_URL", raising=False)
    with pytest.raises(ValueError):
        ConnectionSettings.from_env()
    with pytest.raises(ValidationError):
        ConnectionSettings(rpc_url="ws://127.0.0.1:8546")


def test_clients_use_configuration_from_environment(tmp_path, monkeypatch):
    path = _write(
        tmp_path,
        {
            "factory_address": IMPLEMENTATION,
            "receipt_timeout": 30,
            "modules": {"staking": {"implementation_address": FACTORY}},
        },
    )
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    default_config.cache_clear()

    client = StakingEligibilityClient(FakeChain().connection())

    assert client.factory_address == "0x5FbDB2315678afecb367f032d93F642f64180aa3"
    assert client.implementation_address == "0xfE661c01891172046feE16D3a57c3Cf456729efA"
    assert client.config.receipt_timeout == 30
