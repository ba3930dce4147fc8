"""Value objects returned by the module clients."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal

TransactionStatus = Literal["success", "reverted"]


@dataclass(frozen=True, slots=True)
class TransactionResult:
    status: TransactionStatus
    transaction_hash: str

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class CreateInstanceResult(TransactionResult):
    new_instance: str


@dataclass(frozen=True, slots=True)
class BeginUnstakeResult(TransactionResult):
    cooldown_end: int


@dataclass(frozen=True, slots=True)
class StakeInfo:
    stake: int
    is_slashed: bool

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class CooldownInfo:
    amount: int
    ends_at: int

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class WearerStatus:
    eligible: bool
    standing: bool

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ModuleInfo:
    """Static description of a module type."""

    name: str
    description: str
    github_repo_owner: str
    github_repo_name: str

    @property
    def repository_url(self) -> str:
        return f"https://github.com/{self.github_repo_owner}/{self.github_repo_name}"

    def as_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["repository_url"] = self.repository_url
        return payload


__all__ = [
    "BeginUnstakeResult",
    "CooldownInfo",
    "CreateInstanceResult",
    "ModuleInfo",
    "StakeInfo",
    "TransactionResult",
    "TransactionStatus",
    "WearerStatus",
]
