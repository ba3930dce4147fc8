"""Contract ABI catalogue shipped with the package."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Tuple

ABI_DIR = Path(__file__).resolve().parent / "abis"

FACTORY = "HatsModuleFactory"
STAKING_ELIGIBILITY = "StakingEligibility"
JOKERACE_ELIGIBILITY = "JokeraceEligibility"

_WRITE_MUTABILITIES = {"nonpayable", "payable"}


@lru_cache(maxsize=None)
def _load(name: str) -> Tuple[Dict[str, Any], ...]:
    path = ABI_DIR / f"{name}.json"
    if not path.exists():
        raise FileNotFoundError(f"Contract ABI not found at {path}")
    with path.open("r", encoding="utf-8") as handle:
        return tuple(json.load(handle))


def load_abi(name: str) -> List[Dict[str, Any]]:
    """Return a fresh copy of the named ABI."""

    return json.loads(json.dumps(_load(name)))


def write_functions(abi: List[Dict[str, Any]]) -> frozenset:
    """Names of the state-changing functions declared by ``abi``."""

    return frozenset(
        entry["name"]
        for entry in abi
        if entry.get("type") == "function" and entry.get("stateMutability") in _WRITE_MUTABILITIES
    )


__all__ = [
    "ABI_DIR",
    "FACTORY",
    "JOKERACE_ELIGIBILITY",
    "STAKING_ELIGIBILITY",
    "load_abi",
    "write_functions",
]
