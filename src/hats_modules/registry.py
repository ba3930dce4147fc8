"""Discovery of the supported module types."""

from __future__ import annotations

from typing import Dict, List, Type

from .modules import (
    JokeraceEligibilityClient,
    ModuleClient,
    ModuleDescriptor,
    StakingEligibilityClient,
)

_CLIENTS: Dict[str, Type[ModuleClient]] = {
    client.descriptor.key: client for client in (StakingEligibilityClient, JokeraceEligibilityClient)
}


def module_keys() -> List[str]:
    return sorted(_CLIENTS)


def get_client_class(key: str) -> Type[ModuleClient]:
    try:
        return _CLIENTS[key]
    except KeyError as exc:
        raise KeyError(f"Unknown module '{key}'. Available: {', '.join(module_keys())}") from exc


def get_module(key: str) -> ModuleDescriptor:
    return get_client_class(key).descriptor


def list_modules() -> List[ModuleDescriptor]:
    return [_CLIENTS[key].descriptor for key in module_keys()]


__all__ = ["get_client_class", "get_module", "list_modules", "module_keys"]
