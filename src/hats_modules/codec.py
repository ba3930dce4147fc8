"""Encoding of module deployment parameters.

Every module deployed through the Hats module factory receives two blobs:

* ``init_data`` - ABI encoded values handed to the instance's ``setUp``. These
  are the values the instance may later allow changing.
* ``immutable_args`` - tightly packed values appended to the clone's bytecode,
  fixed forever at creation.

Field order and primitive widths are part of the wire contract with the
deployed contract and must not change.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Tuple

from eth_abi import encode as abi_encode
from eth_abi.packed import encode_packed
from eth_utils import to_checksum_address

_REQUIRED = object()


@dataclass(frozen=True)
class AbiField:
    name: str
    abi_type: str
    default: Any = _REQUIRED

    @property
    def required(self) -> bool:
        return self.default is _REQUIRED


@dataclass(frozen=True)
class EncodedInit:
    init_data: bytes
    immutable_args: bytes


@dataclass(frozen=True)
class ParameterSchema:
    """Ordered deployment schema of one module type."""

    init_fields: Tuple[AbiField, ...]
    immutable_fields: Tuple[AbiField, ...] = ()

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(field.name for field in (*self.init_fields, *self.immutable_fields))

    def _values(self, fields: Sequence[AbiField], values: Mapping[str, Any]) -> list:
        resolved = []
        for field in fields:
            value = values.get(field.name)
            if value is None:
                if field.required:
                    raise ValueError(f"Missing deployment parameter '{field.name}'")
                value = field.default
            if field.abi_type == "address":
                value = to_checksum_address(value)
            resolved.append(value)
        return resolved

    def encode_immutable(self, values: Mapping[str, Any]) -> bytes:
        types = [field.abi_type for field in self.immutable_fields]
        return bytes(encode_packed(types, self._values(self.immutable_fields, values)))

    def encode(self, values: Mapping[str, Any]) -> EncodedInit:
        unknown = set(values) - set(self.field_names)
        if unknown:
            raise ValueError(f"Unknown deployment parameters: {', '.join(sorted(unknown))}")
        init_types = [field.abi_type for field in self.init_fields]
        init_data = abi_encode(init_types, self._values(self.init_fields, values))
        return EncodedInit(init_data=bytes(init_data), immutable_args=self.encode_immutable(values))


__all__ = ["AbiField", "EncodedInit", "ParameterSchema"]
