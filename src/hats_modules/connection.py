"""Chain connections and the guard that validates them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from eth_account import Account
from web3 import HTTPProvider, Web3
from web3.middleware import ExtraDataToPOAMiddleware, SignAndSendRawMiddlewareBuilder

from .config import ConnectionSettings
from .errors import ConnectionNetworkMismatchError, MissingReadConnectionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChainConnection:
    """A Web3 handle bound to the network id it was opened against."""

    web3: Web3
    chain_id: int

    @classmethod
    def from_web3(cls, web3: Web3) -> "ChainConnection":
        return cls(web3=web3, chain_id=int(web3.eth.chain_id))

    @classmethod
    def connect(cls, settings: ConnectionSettings) -> "ChainConnection":
        logger.debug("Initialising Web3 client for %s", settings.rpc_url)
        provider = HTTPProvider(settings.rpc_url, request_kwargs={"timeout": settings.request_timeout})
        web3 = Web3(provider)
        if settings.enable_poa:
            web3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
        if settings.private_key is not None:
            account = Account.from_key(settings.private_key.get_secret_value())
            web3.middleware_onion.inject(SignAndSendRawMiddlewareBuilder.build(account), layer=0)
            web3.eth.default_account = account.address
        if not web3.is_connected():
            raise ConnectionError(f"Failed to connect to RPC endpoint: {settings.rpc_url}")
        return cls.from_web3(web3)


def as_connection(value: Any) -> Optional[ChainConnection]:
    """Accept either a :class:`ChainConnection` or a bare Web3 handle."""

    if value is None or isinstance(value, ChainConnection):
        return value
    return ChainConnection.from_web3(value)


def validate_connections(read: Optional[ChainConnection], write: Optional[ChainConnection]) -> None:
    """Fail fast when the supplied connections cannot back a module client."""

    if read is None:
        raise MissingReadConnectionError("Read connection is required")
    if write is not None and write.chain_id != read.chain_id:
        raise ConnectionNetworkMismatchError(
            "Write connection chain id should match the read connection chain id",
            read_chain_id=read.chain_id,
            write_chain_id=write.chain_id,
        )


__all__ = ["ChainConnection", "as_connection", "validate_connections"]
