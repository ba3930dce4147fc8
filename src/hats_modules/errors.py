"""Error taxonomy raised by the module clients."""

from __future__ import annotations

from typing import Optional


class HatsModulesError(RuntimeError):
    """Base class for every error raised by :mod:`hats_modules`."""


class MissingReadConnectionError(HatsModulesError):
    """Raised when a client is constructed without a read connection."""


class ConnectionNetworkMismatchError(HatsModulesError):
    """Raised when the write connection targets another network than the read connection."""

    def __init__(self, message: str, *, read_chain_id: int, write_chain_id: int) -> None:
        super().__init__(message)
        self.read_chain_id = read_chain_id
        self.write_chain_id = write_chain_id


class MissingWriteConnectionError(HatsModulesError):
    """Raised when a deploy or write operation runs without a write connection."""


class TransactionRevertedError(HatsModulesError):
    """Raised when a transaction could not be carried through to a successful result.

    ``stage`` records where the pipeline stopped: ``"submit"`` (the node refused
    the call), ``"confirm"`` (waiting for the receipt failed), ``"receipt"``
    (the mined transaction reverted) or ``"decode"`` (the expected event was
    not found in a successful receipt).
    """

    def __init__(
        self,
        message: str = "Transaction reverted",
        *,
        stage: str = "receipt",
        transaction_hash: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.stage = stage
        self.transaction_hash = transaction_hash


class TransactionSubmissionError(TransactionRevertedError):
    """The node rejected the transaction before it was broadcast."""

    def __init__(self, message: str = "Transaction submission failed", **kwargs) -> None:
        kwargs.setdefault("stage", "submit")
        super().__init__(message, **kwargs)


class TransactionConfirmationError(TransactionRevertedError):
    """Waiting for the transaction receipt failed (timeout, dropped connection)."""

    def __init__(self, message: str = "Transaction confirmation failed", **kwargs) -> None:
        kwargs.setdefault("stage", "confirm")
        super().__init__(message, **kwargs)


class EventDecodingError(TransactionRevertedError):
    """A successful receipt did not carry the event the operation depends on."""

    def __init__(self, message: str = "Expected event missing from receipt", **kwargs) -> None:
        kwargs.setdefault("stage", "decode")
        super().__init__(message, **kwargs)


__all__ = [
    "ConnectionNetworkMismatchError",
    "EventDecodingError",
    "HatsModulesError",
    "MissingReadConnectionError",
    "MissingWriteConnectionError",
    "TransactionConfirmationError",
    "TransactionRevertedError",
    "TransactionSubmissionError",
]
