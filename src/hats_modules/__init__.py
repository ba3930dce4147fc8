"""Clients for Hats Protocol eligibility modules."""
from .config import ConnectionSettings, HatsModulesConfig, load_config
from .connection import ChainConnection
from .errors import (
    ConnectionNetworkMismatchError,
    EventDecodingError,
    HatsModulesError,
    MissingReadConnectionError,
    MissingWriteConnectionError,
    TransactionConfirmationError,
    TransactionRevertedError,
    TransactionSubmissionError,
)
from .modules import (
    JokeraceEligibilityClient,
    JokeraceEligibilityInfo,
    StakingEligibilityClient,
    StakingEligibilityInfo,
)
from .registry import get_module, list_modules

__all__ = [
    "ChainConnection",
    "ConnectionNetworkMismatchError",
    "ConnectionSettings",
    "EventDecodingError",
    "HatsModulesConfig",
    "HatsModulesError",
    "JokeraceEligibilityClient",
    "JokeraceEligibilityInfo",
    "MissingReadConnectionError",
    "MissingWriteConnectionError",
    "StakingEligibilityClient",
    "StakingEligibilityInfo",
    "TransactionConfirmationError",
    "TransactionRevertedError",
    "TransactionSubmissionError",
    "get_module",
    "list_modules",
    "load_config",
]
