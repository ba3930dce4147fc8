"""Shared deploy, write and read pipelines of every module client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional, Tuple

from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address
from web3 import Web3
from web3.contract import Contract
from web3.logs import DISCARD

from ..abi import FACTORY, load_abi, write_functions
from ..codec import ParameterSchema
from ..config import HatsModulesConfig, default_config
from ..connection import ChainConnection, as_connection, validate_connections
from ..errors import (
    EventDecodingError,
    MissingWriteConnectionError,
    TransactionConfirmationError,
    TransactionRevertedError,
    TransactionSubmissionError,
)
from ..logging_utils import module_logger
from ..types import CreateInstanceResult, ModuleInfo, TransactionResult

ReceiptDecoder = Callable[[Mapping[str, Any]], Any]


@dataclass(frozen=True)
class ModuleDescriptor:
    """Static data describing one module type."""

    key: str
    info: ModuleInfo
    abi_name: str
    parameters: ParameterSchema
    # emitted by the factory, carries the new instance address
    deployed_event: str = "HatsModuleFactory_ModuleDeployed"

    @property
    def abi(self) -> List[Dict[str, Any]]:
        return load_abi(self.abi_name)

    def as_dict(self, include_abi: bool = False) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"key": self.key, **self.info.as_dict()}
        payload["parameters"] = {
            "init": [{"name": f.name, "type": f.abi_type} for f in self.parameters.init_fields],
            "immutable": [{"name": f.name, "type": f.abi_type} for f in self.parameters.immutable_fields],
        }
        if include_abi:
            payload["abi"] = self.abi
        return payload


def account_address(account: Any) -> ChecksumAddress:
    """Resolve an address string or an ``eth_account`` account to a checksum address."""

    return to_checksum_address(getattr(account, "address", account))


class ModuleClient:
    """Base client for a Hats module type.

    Construction validates the connections once; afterwards the client holds no
    mutable state, so a single instance can serve concurrent calls.
    """

    descriptor: ClassVar[ModuleDescriptor]
    # label -> accessor name, used by :meth:`read_parameters`
    parameter_readers: ClassVar[Mapping[str, str]] = {}

    def __init__(
        self,
        read_connection: Any,
        write_connection: Any = None,
        *,
        config: Optional[HatsModulesConfig] = None,
    ) -> None:
        read = as_connection(read_connection)
        write = as_connection(write_connection)
        validate_connections(read, write)
        self._read: ChainConnection = read  # type: ignore[assignment]
        self._write: Optional[ChainConnection] = write
        self._config = config or default_config()
        self._abi = self.descriptor.abi
        self._factory_abi = load_abi(FACTORY)
        self._log = module_logger(__name__, self.descriptor.key)
        self._log.bind(chain_id=read.chain_id, writable=write is not None).debug("Module client initialised")

    @property
    def read_connection(self) -> ChainConnection:
        return self._read

    @property
    def write_connection(self) -> Optional[ChainConnection]:
        return self._write

    @property
    def config(self) -> HatsModulesConfig:
        return self._config

    @property
    def factory_address(self) -> str:
        return self._config.factory_address

    @property
    def implementation_address(self) -> str:
        return self._config.module(self.descriptor.key).implementation_address

    # Plumbing --------------------------------------------------------------
    def _require_write(self) -> ChainConnection:
        if self._write is None:
            raise MissingWriteConnectionError("Write connection is required to perform this action")
        return self._write

    def _contract(self, connection: ChainConnection, address: str, abi: List[Dict[str, Any]]) -> Contract:
        return connection.web3.eth.contract(address=to_checksum_address(address), abi=abi)

    def _call(self, instance: str, function_name: str, *args: Any) -> Any:
        contract = self._contract(self._read, instance, self._abi)
        return getattr(contract.functions, function_name)(*args).call()

    def _event_decoder(
        self,
        event_name: str,
        field: str,
        *,
        emitter: str,
        abi: Optional[List[Dict[str, Any]]] = None,
    ) -> ReceiptDecoder:
        """Build a decoder returning ``field`` of the first ``event_name`` log emitted by ``emitter``.

        Logs are matched by event signature anywhere in the receipt; logs with the
        same signature from other contracts are skipped.
        """

        emitter = to_checksum_address(emitter)
        contract = self._contract(self._read, emitter, abi if abi is not None else self._abi)
        event = getattr(contract.events, event_name)

        def decode(receipt: Mapping[str, Any]) -> Any:
            for entry in event().process_receipt(receipt, errors=DISCARD):
                if to_checksum_address(entry["address"]) == emitter:
                    return entry["args"][field]
            raise LookupError(f"{event_name} not emitted by {emitter}")

        return decode

    def _execute(
        self,
        account: Any,
        target: str,
        function_name: str,
        *args: Any,
        abi: Optional[List[Dict[str, Any]]] = None,
        decode: Optional[ReceiptDecoder] = None,
    ) -> Tuple[TransactionResult, Any]:
        """Submit ``function_name`` to ``target``, wait for it to be mined and interpret the receipt."""

        write = self._require_write()
        abi = abi if abi is not None else self._abi
        if function_name not in write_functions(abi):
            raise ValueError(f"'{function_name}' is not a write operation of {self.descriptor.info.name}")

        log = self._log.bind(target=target, operation=function_name)
        contract = self._contract(write, target, abi)
        try:
            tx_hash = getattr(contract.functions, function_name)(*args).transact({"from": account_address(account)})
        except Exception as exc:
            log.error("Transaction submission failed: %s", exc)
            raise TransactionSubmissionError() from exc

        tx_hex = Web3.to_hex(tx_hash)
        log = log.bind(tx_hash=tx_hex)
        log.info("Transaction submitted")
        try:
            receipt = self._read.web3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=self._config.receipt_timeout,
                poll_latency=self._config.poll_latency,
            )
        except Exception as exc:
            log.error("Waiting for transaction receipt failed: %s", exc)
            raise TransactionConfirmationError(transaction_hash=tx_hex) from exc

        if receipt["status"] != 1:
            log.warning("Transaction reverted")
            raise TransactionRevertedError(transaction_hash=tx_hex)

        extracted = None
        if decode is not None:
            try:
                extracted = decode(receipt)
            except Exception as exc:
                log.error("Failed to decode receipt: %s", exc)
                raise EventDecodingError(transaction_hash=tx_hex) from exc

        log.info("Transaction confirmed")
        return TransactionResult(status="success", transaction_hash=tx_hex), extracted

    def _transact(self, account: Any, instance: str, function_name: str, *args: Any) -> TransactionResult:
        result, _ = self._execute(account, instance, function_name, *args)
        return result

    # Deployment ------------------------------------------------------------
    def _deploy(self, account: Any, hat_id: int, parameters: Mapping[str, Any]) -> CreateInstanceResult:
        self._require_write()
        encoded = self.descriptor.parameters.encode(parameters)
        decoder = self._event_decoder(
            self.descriptor.deployed_event, "instance", emitter=self.factory_address, abi=self._factory_abi
        )

        result, instance = self._execute(
            account,
            self.factory_address,
            "createHatsModule",
            self.implementation_address,
            hat_id,
            encoded.immutable_args,
            encoded.init_data,
            abi=self._factory_abi,
            decode=decoder,
        )
        self._log.bind(hat_id=hat_id, instance=instance, tx_hash=result.transaction_hash).info(
            "Module instance deployed"
        )
        return CreateInstanceResult(
            status=result.status,
            transaction_hash=result.transaction_hash,
            new_instance=to_checksum_address(instance),
        )

    def predict_instance(self, *, hat_id: int, **parameters: Any) -> ChecksumAddress:
        """Address the factory would deploy an instance with these immutable arguments to."""

        factory = self._contract(self._read, self.factory_address, self._factory_abi)
        immutable_args = self.descriptor.parameters.encode_immutable(parameters)
        return factory.functions.getHatsModuleAddress(self.implementation_address, hat_id, immutable_args).call()

    def is_deployed(self, *, hat_id: int, **parameters: Any) -> bool:
        factory = self._contract(self._read, self.factory_address, self._factory_abi)
        immutable_args = self.descriptor.parameters.encode_immutable(parameters)
        return bool(factory.functions.deployed(self.implementation_address, hat_id, immutable_args).call())

    # Reads shared by every Hats module --------------------------------------
    def get_hat_id(self, instance: str) -> int:
        return int(self._call(instance, "hatId"))

    def get_version(self, instance: str) -> str:
        return str(self._call(instance, "version"))

    def read_parameters(self, instance: str) -> Dict[str, Any]:
        """Query every single-value accessor of ``instance``."""

        return {label: getattr(self, method)(instance) for label, method in self.parameter_readers.items()}


__all__ = ["ModuleClient", "ModuleDescriptor", "ReceiptDecoder", "account_address"]
