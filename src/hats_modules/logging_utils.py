"""Logging for module clients.

Every record emitted while a client works on a transaction carries the module
key, the contract it targets and the operation name, so a JSON log file can be
filtered per instance or per transaction hash.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, MutableMapping, Optional, Tuple

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "hats_modules"


@dataclass(frozen=True)
class ModuleLogContext:
    """Fields attached to each record logged on behalf of a module client."""

    module: str
    target: Optional[str] = None
    operation: Optional[str] = None
    tx_hash: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"module": self.module}
        for name in ("target", "operation", "tx_hash"):
            value = getattr(self, name)
            if value is not None:
                payload[name] = value
        payload.update(self.details)
        return payload


class ModuleLogger(logging.LoggerAdapter):
    """Logger adapter binding a :class:`ModuleLogContext` to every record."""

    def __init__(self, logger: logging.Logger, context: ModuleLogContext) -> None:
        super().__init__(logger, {})
        self.context = context

    def bind(self, **fields: Any) -> "ModuleLogger":
        """Return an adapter whose context also holds ``fields``.

        ``target``, ``operation`` and ``tx_hash`` replace the bound values, anything
        else lands in ``details``.
        """

        known = {name: fields.pop(name) for name in ("target", "operation", "tx_hash") if name in fields}
        context = replace(self.context, details={**self.context.details, **fields}, **known)
        return ModuleLogger(self.logger, context)

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["module_context"] = self.context
        kwargs["extra"] = extra
        return msg, kwargs


def module_logger(name: str, module: str) -> ModuleLogger:
    return ModuleLogger(logging.getLogger(name), ModuleLogContext(module=module))


class StructuredJsonFormatter(logging.Formatter):
    """Serialize records as single-line JSON objects with their module context flattened in."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - inherited docstring
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context: Optional[ModuleLogContext] = getattr(record, "module_context", None)
        if context is not None:
            payload.update(context.to_dict())
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, sort_keys=True, default=str)


def configure_logging(level: int | str = logging.INFO, log_file: Optional[str | Path] = None) -> logging.Logger:
    """Route ``hats_modules`` records to a rich console on stderr and, optionally, a JSON lines file."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for existing in list(logger.handlers):
        existing.close()
        logger.removeHandler(existing)
    logger.addHandler(handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(StructuredJsonFormatter())
        logger.addHandler(file_handler)
    return logger


__all__ = [
    "LOGGER_NAME",
    "ModuleLogContext",
    "ModuleLogger",
    "StructuredJsonFormatter",
    "configure_logging",
    "module_logger",
]
