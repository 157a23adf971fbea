"""
Logging setup for the kifome service.

Two formatters are provided: a JSON one for production log shipping and a
single-line text one for local development. Both pick up the request and
shopping-list ids stored in context variables, so log lines emitted deep in
the consolidation code still carry the list they were working on.
"""

import json
import logging
import sys
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any

from kifome.config import settings

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
list_id_ctx: ContextVar[str | None] = ContextVar("list_id", default=None)

_CONTEXT_VARS: dict[str, ContextVar[str | None]] = {
    "request_id": request_id_ctx,
    "list_id": list_id_ctx,
}

# Short labels used by the text formatter
_CONTEXT_LABELS = {"request_id": "req", "list_id": "list"}


def current_context() -> dict[str, str]:
    """Return the context ids that are currently set."""
    return {name: var.get() for name, var in _CONTEXT_VARS.items() if var.get()}


class StructuredJsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **current_context(),
            "location": {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            },
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


class ContextualFormatter(logging.Formatter):
    """Readable single-line records for development."""

    def format(self, record: logging.LogRecord) -> str:
        tags = [f"{_CONTEXT_LABELS[name]}={value[:8]}" for name, value in current_context().items()]
        where = f"{record.name} [{', '.join(tags)}]" if tags else record.name
        when = datetime.fromtimestamp(record.created, timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

        line = f"{when} | {record.levelname:<8} | {where} | {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class ContextLogger(logging.LoggerAdapter):
    """Adapter that attaches the current context ids to every record."""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        kwargs["extra"] = {**current_context(), **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    return ContextLogger(logging.getLogger(name), {})


def configure_logging(log_level: str = "INFO", json_format: bool | None = None) -> None:
    """
    Install a single stdout handler on the root logger.

    Args:
        log_level: Minimum level name for kifome loggers.
        json_format: Emit JSON records. Defaults to True in production.
    """
    if json_format is None:
        json_format = settings.environment == "production"

    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredJsonFormatter() if json_format else ContextualFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # Third-party loggers are kept quiet unless something goes wrong
    logging.getLogger("kifome").setLevel(level)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    get_logger(__name__).info(
        f"Logging configured: level={logging.getLevelName(level)}, "
        f"format={'json' if json_format else 'text'}"
    )


def set_context(request_id: str | None = None, list_id: str | None = None) -> None:
    """Set context ids for the rest of the current task."""
    for name, value in (("request_id", request_id), ("list_id", list_id)):
        if value is not None:
            _CONTEXT_VARS[name].set(value)


def clear_context() -> None:
    for var in _CONTEXT_VARS.values():
        var.set(None)


class LoggingContext:
    """
    Scope context ids to a block.

    Example:
        with LoggingContext(list_id=shopping_list.id):
            logger.info("Items consolidated")
    """

    def __init__(self, request_id: str | None = None, list_id: str | None = None):
        self._values = {"request_id": request_id, "list_id": list_id}
        self._tokens: list[tuple[ContextVar[str | None], Token]] = []

    def __enter__(self) -> "LoggingContext":
        for name, value in self._values.items():
            if value is not None:
                var = _CONTEXT_VARS[name]
                self._tokens.append((var, var.set(value)))
        return self

    def __exit__(self, *exc: Any) -> None:
        while self._tokens:
            var, token = self._tokens.pop()
            var.reset(token)
