"""Logging sinks for the `vscroll` logger namespace.

The package only ever configures its own `vscroll` logger. Hosts that set up
root logging themselves get every `vscroll.*` record through propagation and
never need to call anything here.
"""

from __future__ import annotations

import logging
import queue
from collections.abc import Mapping
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from vscroll.api.logging import ScrollLoggingConfig
from vscroll.runtime.config import load_scroll_logging_config
from vscroll.runtime.json_codec import dumps_text

PACKAGE_LOGGER = "vscroll"

_QUEUE_LISTENER: QueueListener | None = None
_INSTALLED_HANDLERS: list[logging.Handler] = []
_SAVED_STATE: tuple[int, bool] | None = None

_STANDARD_RECORD_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record; `extra=` fields land under `fields`."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        extras = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_RECORD_FIELDS}
        if extras:
            payload["fields"] = extras
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return dumps_text(payload)


def configure_scroll_logging(config: ScrollLoggingConfig, *, propagate: bool = False) -> logging.Logger:
    """Attach console and optional file sinks to the `vscroll` logger.

    Calling again replaces the sinks installed by the previous call. A file
    sink is drained through a queue listener. The root logger is untouched.
    """
    global _QUEUE_LISTENER, _SAVED_STATE

    logger = logging.getLogger(PACKAGE_LOGGER)
    if _SAVED_STATE is None:
        _SAVED_STATE = (logger.level, logger.propagate)
    _detach_handlers(logger)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_resolve_formatter(config.console_format))
    handlers: list[logging.Handler] = [console_handler]
    if config.file_path:
        file_path = Path(config.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8", delay=True)
        file_handler.setFormatter(_resolve_formatter(config.file_format))
        handlers.append(file_handler)

    logger.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))
    logger.propagate = propagate

    if len(handlers) == 1:
        _install(logger, console_handler)
        return logger

    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    _install(logger, QueueHandler(log_queue))
    _QUEUE_LISTENER = QueueListener(log_queue, *handlers, respect_handler_level=True)
    _QUEUE_LISTENER.start()
    return logger


def shutdown_scroll_logging() -> None:
    """Flush and remove installed sinks, restoring the logger's prior level and propagation."""
    global _SAVED_STATE

    logger = logging.getLogger(PACKAGE_LOGGER)
    _detach_handlers(logger)
    if _SAVED_STATE is not None:
        level, propagate = _SAVED_STATE
        logger.setLevel(level)
        logger.propagate = propagate
        _SAVED_STATE = None


def setup_scroll_logging(*, env: Mapping[str, str] | None = None) -> None:
    """Install env-configured sinks only when no logging is set up anywhere."""
    if logging.getLogger(PACKAGE_LOGGER).handlers or logging.getLogger().handlers:
        return
    configure_scroll_logging(load_scroll_logging_config(env=env))


def get_scroll_logger(name: str) -> logging.Logger:
    """Return a logger under the `vscroll` namespace."""
    if name == PACKAGE_LOGGER or name.startswith(f"{PACKAGE_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


def _install(logger: logging.Logger, handler: logging.Handler) -> None:
    logger.addHandler(handler)
    _INSTALLED_HANDLERS.append(handler)


def _detach_handlers(logger: logging.Logger) -> None:
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        for handler in _QUEUE_LISTENER.handlers:
            handler.close()
        _QUEUE_LISTENER = None
    for handler in _INSTALLED_HANDLERS:
        logger.removeHandler(handler)
        handler.close()
    _INSTALLED_HANDLERS.clear()


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
