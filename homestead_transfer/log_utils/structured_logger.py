"""Structured logging: keyword context on log calls, text or JSON output."""

import json
import logging
import sys
from datetime import datetime, UTC
from pathlib import Path
from typing import Any, Optional

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per line; context from ``*_ctx`` calls lands under "context"."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        context = getattr(record, "context", None)
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        # Context values are not guaranteed to be JSON types
        return json.dumps(payload, default=str)


class ContextTextFormatter(logging.Formatter):
    """Human-readable lines with context appended as key=value pairs."""

    def __init__(self):
        super().__init__(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        context = getattr(record, "context", None)
        if context:
            line += " | " + " ".join(f"{key}={value}" for key, value in context.items())
        return line


class StructuredLogger(logging.Logger):
    """
    Logger whose ``*_ctx`` methods take context as keyword arguments.

        logger.info_ctx("Export complete", scope="garden", records=12)
    """

    def _emit(self, level: int, msg: str, exc_info: Any, context: dict) -> None:
        if not self.isEnabledFor(level):
            return
        # stacklevel=3 attributes the record to whoever called the *_ctx method
        self.log(level, msg, exc_info=exc_info, extra={"context": context}, stacklevel=3)

    def info_ctx(self, msg: str, **context: Any) -> None:
        self._emit(logging.INFO, msg, None, context)

    def warning_ctx(self, msg: str, **context: Any) -> None:
        self._emit(logging.WARNING, msg, None, context)

    def error_ctx(self, msg: str, exc_info: Any = None, **context: Any) -> None:
        self._emit(logging.ERROR, msg, exc_info, context)


def configure_logging(
    use_json: bool = False,
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
) -> None:
    """
    Replace the root handlers with a stderr handler (and optionally a file).

    stdout is left to command output.
    """
    logging.setLoggerClass(StructuredLogger)

    formatter = JSONFormatter() if use_json else ContextTextFormatter()
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)


def get_logger(name: str) -> StructuredLogger:
    """logging.getLogger() that guarantees the ``*_ctx`` methods."""
    if not issubclass(logging.getLoggerClass(), StructuredLogger):
        logging.setLoggerClass(StructuredLogger)
    return logging.getLogger(name)
