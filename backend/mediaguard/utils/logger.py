"""
Structured Logging Configuration Module for MediaGuard

This module provides the logging setup for the MediaGuard service, with
JSON-formatted output for log aggregation, a plain-text formatter for local
development, context enrichment via LoggerAdapter, and integration with
Uvicorn's loggers.

Library code never configures logging; it only logs through
``logging.getLogger(__name__)``. The service calls ``setup_logging`` once
at startup.

Usage:
    from mediaguard.utils.logger import add_log_context, setup_logging

    setup_logging(log_level="INFO", json_logs=True)

    logger = logging.getLogger(__name__)
    ctx_logger = add_log_context(logger, file_name="photo.jpg", category="image")
    ctx_logger.info("Rejecting upload")
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any


# =============================================================================
# Constants
# =============================================================================

LOG_LEVEL_MAP: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Third-party loggers to reduce verbosity
THIRD_PARTY_LOGGERS: list[str] = [
    "fastapi",
    "httpx",
    "httpcore",
    "asyncio",
]

UVICORN_LOGGERS: tuple[str, ...] = ("uvicorn", "uvicorn.access", "uvicorn.error")


# =============================================================================
# Custom JSON Encoder
# =============================================================================


class LogJSONEncoder(json.JSONEncoder):
    """
    JSON encoder for log records.

    Falls back to ``str()`` for anything json cannot serialize, so a log call
    never fails because of an odd ``extra`` value (enums, bytes, sets).
    """

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, bytes):
            return obj.hex()
        if isinstance(obj, (set, frozenset, tuple)):
            return list(obj)
        return str(obj)


# =============================================================================
# JSONFormatter Class
# =============================================================================


class JSONFormatter(logging.Formatter):
    """
    Logging formatter that outputs one JSON object per record.

    Example output:
        {
            "timestamp": "2026-01-15T10:30:45.123456+00:00",
            "level": "INFO",
            "logger": "mediaguard.api.v1.media",
            "message": "Upload rejected",
            "extra": {"file_name": "payload.exe", "category": "image"}
        }
    """

    # Standard LogRecord attributes to exclude from extra fields
    RESERVED_ATTRS: frozenset[str] = frozenset(
        {
            "args",
            "asctime",
            "created",
            "exc_info",
            "exc_text",
            "filename",
            "funcName",
            "levelname",
            "levelno",
            "lineno",
            "message",
            "module",
            "msecs",
            "msg",
            "name",
            "pathname",
            "process",
            "processName",
            "relativeCreated",
            "stack_info",
            "thread",
            "threadName",
            "taskName",
        }
    )

    def __init__(
        self,
        include_extra_fields: bool = True,
        include_source_location: bool = False,
    ) -> None:
        """
        Initialize the JSON formatter.

        Args:
            include_extra_fields: Include ``extra`` / adapter context fields
            include_source_location: Include filename, lineno and function
        """
        super().__init__()
        self.include_extra_fields = include_extra_fields
        self.include_source_location = include_source_location

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="microseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_source_location:
            log_entry["source"] = {
                "filename": record.filename,
                "lineno": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_entry["exception"] = self._format_exception(record.exc_info)

        if record.stack_info:
            log_entry["stack_info"] = record.stack_info

        if self.include_extra_fields:
            extra_fields = self._extract_extra_fields(record)
            if extra_fields:
                log_entry["extra"] = extra_fields

        return json.dumps(
            log_entry,
            cls=LogJSONEncoder,
            ensure_ascii=False,
            separators=(",", ":"),
        )

    def _format_exception(self, exc_info: tuple) -> dict[str, Any]:
        exc_type, exc_value, _ = exc_info
        return {
            "type": exc_type.__name__ if exc_type else "Unknown",
            "message": str(exc_value) if exc_value else "",
            "traceback": "".join(traceback.format_exception(*exc_info)),
        }

    def _extract_extra_fields(self, record: logging.LogRecord) -> dict[str, Any]:
        return {
            key: value
            for key, value in record.__dict__.items()
            if not key.startswith("_") and key not in self.RESERVED_ATTRS
        }


# =============================================================================
# Standard Text Formatter
# =============================================================================


class StandardFormatter(logging.Formatter):
    """
    Human-readable formatter for local development.

    Format: [TIMESTAMP] LEVEL logger_name: message
    """

    DEFAULT_FORMAT: str = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"
    DEFAULT_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(
            fmt=fmt or self.DEFAULT_FORMAT,
            datefmt=datefmt or self.DEFAULT_DATE_FORMAT,
        )


# =============================================================================
# Application Logging Setup
# =============================================================================


def get_log_level_from_string(level_str: str) -> int:
    """Convert a level name to its logging constant (INFO if unknown)."""
    return LOG_LEVEL_MAP.get(level_str.upper(), logging.INFO)


def build_formatter(json_logs: bool, level: int = logging.INFO) -> logging.Formatter:
    """Return the JSON or text formatter used by every handler."""
    if json_logs:
        return JSONFormatter(
            include_extra_fields=True,
            include_source_location=level <= logging.DEBUG,
        )
    return StandardFormatter()


def setup_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    third_party_level: str = "WARNING",
) -> None:
    """
    Configure application-wide logging with root logger and Uvicorn integration.

    Should be called once at startup (the FastAPI lifespan does this). It
    replaces any existing root handlers, points Uvicorn's loggers at the same
    formatter and quietens noisy third-party loggers.

    Args:
        log_level: Application log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output JSON; if False, output standard text
        third_party_level: Log level for third-party libraries

    Example:
        # Development: human-readable logs
        setup_logging(log_level="DEBUG", json_logs=False)
    """
    level = get_log_level_from_string(log_level)
    formatter = build_formatter(json_logs, level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    _configure_uvicorn_logging(formatter, level)

    third_party_log_level = get_log_level_from_string(third_party_level)
    for logger_name in THIRD_PARTY_LOGGERS:
        logging.getLogger(logger_name).setLevel(third_party_log_level)

    logging.getLogger(__name__).info(
        "Logging configured: level=%s, json=%s", log_level.upper(), json_logs
    )


def _configure_uvicorn_logging(formatter: logging.Formatter, level: int) -> None:
    """Give Uvicorn's loggers the application formatter; errors go to stderr."""
    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.setLevel(level)
        uvicorn_logger.propagate = False
        uvicorn_logger.handlers.clear()

        stream = sys.stderr if name == "uvicorn.error" else sys.stdout
        handler = logging.StreamHandler(stream)
        handler.setFormatter(formatter)
        uvicorn_logger.addHandler(handler)


# =============================================================================
# Context Enrichment
# =============================================================================


class ContextLoggerAdapter(logging.LoggerAdapter):
    """
    LoggerAdapter that merges its context into each call's ``extra``.

    Fields passed explicitly in ``extra`` take precedence over the context.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple:
        extra = dict(kwargs.get("extra") or {})
        for key, value in self.extra.items():
            extra.setdefault(key, value)
        kwargs["extra"] = extra
        return msg, kwargs


def add_log_context(logger: logging.Logger, **kwargs: Any) -> logging.LoggerAdapter:
    """
    Wrap a logger so every message carries the given context fields.

    Example:
        ctx_logger = add_log_context(logger, file_name="clip.mp4", category="video")
        ctx_logger.warning("Upload rejected", extra={"status_code": 413})
        # extra: file_name, category and status_code
    """
    return ContextLoggerAdapter(logger, kwargs)


__all__ = [
    "JSONFormatter",
    "StandardFormatter",
    "ContextLoggerAdapter",
    "add_log_context",
    "build_formatter",
    "get_log_level_from_string",
    "setup_logging",
    "LOG_LEVEL_MAP",
]
