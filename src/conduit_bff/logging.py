"""
BFF Logging Infrastructure.

Structured logging for the gateway process:
- JSONL output (one JSON object per line) for log shippers in the cluster
- Console output for humans running the service locally

Every record carries the component that emitted it (API, GraphQL, Clients)
and the service name, so lines from many replicas can be told apart.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

ROOT_LOGGER = "conduit_bff"


# =============================================================================
# Formatters
# =============================================================================


class JSONLFormatter(logging.Formatter):
    """
    Formats log records as JSON Lines.

    Each log entry is a single JSON object on one line containing:
    - timestamp: ISO 8601 format (UTC)
    - level: DEBUG, INFO, WARNING, ERROR, CRITICAL
    - component: API, GraphQL, Clients, BFF
    - service: service name from configuration
    - message: The log message
    - context: Additional structured data (optional)

    Example output:
    {"timestamp":"2024-01-15T10:30:45.123+00:00","level":"INFO","component":"API","service":"conduites-bff","message":"Request completed","context":{"status_code":200}}
    """

    def __init__(self, service_name: str = "conduites-bff") -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "component": getattr(record, "component", "BFF"),
            "service": self.service_name,
            "message": record.getMessage(),
        }

        context = getattr(record, "context", None)
        if context:
            entry["context"] = context

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
            }

        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output."""

    def format(self, record: logging.LogRecord) -> str:
        component = getattr(record, "component", "BFF")
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        prefix = f"[{timestamp}] [{component}]"
        if record.levelno != logging.INFO:
            prefix = f"{prefix} {record.levelname}:"

        line = f"{prefix} {record.getMessage()}"
        context = getattr(record, "context", None)
        if context:
            line = f"{line} {json.dumps(context, default=str)}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


# =============================================================================
# Logger Setup
# =============================================================================


_loggers: dict[str, logging.Logger] = {}


def setup_logging(
    level: str | int = logging.INFO,
    fmt: str = "json",
    service_name: str = "conduites-bff",
) -> logging.Logger:
    """
    Initialize the logging infrastructure.

    Args:
        level: Minimum log level, as a name ("info") or a logging constant
        fmt: "json" for JSONL output, anything else for console output
        service_name: Service name stamped on every JSONL entry

    Returns:
        The configured root logger for the package
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if fmt == "json":
        handler.setFormatter(JSONLFormatter(service_name))
    else:
        handler.setFormatter(ConsoleFormatter())
    handler.setLevel(level)
    root_logger.addHandler(handler)

    return root_logger


def get_logger(component: str) -> logging.Logger:
    """
    Get a logger for a specific component.

    Args:
        component: Component name (e.g., "API", "GraphQL", "Clients")

    Returns:
        Logger whose records are tagged with the component
    """
    if component in _loggers:
        return _loggers[component]

    logger = logging.getLogger(f"{ROOT_LOGGER}.{component.lower().replace(' ', '_')}")

    class ComponentFilter(logging.Filter):
        def filter(self, record: logging.LogRecord) -> bool:
            if not hasattr(record, "component"):
                record.component = component
            return True

    logger.addFilter(ComponentFilter())
    _loggers[component] = logger

    return logger


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    context: dict[str, Any] | None = None,
    **kwargs: Any,
) -> None:
    """
    Log a message with structured context data.

    Args:
        logger: Logger instance
        level: Logging level (logging.INFO, logging.ERROR, etc.)
        message: Human-readable message
        context: Structured context data (included in JSONL output)
        **kwargs: Additional context items
    """
    extra = {"context": {**(context or {}), **kwargs}} if (context or kwargs) else {}
    logger.log(level, message, extra=extra)
