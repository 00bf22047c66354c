# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# EPOCH: 1 - MONITORING MIDDLEWARE
# STATUS: Core - Structured logging with context
# PURPOSE: Consistent, queryable logging across all components
# CREATED: 19 OCT 2026
# ============================================================================
"""
Structured Logging

Provides structured, JSON-formatted or human-readable logging for the
monitoring middleware and its host application.

Features:
- Component-based loggers
- Contextual fields (endpoint, request_path, client_host, check_name)
- JSON output for log aggregation

Context is stored in a ContextVar so concurrent requests served by the
same event loop do not see each other's fields.

Usage:
    from core.logging import get_logger, log_context

    logger = get_logger("monitoring.middleware")

    with log_context(endpoint="livez", request_path="/livez"):
        logger.info("Running health checks", extra={"check_count": 5})
"""

import json
import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple, Union
from enum import Enum


class ComponentType(str, Enum):
    """Component types for logging categorization."""
    MIDDLEWARE = "middleware"
    EXECUTOR = "executor"
    REGISTRY = "registry"
    APPLICATION = "application"


@dataclass
class LogContext:
    """Context for structured logging."""
    endpoint: Optional[str] = None
    request_path: Optional[str] = None
    client_host: Optional[str] = None
    check_name: Optional[str] = None
    component: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict, excluding None values."""
        result = {}
        for key, value in asdict(self).items():
            if value is not None and key != "extra":
                result[key] = value
        if self.extra:
            result.update(self.extra)
        return result


_context_stack: ContextVar[Tuple[LogContext, ...]] = ContextVar(
    "monitoring_log_context", default=()
)


def get_current_context() -> LogContext:
    """Get current logging context."""
    stack = _context_stack.get()
    if stack:
        return stack[-1]
    return LogContext()


@contextmanager
def log_context(**kwargs):
    """
    Context manager for adding logging context.

    Args:
        **kwargs: Context fields to add

    Example:
        with log_context(endpoint="checkz", request_path="/checkz"):
            logger.info("Rendering check report")
    """
    # Merge with parent context
    parent = get_current_context()
    new_context = LogContext(
        endpoint=kwargs.get("endpoint", parent.endpoint),
        request_path=kwargs.get("request_path", parent.request_path),
        client_host=kwargs.get("client_host", parent.client_host),
        check_name=kwargs.get("check_name", parent.check_name),
        component=kwargs.get("component", parent.component),
        extra={**parent.extra, **kwargs.get("extra", {})},
    )

    token = _context_stack.set(_context_stack.get() + (new_context,))
    try:
        yield new_context
    finally:
        _context_stack.reset(token)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON for easy parsing by log aggregators.
    """

    def __init__(
        self,
        include_timestamp: bool = True,
        include_level: bool = True,
        include_logger: bool = True,
        include_context: bool = True,
    ):
        super().__init__()
        self.include_timestamp = include_timestamp
        self.include_level = include_level
        self.include_logger = include_logger
        self.include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {}

        if self.include_timestamp:
            log_data["timestamp"] = _utc_now().isoformat().replace("+00:00", "Z")

        if self.include_level:
            log_data["level"] = record.levelname

        if self.include_logger:
            log_data["logger"] = record.name

        log_data["message"] = record.getMessage()

        if self.include_context:
            context_dict = get_current_context().to_dict()
            if context_dict:
                log_data["context"] = context_dict

        # Extra fields attached by ContextLogger
        if hasattr(record, "extra") and record.extra:
            log_data["data"] = record.extra

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["source"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """
    Human-readable formatter for development.

    Includes context fields inline for easy reading.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for human reading."""
        timestamp = _utc_now().strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)

        context = get_current_context()
        context_parts = []
        if context.endpoint:
            context_parts.append(f"endpoint={context.endpoint}")
        if context.client_host:
            context_parts.append(f"client={context.client_host}")
        if context.check_name:
            context_parts.append(f"check={context.check_name}")

        context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

        message = record.getMessage()

        extra_str = ""
        if hasattr(record, "extra") and record.extra:
            extra_str = f" {record.extra}"

        result = f"{timestamp} {level} {record.name}{context_str}: {message}{extra_str}"

        if record.exc_info:
            result += f"\n{self.formatException(record.exc_info)}"

        return result


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that includes context in log records.

    Automatically includes the current log_context() fields in all messages.
    """

    def process(self, msg, kwargs):
        """Process log record to include context."""
        extra = dict(kwargs.get("extra", {}))
        extra.update(get_current_context().to_dict())
        if self.extra and self.extra.get("component"):
            extra.setdefault("component", self.extra["component"])

        # Stored as a single attribute for formatter access
        kwargs["extra"] = {"extra": extra}

        return msg, kwargs


def get_logger(
    name: str,
    component: Optional[ComponentType] = None,
) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (e.g., "monitoring.middleware")
        component: Optional component type for categorization

    Returns:
        ContextLogger instance
    """
    base_logger = logging.getLogger(name)
    return ContextLogger(
        base_logger,
        {"component": component.value if component else None},
    )


def configure_logging(
    level: Union[str, int] = "INFO",
    json_output: bool = False,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Use JSON format (for production)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_output or os.getenv("LOG_FORMAT", "").lower() == "json":
        formatter = StructuredFormatter(include_context=True)
    else:
        formatter = HumanFormatter()

    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root.addHandler(handler)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ComponentType",
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
]
