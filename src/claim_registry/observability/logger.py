"""Structured logging with claim context for observability.

Registry operations run inside ``claim_context`` so every line they log carries
the claim key and operation name. Output is JSON or human-readable depending on
CLAIM_REGISTRY_LOG_FORMAT.
"""

import json
import logging
import os
import sys
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

# Thread-local storage for claim context
_context = threading.local()


def _get_claim_context() -> dict[str, Any]:
    """Get the current claim context from thread-local storage."""
    return getattr(_context, "claim_data", {})


def _set_claim_context(data: dict[str, Any]) -> None:
    _context.claim_data = data


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def __init__(self, include_timestamp: bool = True):
        super().__init__()
        self.include_timestamp = include_timestamp

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON with claim context."""
        log_data: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self.include_timestamp:
            log_data["timestamp"] = datetime.now(timezone.utc).isoformat()

        log_data.update(
            {k: v for k, v in _get_claim_context().items() if v is not None}
        )
        event = getattr(record, "extra_data", None)
        if event:
            log_data["data"] = event
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["source"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }
        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Human-readable formatter with a [key=..., op=...] prefix."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

        ctx = _get_claim_context()
        ctx_parts = []
        if ctx.get("claim_key"):
            ctx_parts.append(f"key={ctx['claim_key']}")
        if ctx.get("operation"):
            ctx_parts.append(f"op={ctx['operation']}")
        ctx_str = f" [{', '.join(ctx_parts)}]" if ctx_parts else ""

        return f"{timestamp} {record.levelname:8}{ctx_str} {record.name}: {record.getMessage()}"


class ClaimLogger(logging.LoggerAdapter):
    """Logger adapter whose ``log_event`` emits named registry events."""

    def __init__(self, logger: logging.Logger):
        super().__init__(logger, {})

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        # Keep per-call extras; the base adapter would replace them
        kwargs.setdefault("extra", {})
        return msg, kwargs

    def log_event(self, event: str, level: int = logging.INFO, **data: Any) -> None:
        """Log ``[event] k=v, ...`` with the data attached as ``extra_data``."""
        message = f"[{event}]"
        if data:
            message += " " + ", ".join(f"{k}={v}" for k, v in data.items())
        self.log(level, message, extra={"extra_data": {"event": event, **data}})


def get_logger(name: str, structured: bool | None = None) -> ClaimLogger:
    """Get a ClaimLogger instance.

    Args:
        name: Logger name (typically __name__)
        structured: If True, use JSON format. If False, use human-readable.
                   If None, use CLAIM_REGISTRY_LOG_FORMAT env var (default: human)

    Returns:
        ClaimLogger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        if structured is None:
            structured = os.environ.get("CLAIM_REGISTRY_LOG_FORMAT", "human").lower() == "json"

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter() if structured else HumanReadableFormatter())
        logger.addHandler(handler)

        log_level = os.environ.get("CLAIM_REGISTRY_LOG_LEVEL", "INFO").upper()
        logger.setLevel(getattr(logging, log_level, logging.INFO))

        # Prevent duplicate logs from propagating to parent handlers
        logger.propagate = False

    return ClaimLogger(logger)


@contextmanager
def claim_context(
    claim_key: str | None = None,
    operation: str | None = None,
    **extra: Any,
):
    """Set claim context on all logs within the block, restoring the outer one after.

    Usage:
        with claim_context(claim_key="policy=1/incident=1", operation="process_claim"):
            logger.log_event("claim_processing", claim_id=0)
    """
    old_context = _get_claim_context()
    _set_claim_context({"claim_key": claim_key, "operation": operation, **extra})
    try:
        yield
    finally:
        _set_claim_context(old_context)
