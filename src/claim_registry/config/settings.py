"""Centralized configuration from environment variables with defaults."""

import os
from typing import Any

from dotenv import load_dotenv

load_dotenv()

DEFAULT_ADMIN = "ST1ADMIN"
DEFAULT_VERIFICATION_THRESHOLD = 2
DEFAULT_MAX_DISPUTE_REASON_LENGTH = 256
DEFAULT_METRICS_WINDOW = 1000


def _int(key: str, default: int) -> int:
    raw = os.environ.get(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _bool(key: str, default: bool) -> bool:
    raw = os.environ.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in ("true", "1", "yes")


# ---------------------------------------------------------------------------
# Disputes
# ---------------------------------------------------------------------------

def get_max_dispute_reason_length() -> int:
    """Longest dispute reason forwarded to the resolver; longer ones are truncated."""
    return _int("CLAIM_REGISTRY_MAX_DISPUTE_REASON", DEFAULT_MAX_DISPUTE_REASON_LENGTH)


# ---------------------------------------------------------------------------
# Audit trail and metrics
# ---------------------------------------------------------------------------

def get_audit_enabled() -> bool:
    """Whether create_registry attaches the SQLite audit trail (default: False)."""
    return _bool("CLAIM_REGISTRY_AUDIT_ENABLED", False)


def get_metrics_window() -> int:
    """Recent calls per operation kept for latency percentiles."""
    return max(1, _int("CLAIM_REGISTRY_METRICS_WINDOW", DEFAULT_METRICS_WINDOW))


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

def get_registry_config() -> dict[str, Any]:
    """Effective registry settings, read at call time."""
    return {
        "admin": os.environ.get("CLAIM_REGISTRY_ADMIN", DEFAULT_ADMIN),
        "verification_threshold": _int(
            "CLAIM_REGISTRY_VERIFICATION_THRESHOLD", DEFAULT_VERIFICATION_THRESHOLD
        ),
        "max_dispute_reason_length": get_max_dispute_reason_length(),
        "audit_enabled": get_audit_enabled(),
    }
