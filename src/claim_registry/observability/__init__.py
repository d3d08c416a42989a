"""Observability module: structured logging and operation metrics."""

from claim_registry.observability.logger import (
    ClaimLogger,
    claim_context,
    get_logger,
)
from claim_registry.observability.metrics import (
    RegistryMetrics,
    get_metrics,
    reset_metrics,
)

__all__ = [
    # Logger
    "ClaimLogger",
    "get_logger",
    "claim_context",
    # Metrics
    "RegistryMetrics",
    "get_metrics",
    "reset_metrics",
]
