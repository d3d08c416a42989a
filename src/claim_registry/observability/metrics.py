"""Outcome and latency metrics per registry operation.

This module provides:
- RegistryMetrics: Aggregates call outcomes per operation
- Error-code breakdown of failed calls
- Latency percentiles over a bounded window of recent calls
- Export to JSON
"""

import json
import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Any

from claim_registry.config.settings import get_metrics_window

logger = logging.getLogger(__name__)


@dataclass
class _OperationStats:
    """Running counters for one operation plus a window of recent latencies."""

    window: int
    total_calls: int = 0
    successful_calls: int = 0
    failed_calls: int = 0
    errors_by_code: dict[int, int] = field(default_factory=dict)
    latency_total_ms: float = 0.0
    recent_latencies: deque = field(init=False)

    def __post_init__(self):
        self.recent_latencies = deque(maxlen=self.window)


@dataclass
class OperationSummary:
    """Summary of metrics for one operation."""

    operation: str
    total_calls: int
    successful_calls: int
    failed_calls: int
    errors_by_code: dict[int, int]
    avg_latency_ms: float
    p50_latency_ms: float
    p95_latency_ms: float
    p99_latency_ms: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation,
            "total_calls": self.total_calls,
            "successful_calls": self.successful_calls,
            "failed_calls": self.failed_calls,
            "errors_by_code": {str(k): v for k, v in self.errors_by_code.items()},
            "avg_latency_ms": self.avg_latency_ms,
            "p50_latency_ms": self.p50_latency_ms,
            "p95_latency_ms": self.p95_latency_ms,
            "p99_latency_ms": self.p99_latency_ms,
        }


def _percentile(values: list[float], p: float) -> float:
    """Calculate the p-th percentile of values."""
    if not values:
        return 0.0
    sorted_values = sorted(values)
    k = (len(sorted_values) - 1) * p / 100
    f = int(k)
    c = f + 1
    if c >= len(sorted_values):
        return sorted_values[-1]
    return sorted_values[f] + (k - f) * (sorted_values[c] - sorted_values[f])


class RegistryMetrics:
    """Thread-safe collector of registry operation outcomes.

    Counts are kept for the lifetime of the collector. Percentiles cover only
    the most recent ``window`` calls of each operation.
    """

    def __init__(self, window: int | None = None):
        self._lock = threading.RLock()
        self._window = window if window is not None else get_metrics_window()
        self._stats: dict[str, _OperationStats] = {}

    @property
    def window(self) -> int:
        return self._window

    def record_call(
        self,
        operation: str,
        latency_ms: float = 0.0,
        status: str = "success",
        error_code: int | None = None,
        claim_key: str | None = None,
    ) -> None:
        """Record one operation call.

        Args:
            operation: Registry operation name (e.g. "submit_claim")
            latency_ms: Wall time spent in the call
            status: "success" or "error"
            error_code: Numeric error code when status is "error"
            claim_key: Claim key the call targeted, if any (logged only)
        """
        with self._lock:
            stats = self._stats.get(operation)
            if stats is None:
                stats = self._stats[operation] = _OperationStats(window=self._window)
            stats.total_calls += 1
            if status == "error":
                stats.failed_calls += 1
                if error_code is not None:
                    stats.errors_by_code[error_code] = (
                        stats.errors_by_code.get(error_code, 0) + 1
                    )
            else:
                stats.successful_calls += 1
            stats.latency_total_ms += latency_ms
            stats.recent_latencies.append(latency_ms)

        logger.debug(
            "[operation_metric] operation=%s, key=%s, status=%s, error_code=%s, latency=%.2fms",
            operation,
            claim_key,
            status,
            error_code,
            latency_ms,
        )

    def get_operation_summary(self, operation: str) -> OperationSummary | None:
        with self._lock:
            stats = self._stats.get(operation)
            if stats is None:
                return None
            total = stats.total_calls
            successful = stats.successful_calls
            failed = stats.failed_calls
            errors_by_code = dict(stats.errors_by_code)
            latency_total = stats.latency_total_ms
            latencies = list(stats.recent_latencies)

        return OperationSummary(
            operation=operation,
            total_calls=total,
            successful_calls=successful,
            failed_calls=failed,
            errors_by_code=errors_by_code,
            avg_latency_ms=latency_total / total,
            p50_latency_ms=_percentile(latencies, 50),
            p95_latency_ms=_percentile(latencies, 95),
            p99_latency_ms=_percentile(latencies, 99),
        )

    def get_all_summaries(self) -> list[OperationSummary]:
        with self._lock:
            operations = sorted(self._stats)
        return [s for s in (self.get_operation_summary(op) for op in operations) if s]

    def get_global_stats(self) -> dict[str, Any]:
        """Totals across all operations."""
        summaries = self.get_all_summaries()
        total = sum(s.total_calls for s in summaries)
        failed = sum(s.failed_calls for s in summaries)
        return {
            "total_calls": total,
            "successful_calls": total - failed,
            "failed_calls": failed,
            "failure_rate": failed / total if total else 0.0,
        }

    def export_json(self, operation: str | None = None) -> str:
        """Export metrics as JSON, for one operation or for all."""
        if operation:
            summary = self.get_operation_summary(operation)
            if not summary:
                return json.dumps({"error": f"No metrics for operation: {operation}"})
            return json.dumps(summary.to_dict(), indent=2)
        return json.dumps(
            {
                "global_stats": self.get_global_stats(),
                "operations": [s.to_dict() for s in self.get_all_summaries()],
            },
            indent=2,
        )


# Global metrics instance
_global_metrics: RegistryMetrics | None = None
_metrics_lock = threading.Lock()


def get_metrics() -> RegistryMetrics:
    """Get the global RegistryMetrics instance."""
    global _global_metrics
    with _metrics_lock:
        if _global_metrics is None:
            _global_metrics = RegistryMetrics()
        return _global_metrics


def reset_metrics() -> None:
    """Drop the global instance so the next get_metrics() starts empty."""
    global _global_metrics
    with _metrics_lock:
        _global_metrics = None
