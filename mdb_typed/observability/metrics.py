"""
Repository operation metrics for MDB_TYPED.

Every timed repository call is recorded under ``<collection>.<operation>``
(``"mesocycles.find_active"``). Besides latency and failures, the collector
counts documents that were dropped because they did not decode, which is
the signal that a collection holds data the entity no longer accepts.
"""

import functools
import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, TypeVar

from .logging import log_operation, store_context

logger = logging.getLogger(__name__)

R = TypeVar("R")

DEFAULT_MAX_TRACKED_OPERATIONS = 1000


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class OperationMetrics:
    operation_name: str
    count: int = 0
    error_count: int = 0
    total_duration_ms: float = 0.0
    min_duration_ms: float | None = None
    max_duration_ms: float = 0.0
    last_execution: datetime | None = None

    @property
    def avg_duration_ms(self) -> float:
        return self.total_duration_ms / self.count if self.count else 0.0

    @property
    def error_rate(self) -> float:
        """Share of failed calls, in percent."""
        return 100.0 * self.error_count / self.count if self.count else 0.0

    def record(self, duration_ms: float, success: bool = True) -> None:
        self.count += 1
        self.error_count += 0 if success else 1
        self.total_duration_ms += duration_ms
        if self.min_duration_ms is None or duration_ms < self.min_duration_ms:
            self.min_duration_ms = duration_ms
        self.max_duration_ms = max(self.max_duration_ms, duration_ms)
        self.last_execution = _utc_now()

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation_name,
            "count": self.count,
            "error_count": self.error_count,
            "error_rate_percent": round(self.error_rate, 2),
            "avg_duration_ms": round(self.avg_duration_ms, 2),
            "min_duration_ms": round(self.min_duration_ms or 0.0, 2),
            "max_duration_ms": round(self.max_duration_ms, 2),
            "last_execution": self.last_execution.isoformat() if self.last_execution else None,
        }


@dataclass
class _CollectorState:
    operations: "OrderedDict[str, OperationMetrics]" = field(default_factory=OrderedDict)
    dropped_documents: dict[str, int] = field(default_factory=dict)


class MetricsCollector:
    """
    Thread-safe, bounded store of operation metrics.

    When more than ``max_metrics`` distinct keys have been seen, the least
    recently recorded key is evicted.
    """

    def __init__(self, max_metrics: int = DEFAULT_MAX_TRACKED_OPERATIONS):
        self._state = _CollectorState()
        self._lock = threading.Lock()
        self._max_metrics = max_metrics

    def record_operation(
        self, operation_name: str, duration_ms: float, success: bool = True, **tags: Any
    ) -> None:
        """
        Args:
            operation_name: Qualified name, e.g. "stretches.seed"
            duration_ms: Elapsed time in milliseconds
            success: False if the call raised
            **tags: Split the metric further, e.g. ``env="dev"``
        """
        key = operation_name
        if tags:
            key += "[" + ",".join(f"{k}={tags[k]}" for k in sorted(tags)) + "]"

        with self._lock:
            operations = self._state.operations
            metric = operations.pop(key, None)
            if metric is None:
                metric = OperationMetrics(operation_name=operation_name)
                while len(operations) >= self._max_metrics:
                    operations.popitem(last=False)
            operations[key] = metric
            metric.record(duration_ms, success)

    def record_dropped(self, collection_name: str, count: int = 1) -> None:
        """Count documents left out of a result because they did not decode."""
        with self._lock:
            dropped = self._state.dropped_documents
            dropped[collection_name] = dropped.get(collection_name, 0) + count

    def get_dropped(self, collection_name: str) -> int:
        with self._lock:
            return self._state.dropped_documents.get(collection_name, 0)

    def get_metrics(self, operation_name: str | None = None) -> dict[str, Any]:
        """
        Snapshot of recorded metrics, optionally limited to keys starting
        with ``operation_name`` (pass a collection name to get all of its
        operations).
        """
        with self._lock:
            selected = {
                key: metric.to_dict()
                for key, metric in self._state.operations.items()
                if operation_name is None or key.startswith(operation_name)
            }
            dropped = dict(self._state.dropped_documents)
            tracked = len(self._state.operations)

        return {
            "timestamp": _utc_now().isoformat(),
            "metrics": selected,
            "dropped_documents": dropped,
            "total_operations": tracked,
        }

    def get_operation_count(self, operation_name: str) -> int:
        """Calls recorded for ``operation_name`` across all tag combinations."""
        with self._lock:
            return sum(
                m.count
                for m in self._state.operations.values()
                if m.operation_name == operation_name
            )

    def reset(self) -> None:
        with self._lock:
            self._state = _CollectorState()


_metrics_collector = MetricsCollector()


def get_metrics_collector() -> MetricsCollector:
    return _metrics_collector


def record_operation(
    operation_name: str, duration_ms: float, success: bool = True, **tags: Any
) -> None:
    _metrics_collector.record_operation(operation_name, duration_ms, success, **tags)


def record_dropped(collection_name: str, count: int = 1) -> None:
    _metrics_collector.record_dropped(collection_name, count)


def timed_operation(
    operation: str,
) -> Callable[[Callable[..., Awaitable[R]]], Callable[..., Awaitable[R]]]:
    """
    Decorator for repository coroutine methods.

    Records ``<self.collection_name>.<operation>``, so a base-class method
    is reported separately for each collection, and binds the collection
    name into the logging context for the duration of the call. Failures
    are logged at WARNING and re-raised.

    Usage:
        @timed_operation("find_by_id")
        async def find_by_id(self, id: str) -> E | None:
            ...
    """

    def decorator(func: Callable[..., Awaitable[R]]) -> Callable[..., Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(self: Any, *args: Any, **kwargs: Any) -> R:
            collection_name = getattr(self, "collection_name", type(self).__name__)
            name = f"{collection_name}.{operation}"
            started = time.perf_counter()
            try:
                with store_context(collection_name=collection_name):
                    result = await func(self, *args, **kwargs)
            except Exception:
                elapsed_ms = (time.perf_counter() - started) * 1000
                record_operation(name, elapsed_ms, success=False)
                log_operation(
                    logger, name, level=logging.WARNING, success=False, duration_ms=elapsed_ms
                )
                raise
            record_operation(name, (time.perf_counter() - started) * 1000)
            return result

        return wrapper

    return decorator
