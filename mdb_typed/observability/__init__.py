"""
Observability components.

Provides contextual logging, operation metrics and a store health check.
"""

from .health import HealthCheckResult, HealthStatus, check_store_health
from .logging import (
    ContextualLoggerAdapter,
    clear_correlation_id,
    clear_store_context,
    get_correlation_id,
    get_logger,
    get_logging_context,
    log_operation,
    set_correlation_id,
    set_store_context,
    store_context,
)
from .metrics import (
    MetricsCollector,
    OperationMetrics,
    get_metrics_collector,
    record_dropped,
    record_operation,
    timed_operation,
)

__all__ = [
    # Metrics
    "MetricsCollector",
    "OperationMetrics",
    "get_metrics_collector",
    "record_operation",
    "record_dropped",
    "timed_operation",
    # Logging
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
    "set_store_context",
    "store_context",
    "clear_store_context",
    "get_logging_context",
    "ContextualLoggerAdapter",
    "get_logger",
    "log_operation",
    # Health
    "HealthStatus",
    "HealthCheckResult",
    "check_store_health",
]
