"""
Store health check for MDB_TYPED.

A single ping against the server, bounded by a timeout. The result is a
value: an unreachable or unconfigured store is reported, not raised.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pymongo.errors import (
    ConnectionFailure,
    OperationFailure,
    ServerSelectionTimeoutError,
)

from ..constants import DEFAULT_HEALTH_CHECK_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

CHECK_NAME = "document_store"


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


@dataclass
class HealthCheckResult:
    status: HealthStatus
    message: str
    name: str = CHECK_NAME
    latency_ms: float | None = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def healthy(self) -> bool:
        return self.status is HealthStatus.HEALTHY

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "message": self.message,
            "latency_ms": self.latency_ms,
            "checked_at": self.checked_at.isoformat(),
        }


async def check_store_health(
    mongo_client: Any | None,
    timeout_seconds: float = DEFAULT_HEALTH_CHECK_TIMEOUT_SECONDS,
) -> HealthCheckResult:
    """
    Ping the store.

    Args:
        mongo_client: Connected ``AsyncIOMotorClient``, or None when the
            connection was never opened
        timeout_seconds: Upper bound for the ping round trip
    """
    if mongo_client is None:
        return HealthCheckResult(HealthStatus.UNHEALTHY, "Store connection is not open")

    started = time.perf_counter()
    try:
        await asyncio.wait_for(mongo_client.admin.command("ping"), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        logger.warning(f"Store ping exceeded {timeout_seconds}s")
        return HealthCheckResult(
            HealthStatus.UNHEALTHY, f"Ping timed out after {timeout_seconds}s"
        )
    except (ConnectionFailure, OperationFailure, ServerSelectionTimeoutError) as e:
        logger.warning(f"Store ping failed: {e}")
        return HealthCheckResult(HealthStatus.UNHEALTHY, f"Ping failed: {e}")

    latency_ms = round((time.perf_counter() - started) * 1000, 2)
    return HealthCheckResult(HealthStatus.HEALTHY, "Store reachable", latency_ms=latency_ms)
