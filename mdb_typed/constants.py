"""
Constants for MDB_TYPED.

Shared constants used across the codebase: connection defaults, collection
names and the closed vocabularies the decoders validate against.
"""

from typing import Final

# ============================================================================
# DATABASE CONSTANTS
# ============================================================================

# Connection pool defaults
DEFAULT_MAX_POOL_SIZE: Final[int] = 50
"""Default maximum MongoDB connection pool size."""

DEFAULT_MIN_POOL_SIZE: Final[int] = 10
"""Default minimum MongoDB connection pool size."""

DEFAULT_SERVER_SELECTION_TIMEOUT_MS: Final[int] = 5000
"""Default server selection timeout in milliseconds."""

MIN_SERVER_SELECTION_TIMEOUT_MS: Final[int] = 1000
"""Lowest accepted server selection timeout in milliseconds."""

DEFAULT_MAX_IDLE_TIME_MS: Final[int] = 45000
"""Default maximum idle time before closing connections (milliseconds)."""

DEFAULT_HEALTH_CHECK_TIMEOUT_SECONDS: Final[float] = 5.0
"""Default timeout for the store ping health check (seconds)."""

APP_NAME: Final[str] = "MDB_TYPED"
"""Application name reported to the MongoDB server."""

# ============================================================================
# COLLECTION NAMES
# ============================================================================

BARCODES_COLLECTION: Final[str] = "barcodes"
PLAN_DAYS_COLLECTION: Final[str] = "plan_days"
MESOCYCLES_COLLECTION: Final[str] = "mesocycles"
MEAL_PLAN_SESSIONS_COLLECTION: Final[str] = "meal_plan_sessions"
STRETCHES_COLLECTION: Final[str] = "stretches"

# ============================================================================
# ENTITY CONSTANTS
# ============================================================================

MIN_DAY_OF_WEEK: Final[int] = 0
MAX_DAY_OF_WEEK: Final[int] = 6

INITIAL_MESOCYCLE_WEEK: Final[int] = 1
"""Week number every new mesocycle starts at."""

DEFAULT_SORT_ORDER: Final[int] = 0

# Sort directions, matching pymongo.ASCENDING / pymongo.DESCENDING
ASCENDING: Final[int] = 1
DESCENDING: Final[int] = -1
