"""
MDB_TYPED - typed repositories over MongoDB

Generic CRUD repositories with per-entity decoding: documents that do not
match their entity's shape are left out instead of crashing a listing.
"""

from .config import StoreConfig
from .core import ConnectionManager, seed_stretch_catalog
from .exceptions import (
    ConfigurationError,
    InitializationError,
    ManifestValidationError,
    MdbTypedError,
)
from .repositories import (
    BarcodeRepository,
    DocumentRepository,
    MealPlanSessionRepository,
    MesocycleRepository,
    PlanDayRepository,
    Repositories,
    StretchRepository,
)

__version__ = "0.1.0"

__all__ = [
    # Setup
    "StoreConfig",
    "ConnectionManager",
    "Repositories",
    # Repositories
    "DocumentRepository",
    "BarcodeRepository",
    "PlanDayRepository",
    "MesocycleRepository",
    "MealPlanSessionRepository",
    "StretchRepository",
    # Seeding
    "seed_stretch_catalog",
    # Errors
    "MdbTypedError",
    "InitializationError",
    "ConfigurationError",
    "ManifestValidationError",
]
