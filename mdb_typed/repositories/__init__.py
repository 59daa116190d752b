"""
MDB_TYPED repositories.

Typed CRUD over MongoDB collections with per-entity decoding of stored
documents.

Usage:
    from mdb_typed.repositories import Repositories

    repos = Repositories(db)
    days = await repos.plan_days.find_by_plan_id(plan_id)
"""

from .barcode import BarcodeRepository
from .base import DocumentRepository
from .meal_plan_session import MealPlanSessionRepository
from .mesocycle import MesocycleRepository
from .plan_day import PlanDayRepository
from .registry import Repositories
from .stretch import StretchRepository

__all__ = [
    "DocumentRepository",
    "BarcodeRepository",
    "PlanDayRepository",
    "MesocycleRepository",
    "MealPlanSessionRepository",
    "StretchRepository",
    "Repositories",
]
