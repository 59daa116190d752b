"""
Repository registry.

Builds every concrete repository from one explicitly supplied database
handle. Repositories are created lazily and cached for the registry's
lifetime; they hold no state besides their collection handle, so a single
registry can be shared by concurrent callers.
"""

from collections.abc import Callable
from functools import cached_property

from motor.motor_asyncio import AsyncIOMotorDatabase

from ..config import StoreConfig
from ..constants import (
    BARCODES_COLLECTION,
    MEAL_PLAN_SESSIONS_COLLECTION,
    MESOCYCLES_COLLECTION,
    PLAN_DAYS_COLLECTION,
    STRETCHES_COLLECTION,
)
from ..observability import get_logger
from ..utils import utc_now_iso
from .barcode import BarcodeRepository
from .meal_plan_session import MealPlanSessionRepository
from .mesocycle import MesocycleRepository
from .plan_day import PlanDayRepository
from .stretch import StretchRepository

logger = get_logger(__name__)


class Repositories:
    """
    Usage:
        manager = ConnectionManager.from_config(config)
        await manager.initialize()
        repos = Repositories(manager.mongo_db, collection_prefix=config.collection_prefix)

        active = await repos.mesocycles.find_active()
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        collection_prefix: str = "",
        clock: Callable[[], str] = utc_now_iso,
    ):
        """
        Args:
            db: Database handle
            collection_prefix: Prepended to every collection name (e.g. "dev_")
            clock: Timestamp source shared by all repositories
        """
        self._db = db
        self._collection_prefix = collection_prefix
        self._clock = clock

    @classmethod
    def from_config(
        cls,
        db: AsyncIOMotorDatabase,
        config: StoreConfig,
        clock: Callable[[], str] = utc_now_iso,
    ) -> "Repositories":
        return cls(db, collection_prefix=config.collection_prefix, clock=clock)

    def _collection(self, name: str):
        full_name = f"{self._collection_prefix}{name}"
        logger.debug(f"Binding repository to collection '{full_name}'")
        return self._db[full_name]

    @cached_property
    def barcodes(self) -> BarcodeRepository:
        return BarcodeRepository(self._collection(BARCODES_COLLECTION), clock=self._clock)

    @cached_property
    def plan_days(self) -> PlanDayRepository:
        return PlanDayRepository(self._collection(PLAN_DAYS_COLLECTION), clock=self._clock)

    @cached_property
    def mesocycles(self) -> MesocycleRepository:
        return MesocycleRepository(self._collection(MESOCYCLES_COLLECTION), clock=self._clock)

    @cached_property
    def meal_plan_sessions(self) -> MealPlanSessionRepository:
        return MealPlanSessionRepository(
            self._collection(MEAL_PLAN_SESSIONS_COLLECTION), clock=self._clock
        )

    @cached_property
    def stretches(self) -> StretchRepository:
        return StretchRepository(self._collection(STRETCHES_COLLECTION), clock=self._clock)
