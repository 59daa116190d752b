"""
Plan day repository.
"""

from collections.abc import Callable

from motor.motor_asyncio import AsyncIOMotorCollection

from ..constants import ASCENDING
from ..decoding import parse_plan_day
from ..models import CreatePlanDayInput, PlanDay, UpdatePlanDayInput
from ..observability import timed_operation
from ..utils import utc_now_iso
from .base import DocumentRepository


class PlanDayRepository(DocumentRepository[PlanDay, CreatePlanDayInput, UpdatePlanDayInput]):
    """
    Plan days have no timestamps, so updates do not stamp ``updated_at``.
    Documents whose ``day_of_week`` is outside 0..6 are never returned.
    """

    entity_type = PlanDay
    default_sort = [("plan_id", ASCENDING), ("sort_order", ASCENDING)]
    include_timestamp_on_update = False

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
        clock: Callable[[], str] = utc_now_iso,
    ):
        super().__init__(collection, decoder=parse_plan_day, clock=clock)

    @timed_operation("find_by_plan_id")
    async def find_by_plan_id(self, plan_id: str) -> list[PlanDay]:
        return await self._query({"plan_id": plan_id}, [("sort_order", ASCENDING)])
