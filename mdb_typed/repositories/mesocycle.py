"""
Mesocycle repository.
"""

from collections.abc import Callable
from typing import Any

from motor.motor_asyncio import AsyncIOMotorCollection

from ..constants import DESCENDING, INITIAL_MESOCYCLE_WEEK
from ..decoding import parse_mesocycle
from ..models import CreateMesocycleInput, Mesocycle, MesocycleStatus, UpdateMesocycleInput
from ..observability import timed_operation
from ..utils import utc_now_iso
from .base import DocumentRepository


class MesocycleRepository(
    DocumentRepository[Mesocycle, CreateMesocycleInput, UpdateMesocycleInput]
):
    """
    All listings are newest first by ``start_date``. Documents with a status
    outside the mesocycle status set are never returned.
    """

    entity_type = Mesocycle
    default_sort = [("start_date", DESCENDING)]

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
        clock: Callable[[], str] = utc_now_iso,
    ):
        super().__init__(collection, decoder=parse_mesocycle, clock=clock)

    def _prepare_create(self, data: CreateMesocycleInput) -> dict[str, Any]:
        return {
            **super()._prepare_create(data),
            "current_week": INITIAL_MESOCYCLE_WEEK,
            "status": MesocycleStatus.PENDING.value,
        }

    @timed_operation("find_by_plan_id")
    async def find_by_plan_id(self, plan_id: str) -> list[Mesocycle]:
        return await self._query({"plan_id": plan_id}, self.default_sort)

    @timed_operation("find_active")
    async def find_active(self) -> list[Mesocycle]:
        return await self._query({"status": MesocycleStatus.ACTIVE.value}, self.default_sort)
