"""
Stretch region repository.

Regions are keyed by their region name (``"neck"``, ``"back"``, ...), not by
a generated id, which makes both ``create`` and ``seed`` idempotent.
"""

from collections.abc import Callable, Sequence
from typing import Any

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReplaceOne

from ..constants import ASCENDING
from ..decoding import parse_stretch_region
from ..models import (
    BodyRegion,
    CreateStretchRegionInput,
    StretchRegion,
    UpdateStretchRegionInput,
)
from ..observability import get_logger, timed_operation
from ..utils import utc_now_iso
from .base import DocumentRepository

logger = get_logger(__name__)


class StretchRepository(
    DocumentRepository[StretchRegion, CreateStretchRegionInput, UpdateStretchRegionInput]
):
    """
    A region whose embedded stretches do not all decode is dropped as a
    whole; partially decoded regions are never returned.
    """

    entity_type = StretchRegion
    default_sort = [("region", ASCENDING)]

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
        clock: Callable[[], str] = utc_now_iso,
    ):
        super().__init__(collection, decoder=parse_stretch_region, clock=clock)

    def _prepare_create(self, data: CreateStretchRegionInput) -> dict[str, Any]:
        document = data.model_dump(mode="json", by_alias=True)
        document["stretches"] = [
            stretch.model_dump(mode="json", exclude_none=True) for stretch in data.stretches
        ]
        return document

    @timed_operation("create")
    async def create(self, data: CreateStretchRegionInput) -> StretchRegion:
        """Write (or overwrite) the document for ``data.region``."""
        document = {**self._prepare_create(data), **self._creation_timestamps()}
        region_key = data.region.value

        await self._collection.replace_one({"_id": region_key}, document, upsert=True)
        return StretchRegion.from_document(region_key, document)

    @timed_operation("find_by_region")
    async def find_by_region(self, region: BodyRegion | str) -> StretchRegion | None:
        key = region.value if isinstance(region, BodyRegion) else region
        return await self.find_by_id(key)

    @timed_operation("seed")
    async def seed(self, regions: Sequence[CreateStretchRegionInput]) -> int:
        """
        Upsert one document per region in a single ordered bulk write.

        Every region gets the same ``created_at`` / ``updated_at``. Each
        document is replaced, not merged. An empty input writes nothing.

        Returns:
            Number of regions written
        """
        if not regions:
            return 0

        now = self._clock()
        operations = [
            ReplaceOne(
                {"_id": region.region.value},
                {**self._prepare_create(region), "created_at": now, "updated_at": now},
                upsert=True,
            )
            for region in regions
        ]
        await self._collection.bulk_write(operations, ordered=True)

        logger.info(f"Seeded {len(operations)} stretch region(s) into '{self.collection_name}'")
        return len(operations)
