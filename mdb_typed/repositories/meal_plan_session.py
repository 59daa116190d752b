"""
Meal-plan session repository.

History is appended with ``$addToSet``/``$each`` at the store, never by
reading the array, extending it locally and writing it back: concurrent
appends to the same session therefore all land. The plan is always
replaced whole.
"""

import dataclasses
from collections.abc import Sequence
from typing import Any

from ..constants import DESCENDING
from ..models import (
    ConversationMessage,
    CreateMealPlanSessionInput,
    MealPlanEntry,
    MealPlanSession,
    UpdateMealPlanSessionInput,
)
from ..observability import get_logger, timed_operation
from ..utils import to_store_id
from .base import DocumentRepository

logger = get_logger(__name__)


def _to_documents(items: Sequence[Any]) -> list[dict[str, Any]]:
    return [dataclasses.asdict(item) for item in items]


class MealPlanSessionRepository(
    DocumentRepository[MealPlanSession, CreateMealPlanSessionInput, UpdateMealPlanSessionInput]
):
    entity_type = MealPlanSession
    default_sort = [("created_at", DESCENDING)]

    @timed_operation("append_history")
    async def append_history(
        self, session_id: str, message: ConversationMessage
    ) -> MealPlanSession | None:
        """
        Append one message to the session history.

        Returns None without writing when the session does not exist. The
        existence check and the append are separate requests: a delete that
        lands between them is not detected here.
        """
        existing = await self.find_by_id(session_id)
        if existing is None:
            return None

        await self._collection.update_one(
            {"_id": to_store_id(session_id)},
            {
                "$addToSet": {"history": {"$each": _to_documents([message])}},
                "$set": {"updated_at": self._clock()},
            },
        )
        return await self.find_by_id(session_id)

    @timed_operation("update_plan")
    async def update_plan(
        self, session_id: str, entries: Sequence[MealPlanEntry]
    ) -> MealPlanSession | None:
        """Replace the whole plan. Returns None if the session does not exist."""
        existing = await self.find_by_id(session_id)
        if existing is None:
            return None

        await self._collection.update_one(
            {"_id": to_store_id(session_id)},
            {"$set": {"plan": _to_documents(entries), "updated_at": self._clock()}},
        )
        return await self.find_by_id(session_id)

    @timed_operation("apply_critique_updates")
    async def apply_critique_updates(
        self,
        session_id: str,
        user_message: ConversationMessage,
        assistant_message: ConversationMessage,
        updated_plan: Sequence[MealPlanEntry],
    ) -> bool:
        """
        Record one critique round in a single update request.

        Appends the user message then the assistant message to the history
        and replaces the plan. Both changes land in the same document write,
        so no reader can observe one without the other.

        Returns:
            True if the session existed and was updated
        """
        result = await self._collection.update_one(
            {"_id": to_store_id(session_id)},
            {
                "$addToSet": {
                    "history": {"$each": _to_documents([user_message, assistant_message])}
                },
                "$set": {"plan": _to_documents(updated_plan), "updated_at": self._clock()},
            },
        )
        if result.matched_count == 0:
            logger.warning(
                f"Critique update for missing meal plan session '{session_id}' "
                f"in '{self.collection_name}'"
            )
            return False
        return True
