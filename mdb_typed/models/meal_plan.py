"""
Meal-plan sessions: a generated weekly plan plus the conversation that
refined it.
"""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from .base import TimestampedEntity, known_fields


@dataclass(frozen=True, kw_only=True)
class MealPlanEntry:
    """One slot of the plan. ``meal_id`` is None for an intentionally empty slot."""

    day_index: int
    meal_type: str
    meal_id: str | None
    meal_name: str | None


@dataclass(frozen=True, kw_only=True)
class MealSnapshot:
    """A meal as it looked when the session was created."""

    id: str
    name: str
    meal_type: str
    effort: int
    has_red_meat: bool
    prep_ahead: bool
    url: str
    last_planned: str | None


@dataclass(frozen=True, kw_only=True)
class ConversationMessage:
    role: str
    content: str
    operations: list[dict[str, Any]] | None = None


@dataclass(frozen=True, kw_only=True)
class MealPlanSession(TimestampedEntity):
    """
    ``history`` is append-only and ``plan`` is only ever replaced whole;
    neither is merged field by field.
    """

    plan: list[MealPlanEntry] = field(default_factory=list)
    meals_snapshot: list[MealSnapshot] = field(default_factory=list)
    history: list[ConversationMessage] = field(default_factory=list)
    is_finalized: bool

    @classmethod
    def from_document(cls, id: str, data: dict[str, Any]) -> "MealPlanSession":
        """Embedded records keep only their known keys, like the session itself."""
        return cls(
            id=id,
            plan=[
                MealPlanEntry(**known_fields(MealPlanEntry, entry))
                for entry in data.get("plan", [])
            ],
            meals_snapshot=[
                MealSnapshot(**known_fields(MealSnapshot, meal))
                for meal in data.get("meals_snapshot", [])
            ],
            history=[
                ConversationMessage(**known_fields(ConversationMessage, message))
                for message in data.get("history", [])
            ],
            is_finalized=data["is_finalized"],
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )


class CreateMealPlanSessionInput(BaseModel):
    plan: list[MealPlanEntry]
    meals_snapshot: list[MealSnapshot]
    history: list[ConversationMessage]
    is_finalized: bool = False


class UpdateMealPlanSessionInput(BaseModel):
    plan: list[MealPlanEntry] | None = None
    meals_snapshot: list[MealSnapshot] | None = None
    history: list[ConversationMessage] | None = None
    is_finalized: bool | None = None
