"""
Plan days: the weekday slots of a training plan.
"""

from dataclasses import dataclass

from pydantic import BaseModel, Field

from ..constants import MAX_DAY_OF_WEEK, MIN_DAY_OF_WEEK
from .base import Entity


@dataclass(frozen=True, kw_only=True)
class PlanDay(Entity):
    """
    A single day of a plan. ``day_of_week`` runs 0 (Sunday) to 6 (Saturday).

    Plan days carry no timestamps.
    """

    plan_id: str
    day_of_week: int
    name: str
    sort_order: int


class CreatePlanDayInput(BaseModel):
    plan_id: str
    day_of_week: int = Field(ge=MIN_DAY_OF_WEEK, le=MAX_DAY_OF_WEEK)
    name: str
    sort_order: int


class UpdatePlanDayInput(BaseModel):
    day_of_week: int | None = Field(default=None, ge=MIN_DAY_OF_WEEK, le=MAX_DAY_OF_WEEK)
    name: str | None = None
    sort_order: int | None = None
