"""
Mesocycles: multi-week training blocks run against a plan.
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from .base import TimestampedEntity


class MesocycleStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True, kw_only=True)
class Mesocycle(TimestampedEntity):
    plan_id: str
    start_date: str
    current_week: int
    status: MesocycleStatus

    @classmethod
    def from_document(cls, id: str, data: dict[str, Any]) -> "Mesocycle":
        entity = super().from_document(id, data)
        return dataclasses.replace(entity, status=MesocycleStatus(entity.status))


class CreateMesocycleInput(BaseModel):
    """
    Only the plan and start date are caller-controlled; ``current_week``
    and ``status`` are always set by the repository.
    """

    plan_id: str
    start_date: str


class UpdateMesocycleInput(BaseModel):
    current_week: int | None = Field(default=None, ge=1)
    status: MesocycleStatus | None = None
