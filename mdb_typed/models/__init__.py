"""
Domain entities and their creation/update inputs.
"""

from .barcode import Barcode, BarcodeType, CreateBarcodeInput, UpdateBarcodeInput
from .base import Entity, TimestampedEntity
from .meal_plan import (
    ConversationMessage,
    CreateMealPlanSessionInput,
    MealPlanEntry,
    MealPlanSession,
    MealSnapshot,
    UpdateMealPlanSessionInput,
)
from .mesocycle import CreateMesocycleInput, Mesocycle, MesocycleStatus, UpdateMesocycleInput
from .plan_day import CreatePlanDayInput, PlanDay, UpdatePlanDayInput
from .stretch import (
    BodyRegion,
    CreateStretchRegionInput,
    StretchDefinition,
    StretchDefinitionInput,
    StretchRegion,
    UpdateStretchRegionInput,
)

__all__ = [
    "Entity",
    "TimestampedEntity",
    # Barcodes
    "Barcode",
    "BarcodeType",
    "CreateBarcodeInput",
    "UpdateBarcodeInput",
    # Plan days
    "PlanDay",
    "CreatePlanDayInput",
    "UpdatePlanDayInput",
    # Mesocycles
    "Mesocycle",
    "MesocycleStatus",
    "CreateMesocycleInput",
    "UpdateMesocycleInput",
    # Meal plans
    "MealPlanSession",
    "MealPlanEntry",
    "MealSnapshot",
    "ConversationMessage",
    "CreateMealPlanSessionInput",
    "UpdateMealPlanSessionInput",
    # Stretches
    "StretchRegion",
    "StretchDefinition",
    "BodyRegion",
    "StretchDefinitionInput",
    "CreateStretchRegionInput",
    "UpdateStretchRegionInput",
]
