"""
Entity decoders.

A decoder turns ``(document id, raw record)`` into a typed entity, or
``None`` when the record is undecodable. Decoders are pure and never
raise for bad data. Any failed required field fails the whole record:
nothing downstream ever sees a half-built entity.
"""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from ..constants import MAX_DAY_OF_WEEK, MIN_DAY_OF_WEEK
from ..models import (
    BodyRegion,
    Entity,
    Mesocycle,
    MesocycleStatus,
    PlanDay,
    StretchDefinition,
    StretchRegion,
)
from .readers import (
    INVALID,
    is_record,
    read_boolean,
    read_enum,
    read_integer,
    read_nullable_string,
    read_string,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)

Decoder = Callable[[str, Any], E | None]


def trusting_decoder(entity_type: type[E]) -> Decoder[E]:
    """
    Default decode strategy: copy stored fields straight into ``entity_type``.

    Field types are taken on trust. The record must still be a map that
    carries every required field; anything the entity constructor cannot
    accept makes the record undecodable rather than raising.
    """
    required = entity_type.required_fields()

    def decode(id: str, raw: Any) -> E | None:
        if not is_record(raw):
            return None
        if not required.issubset(raw.keys()):
            return None
        try:
            return entity_type.from_document(id, dict(raw))
        except (TypeError, ValueError, KeyError) as e:
            logger.debug(f"Could not build {entity_type.__name__} from document {id}: {e}")
            return None

    return decode


def parse_plan_day(id: str, raw: Any) -> PlanDay | None:
    """Reject any ``day_of_week`` that is not an integer in [0, 6]."""
    if not is_record(raw):
        return None

    plan_id = read_string(raw, "plan_id")
    day_of_week = read_integer(raw, "day_of_week")
    name = read_string(raw, "name")
    sort_order = read_integer(raw, "sort_order")

    if INVALID in (plan_id, day_of_week, name, sort_order):
        return None
    if not MIN_DAY_OF_WEEK <= day_of_week <= MAX_DAY_OF_WEEK:
        return None

    return PlanDay(
        id=id,
        plan_id=plan_id,
        day_of_week=day_of_week,
        name=name,
        sort_order=sort_order,
    )


def parse_mesocycle(id: str, raw: Any) -> Mesocycle | None:
    """Reject any ``status`` outside the closed mesocycle status set."""
    if not is_record(raw):
        return None

    plan_id = read_string(raw, "plan_id")
    start_date = read_string(raw, "start_date")
    current_week = read_integer(raw, "current_week")
    status = read_enum(raw, "status", MesocycleStatus)
    created_at = read_string(raw, "created_at")
    updated_at = read_string(raw, "updated_at")

    if INVALID in (plan_id, start_date, current_week, status, created_at, updated_at):
        return None

    return Mesocycle(
        id=id,
        plan_id=plan_id,
        start_date=start_date,
        current_week=current_week,
        status=status,
        created_at=created_at,
        updated_at=updated_at,
    )


def parse_stretch_definition(raw: Any) -> StretchDefinition | None:
    if not is_record(raw):
        return None

    stretch_id = read_string(raw, "id")
    name = read_string(raw, "name")
    description = read_string(raw, "description")
    bilateral = read_boolean(raw, "bilateral")
    # Seeded catalogs omit images entirely.
    image = read_nullable_string(raw, "image", absent_is_null=True)

    if INVALID in (stretch_id, name, description, bilateral, image):
        return None

    return StretchDefinition(
        id=stretch_id,
        name=name,
        description=description,
        bilateral=bilateral,
        image=image,
    )


def parse_stretch_region(id: str, raw: Any) -> StretchRegion | None:
    """
    All or nothing over the embedded stretches: one bad stretch makes the
    whole region undecodable.
    """
    if not is_record(raw):
        return None

    region = read_enum(raw, "region", BodyRegion)
    display_name = read_string(raw, "displayName")
    icon_name = read_string(raw, "iconName")
    created_at = read_string(raw, "created_at")
    updated_at = read_string(raw, "updated_at")
    stretches_raw = raw.get("stretches")

    if INVALID in (region, display_name, icon_name, created_at, updated_at):
        return None
    if not isinstance(stretches_raw, list):
        return None

    stretches: list[StretchDefinition] = []
    for stretch_raw in stretches_raw:
        stretch = parse_stretch_definition(stretch_raw)
        if stretch is None:
            return None
        stretches.append(stretch)

    return StretchRegion(
        id=id,
        region=region,
        display_name=display_name,
        icon_name=icon_name,
        stretches=stretches,
        created_at=created_at,
        updated_at=updated_at,
    )
