"""
Base classes for domain entities.

Entities are frozen dataclasses: once decoded they are plain immutable
values. Changing one means writing to the store and reading it back.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, TypeVar

E = TypeVar("E", bound="Entity")


def known_fields(record_type: type, data: dict[str, Any]) -> dict[str, Any]:
    """Keep only the keys of ``data`` that are fields of the dataclass ``record_type``."""
    field_names = {f.name for f in dataclasses.fields(record_type)}
    return {k: v for k, v in data.items() if k in field_names}


@dataclass(frozen=True, kw_only=True)
class Entity:
    """
    Base class for domain entities.

    ``id`` is always the store document key, never a field of the stored
    record.

    Example:
        @dataclass(frozen=True, kw_only=True)
        class PlanDay(Entity):
            plan_id: str
            name: str
    """

    id: str

    @classmethod
    def required_fields(cls) -> frozenset[str]:
        """Stored field names that have no default and must be present."""
        return frozenset(
            f.name
            for f in dataclasses.fields(cls)
            if f.name != "id"
            and f.default is dataclasses.MISSING
            and f.default_factory is dataclasses.MISSING
        )

    @classmethod
    def from_document(cls: type[E], id: str, data: dict[str, Any]) -> E:
        """
        Build an entity from stored fields without validating them.

        Unknown fields are ignored. Subclasses with embedded records or
        renamed stored fields override this.
        """
        fields = known_fields(cls, data)
        fields.pop("id", None)
        return cls(id=id, **fields)


@dataclass(frozen=True, kw_only=True)
class TimestampedEntity(Entity):
    """Entity carrying server-assigned ``created_at`` / ``updated_at`` stamps."""

    created_at: str
    updated_at: str
