"""
Stretch regions: static reference data, one document per body region with
its stretches embedded.

Stored field names keep the mobile clients' camelCase (``displayName``,
``iconName``); attributes are snake_case.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .base import TimestampedEntity


class BodyRegion(str, Enum):
    NECK = "neck"
    SHOULDERS = "shoulders"
    BACK = "back"
    HIP_FLEXORS = "hip_flexors"
    GLUTES = "glutes"
    HAMSTRINGS = "hamstrings"
    QUADS = "quads"
    CALVES = "calves"


@dataclass(frozen=True, kw_only=True)
class StretchDefinition:
    id: str
    name: str
    description: str
    bilateral: bool
    image: str | None = None


@dataclass(frozen=True, kw_only=True)
class StretchRegion(TimestampedEntity):
    """The document key is the region key, so ``id == region.value``."""

    region: BodyRegion
    display_name: str
    icon_name: str
    stretches: list[StretchDefinition] = field(default_factory=list)

    @classmethod
    def from_document(cls, id: str, data: dict[str, Any]) -> "StretchRegion":
        return cls(
            id=id,
            region=BodyRegion(data["region"]),
            display_name=data["displayName"],
            icon_name=data["iconName"],
            stretches=[StretchDefinition(**stretch) for stretch in data.get("stretches", [])],
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )


class StretchDefinitionInput(BaseModel):
    id: str
    name: str
    description: str
    bilateral: bool
    image: str | None = None


class CreateStretchRegionInput(BaseModel):
    """
    Accepts both the stored camelCase names and snake_case; dumps with
    ``by_alias=True`` produce the stored form.
    """

    model_config = ConfigDict(populate_by_name=True)

    region: BodyRegion
    display_name: str = Field(alias="displayName")
    icon_name: str = Field(alias="iconName")
    stretches: list[StretchDefinitionInput]


class UpdateStretchRegionInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    display_name: str | None = Field(default=None, alias="displayName")
    icon_name: str | None = Field(default=None, alias="iconName")
    stretches: list[StretchDefinitionInput] | None = None
