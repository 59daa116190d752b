"""
Barcode wallet entries.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel

from ..constants import DEFAULT_SORT_ORDER
from .base import TimestampedEntity


class BarcodeType(str, Enum):
    CODE128 = "code128"
    CODE39 = "code39"
    QR = "qr"


@dataclass(frozen=True, kw_only=True)
class Barcode(TimestampedEntity):
    label: str
    value: str
    barcode_type: str
    color: str
    sort_order: int


class CreateBarcodeInput(BaseModel):
    label: str
    value: str
    barcode_type: BarcodeType
    color: str
    sort_order: int = DEFAULT_SORT_ORDER


class UpdateBarcodeInput(BaseModel):
    label: str | None = None
    value: str | None = None
    barcode_type: BarcodeType | None = None
    color: str | None = None
    sort_order: int | None = None
