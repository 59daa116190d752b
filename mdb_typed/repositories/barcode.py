"""
Barcode repository.
"""

from ..constants import ASCENDING
from ..models import Barcode, CreateBarcodeInput, UpdateBarcodeInput
from .base import DocumentRepository


class BarcodeRepository(DocumentRepository[Barcode, CreateBarcodeInput, UpdateBarcodeInput]):
    """Barcodes are written only by this repository, so reads are trusted."""

    entity_type = Barcode
    default_sort = [("sort_order", ASCENDING)]
