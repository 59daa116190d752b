"""
Utility functions and helpers for MDB_TYPED.
"""

from .mongo import split_document, to_store_id, utc_now_iso

__all__ = ["split_document", "to_store_id", "utc_now_iso"]
