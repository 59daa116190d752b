"""
MongoDB document helpers for MDB_TYPED.

Documents cross the repository boundary as ``(id, fields)`` pairs: the
identifier is always the store key ``_id`` rendered as a string, and it is
never read from inside the record.
"""

from datetime import datetime, timezone
from typing import Any

from bson import ObjectId


def to_store_id(id: str) -> ObjectId | str:
    """
    Convert an entity identifier into the value stored under ``_id``.

    Generated identifiers are ObjectIds; natural keys (stretch region keys)
    are stored as plain strings.
    """
    return ObjectId(id) if ObjectId.is_valid(id) else id


def split_document(doc: dict[str, Any]) -> tuple[str, dict[str, Any]]:
    """
    Separate a raw MongoDB document into its identifier and remaining fields.

    Example:
        ```python
        split_document({"_id": ObjectId("507f1f77bcf86cd799439011"), "name": "Push"})
        # ("507f1f77bcf86cd799439011", {"name": "Push"})
        ```
    """
    fields = {key: value for key, value in doc.items() if key != "_id"}
    return str(doc.get("_id")), fields


def utc_now_iso() -> str:
    """Default timestamp collaborator: current UTC time as ISO-8601 with a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
