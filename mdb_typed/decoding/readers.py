"""
Field readers for untyped store records.

Each reader pulls one field out of a raw record and narrows it to the
expected type. Anything missing or mistyped comes back as ``INVALID``
instead of raising: absence is an ordinary outcome when the store enforces
no schema.
"""

import math
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any, Final, Literal, TypeVar, Union, overload

EnumT = TypeVar("EnumT", bound=Enum)
T = TypeVar("T")


class _Sentinel(Enum):
    INVALID = "INVALID"

    def __repr__(self) -> str:
        return self.value

    def __bool__(self) -> bool:
        return False


INVALID: Final = _Sentinel.INVALID
"""Returned by every reader when a field is absent or has the wrong type."""

Invalid = Literal[_Sentinel.INVALID]


def is_record(value: Any) -> bool:
    """True iff ``value`` is a key-value map (not a list, primitive or None)."""
    return isinstance(value, Mapping)


def read_string(record: Mapping[str, Any], field: str) -> Union[str, Invalid]:
    value = record.get(field)
    return value if isinstance(value, str) else INVALID


def read_boolean(record: Mapping[str, Any], field: str) -> Union[bool, Invalid]:
    value = record.get(field)
    return value if isinstance(value, bool) else INVALID


def read_number(record: Mapping[str, Any], field: str) -> Union[int, float, Invalid]:
    """
    Read a finite int or float. ``bool`` is rejected even though it
    subclasses ``int``.
    """
    value = record.get(field)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return INVALID
    if isinstance(value, float) and not math.isfinite(value):
        return INVALID
    return value


def read_integer(record: Mapping[str, Any], field: str) -> Union[int, Invalid]:
    """Read a number with no fractional part; ``3.0`` is returned as ``3``."""
    value = read_number(record, field)
    if value is INVALID:
        return INVALID
    if isinstance(value, float):
        return int(value) if value.is_integer() else INVALID
    return value


def read_nullable_string(
    record: Mapping[str, Any], field: str, absent_is_null: bool = False
) -> Union[str, None, Invalid]:
    """
    Tri-state string read.

    Returns the string, ``None`` for an explicit null, or ``INVALID`` when
    the field is absent or not a string. With ``absent_is_null`` a missing
    field reads as ``None``, for optional fields that older documents
    never wrote.
    """
    if field not in record:
        return None if absent_is_null else INVALID
    value = record[field]
    if value is None or isinstance(value, str):
        return value
    return INVALID


@overload
def read_enum(
    record: Mapping[str, Any], field: str, allowed: type[EnumT]
) -> Union[EnumT, Invalid]: ...


@overload
def read_enum(record: Mapping[str, Any], field: str, allowed: Iterable[T]) -> Union[T, Invalid]: ...


def read_enum(record: Mapping[str, Any], field: str, allowed: Any) -> Any:
    """
    Read a value from a closed vocabulary.

    ``allowed`` is either an ``Enum`` class (the matching member is
    returned) or an iterable of raw values (the value itself is returned).
    """
    value = record.get(field)
    if value is None or isinstance(value, bool) or not isinstance(value, (str, int)):
        return INVALID

    if isinstance(allowed, type) and issubclass(allowed, Enum):
        for member in allowed:
            if member.value == value and type(member.value) is type(value):
                return member
        return INVALID

    return value if value in tuple(allowed) else INVALID
