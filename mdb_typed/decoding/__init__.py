"""
Decoding of untyped store records into typed entities.

Usage:
    from mdb_typed.decoding import parse_plan_day

    day = parse_plan_day(doc_id, raw)
    if day is None:
        ...  # undecodable, skip it
"""

from .decoders import (
    Decoder,
    parse_mesocycle,
    parse_plan_day,
    parse_stretch_definition,
    parse_stretch_region,
    trusting_decoder,
)
from .readers import (
    INVALID,
    is_record,
    read_boolean,
    read_enum,
    read_integer,
    read_nullable_string,
    read_number,
    read_string,
)

__all__ = [
    # Readers
    "INVALID",
    "is_record",
    "read_string",
    "read_number",
    "read_integer",
    "read_boolean",
    "read_nullable_string",
    "read_enum",
    # Decoders
    "Decoder",
    "trusting_decoder",
    "parse_plan_day",
    "parse_mesocycle",
    "parse_stretch_definition",
    "parse_stretch_region",
]
