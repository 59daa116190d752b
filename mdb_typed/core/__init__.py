"""
Core MDB_TYPED components: connection lifecycle and reference-data seeding.
"""

from .connection import ConnectionManager
from .seeding import load_stretch_manifest, parse_stretch_manifest, seed_stretch_catalog

__all__ = [
    "ConnectionManager",
    "load_stretch_manifest",
    "parse_stretch_manifest",
    "seed_stretch_catalog",
]
