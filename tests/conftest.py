"""
Pytest configuration and shared fixtures for MDB_TYPED tests.

This module provides:
- An in-memory stand-in for a Motor collection
- Mock MongoDB client fixtures
- Fixed clocks for deterministic timestamps
- Test data factories
"""

import copy
import itertools
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient

from mdb_typed.observability import get_metrics_collector

FIXED_NOW = "2026-01-15T10:00:00.000Z"


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests with no external services")
    config.addinivalue_line("markers", "integration: tests that need a running MongoDB")


# ============================================================================
# IN-MEMORY COLLECTION
# ============================================================================


class FakeCursor:
    """Minimal Motor cursor: ``sort`` then ``await to_list(...)``."""

    def __init__(self, docs: List[Dict[str, Any]]):
        self._docs = docs

    def sort(self, spec):
        # Stable sorts applied from the least significant key up
        for key, direction in reversed(list(spec)):
            self._docs.sort(
                key=lambda doc: (doc.get(key) is not None, doc.get(key)),
                reverse=direction < 0,
            )
        return self

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        return self._docs if length is None else self._docs[:length]


class FakeCollection:
    """
    In-memory collection that implements the subset of the Motor API the
    repositories use. Filters are equality-only, which is all repositories
    issue. Every method is a mock wrapping the real behaviour, so tests can
    both inspect stored state and assert on calls.
    """

    def __init__(self, name: str = "test_collection"):
        self.name = name
        self.docs: Dict[Any, Dict[str, Any]] = {}

        self.find = MagicMock(side_effect=self._find)
        self.find_one = AsyncMock(side_effect=self._find_one)
        self.insert_one = AsyncMock(side_effect=self._insert_one)
        self.update_one = AsyncMock(side_effect=self._update_one)
        self.replace_one = AsyncMock(side_effect=self._replace_one)
        self.delete_one = AsyncMock(side_effect=self._delete_one)
        self.bulk_write = AsyncMock(side_effect=self._bulk_write)

    # -- helpers -----------------------------------------------------------

    def seed_raw(self, *docs: Dict[str, Any]) -> None:
        """Store documents exactly as given, bypassing any repository."""
        for doc in docs:
            doc = copy.deepcopy(doc)
            doc.setdefault("_id", ObjectId())
            self.docs[doc["_id"]] = doc

    def _matches(self, doc: Dict[str, Any], filter: Dict[str, Any]) -> bool:
        return all(doc.get(key) == value for key, value in filter.items())

    def _first(self, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return next((d for d in self.docs.values() if self._matches(d, filter)), None)

    @property
    def write_calls(self) -> int:
        return sum(
            mock.await_count
            for mock in (
                self.insert_one,
                self.update_one,
                self.replace_one,
                self.delete_one,
                self.bulk_write,
            )
        )

    # -- reads -------------------------------------------------------------

    def _find(self, filter: Optional[Dict[str, Any]] = None) -> FakeCursor:
        filter = filter or {}
        return FakeCursor(
            [copy.deepcopy(d) for d in self.docs.values() if self._matches(d, filter)]
        )

    async def _find_one(self, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        doc = self._first(filter)
        return copy.deepcopy(doc) if doc is not None else None

    # -- writes ------------------------------------------------------------

    async def _insert_one(self, document: Dict[str, Any]):
        document.setdefault("_id", ObjectId())
        self.docs[document["_id"]] = copy.deepcopy(document)
        return MagicMock(inserted_id=document["_id"])

    async def _update_one(self, filter: Dict[str, Any], update: Dict[str, Any]):
        doc = self._first(filter)
        if doc is None:
            return MagicMock(matched_count=0, modified_count=0)

        for key, value in update.get("$set", {}).items():
            doc[key] = copy.deepcopy(value)
        for key, spec in update.get("$addToSet", {}).items():
            items = spec["$each"] if isinstance(spec, dict) and "$each" in spec else [spec]
            array = doc.setdefault(key, [])
            for item in items:
                if item not in array:
                    array.append(copy.deepcopy(item))
        return MagicMock(matched_count=1, modified_count=1)

    async def _replace_one(
        self, filter: Dict[str, Any], replacement: Dict[str, Any], upsert: bool = False
    ):
        existing = self._first(filter)
        if existing is None and not upsert:
            return MagicMock(matched_count=0, modified_count=0, upserted_id=None)

        _id = existing["_id"] if existing is not None else filter.get("_id", ObjectId())
        self.docs[_id] = {"_id": _id, **copy.deepcopy(replacement)}
        return MagicMock(
            matched_count=0 if existing is None else 1,
            modified_count=0 if existing is None else 1,
            upserted_id=_id if existing is None else None,
        )

    async def _delete_one(self, filter: Dict[str, Any]):
        doc = self._first(filter)
        if doc is None:
            return MagicMock(deleted_count=0)
        del self.docs[doc["_id"]]
        return MagicMock(deleted_count=1)

    async def _bulk_write(self, requests, ordered: bool = True):
        for request in requests:
            await self._replace_one(request._filter, request._doc, upsert=request._upsert)
        return MagicMock(upserted_count=len(requests))


class FakeDatabase:
    """Database handle that hands out one ``FakeCollection`` per name."""

    def __init__(self, name: str = "test_db"):
        self.name = name
        self.collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


# ============================================================================
# STORE FIXTURES
# ============================================================================


@pytest.fixture
def fake_collection() -> FakeCollection:
    return FakeCollection()


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def mock_mongo_client() -> MagicMock:
    """Create a mock MongoDB client whose ping succeeds."""
    client = MagicMock(spec=AsyncIOMotorClient)
    client.admin = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1})
    client.__getitem__ = lambda self, name: FakeDatabase(name)
    return client


# ============================================================================
# CLOCKS
# ============================================================================


@pytest.fixture
def fixed_clock():
    """Clock that always returns the same instant."""
    return lambda: FIXED_NOW


@pytest.fixture
def ticking_clock():
    """Clock that advances one second per call."""
    counter = itertools.count()
    return lambda: f"2026-01-15T10:00:{next(counter):02d}.000Z"


# ============================================================================
# TEST DATA FACTORIES
# ============================================================================


def _stretch_doc(**overrides: Any) -> Dict[str, Any]:
    doc = {
        "id": "neck-tilt",
        "name": "Neck Tilt",
        "description": "Tilt your head toward your shoulder.",
        "bilateral": True,
    }
    doc.update(overrides)
    return doc


def _region_doc(region: str = "neck", **overrides: Any) -> Dict[str, Any]:
    doc = {
        "_id": region,
        "region": region,
        "displayName": region.replace("_", " ").title(),
        "iconName": "figure.stand",
        "stretches": [_stretch_doc()],
        "created_at": FIXED_NOW,
        "updated_at": FIXED_NOW,
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def make_stretch_doc():
    """Factory for a valid embedded stretch record."""
    return _stretch_doc


@pytest.fixture
def make_region_doc():
    """Factory for a valid raw stretch region document."""
    return _region_doc


@pytest.fixture
def sample_stretch_manifest() -> Dict[str, Any]:
    """A small manifest in the mobile app's format."""
    return {
        "regions": {
            "neck": {
                "stretches": [
                    {
                        "id": "neck-tilt",
                        "name": "Neck Tilt",
                        "description": "Tilt your head toward your shoulder.",
                        "bilateral": True,
                        "image": "neck/neck-tilt.png",
                        "audioFiles": {"begin": "neck/neck-tilt-begin.wav"},
                    }
                ]
            },
            "calves": {
                "stretches": [
                    {
                        "id": "wall-calf",
                        "name": "Wall Calf Stretch",
                        "description": "Lean into a wall with one leg back.",
                        "bilateral": True,
                        "image": None,
                        "audioFiles": {},
                    },
                    {
                        "id": "step-calf",
                        "name": "Step Calf Drop",
                        "description": "Drop your heel off a step.",
                        "bilateral": False,
                    },
                ]
            },
        },
        "shared": {"switchSides": "shared/switch-sides.wav"},
    }


# ============================================================================
# GLOBAL STATE
# ============================================================================


@pytest.fixture(autouse=True)
def reset_metrics():
    """Start every test with an empty global metrics collector."""
    get_metrics_collector().reset()
    yield
    get_metrics_collector().reset()


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch):
    """Reset environment variables before each test."""
    env_vars_to_clear = [
        "MONGO_URI",
        "DB_NAME",
        "MONGO_MAX_POOL_SIZE",
        "MONGO_MIN_POOL_SIZE",
        "MONGO_SERVER_SELECTION_TIMEOUT_MS",
        "COLLECTION_PREFIX",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    yield


# ============================================================================
# TESTCONTAINERS FIXTURES (Real MongoDB for Integration Tests)
# ============================================================================


@pytest.fixture(scope="session")
def mongodb_container():
    """
    Start a MongoDB container for integration tests.

    Session-scoped: the container starts once and is reused for all
    integration tests.
    """
    try:
        from testcontainers.mongodb import MongoDbContainer
    except ImportError:
        pytest.skip("testcontainers not installed. Install with: pip install -e '.[test]'")

    with MongoDbContainer(image="mongo:7.0") as container:
        yield container


@pytest.fixture
def mongodb_connection_string(mongodb_container):
    """Connection string for the test container's exposed port."""
    return mongodb_container.get_connection_url()
