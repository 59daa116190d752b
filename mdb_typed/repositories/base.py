"""
Generic document repository.

Implements CRUD over one MongoDB collection for an entity type ``E``, a
creation input ``C`` and an update input ``U``. Decoding of stored
documents is an injected strategy: the trusting default copies fields
straight into the entity, validating decoders drop records that break the
entity's invariants.

Expected outcomes are values, not exceptions:
    - missing document -> ``None`` (``False`` for ``delete``)
    - undecodable document -> ``None`` / left out of listings
Driver errors (``pymongo.errors.PyMongoError``) propagate unchanged.
"""

from collections.abc import Callable
from typing import Any, ClassVar, Generic, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import BaseModel

from ..decoding import Decoder, trusting_decoder
from ..models import Entity, TimestampedEntity
from ..observability import get_logger, record_dropped, timed_operation
from ..utils import split_document, to_store_id, utc_now_iso

logger = get_logger(__name__)

E = TypeVar("E", bound=Entity)
C = TypeVar("C", bound=BaseModel)
U = TypeVar("U", bound=BaseModel)

SortSpec = list[tuple[str, int]]


class DocumentRepository(Generic[E, C, U]):
    """
    MongoDB repository for one entity type.

    Subclasses set ``entity_type`` and, where needed, ``default_sort`` and
    ``include_timestamp_on_update``, and add their entity-specific finders
    on top of ``_query``.

    Example:
        class BarcodeRepository(
            DocumentRepository[Barcode, CreateBarcodeInput, UpdateBarcodeInput]
        ):
            entity_type = Barcode
            default_sort = [("sort_order", ASCENDING)]

        barcodes = BarcodeRepository(db["barcodes"])
        barcode = await barcodes.create(CreateBarcodeInput(...))
    """

    entity_type: ClassVar[type[Entity]]
    default_sort: ClassVar[SortSpec | None] = None
    include_timestamp_on_update: ClassVar[bool] = True

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
        decoder: Decoder[E] | None = None,
        clock: Callable[[], str] = utc_now_iso,
    ):
        """
        Initialize the repository.

        Args:
            collection: Collection handle the repository reads and writes
            decoder: Decode strategy for stored documents (defaults to trusting)
            clock: Timestamp source for ``created_at`` / ``updated_at``
        """
        self._collection = collection
        self._decoder: Decoder[E] = decoder or trusting_decoder(self.entity_type)
        self._clock = clock

    @property
    def collection_name(self) -> str:
        return self._collection.name

    @property
    def is_timestamped(self) -> bool:
        return issubclass(self.entity_type, TimestampedEntity)

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def _decode(self, doc: dict[str, Any]) -> E | None:
        id, fields = split_document(doc)
        entity = self._decoder(id, fields)
        if entity is None:
            logger.debug(
                f"Skipping undecodable {self.entity_type.__name__} document "
                f"'{id}' in '{self.collection_name}'"
            )
        return entity

    async def _query(
        self,
        filter: dict[str, Any] | None = None,
        sort: SortSpec | None = None,
    ) -> list[E]:
        """
        Run an equality-filter query and decode the results.

        Undecodable documents are dropped, so a listing can hold fewer
        entities than the collection holds documents. Order among the
        remaining entities follows ``sort``.
        """
        cursor = self._collection.find(filter or {})
        if sort:
            cursor = cursor.sort(sort)
        docs = await cursor.to_list(length=None)

        entities = [entity for entity in map(self._decode, docs) if entity is not None]
        dropped = len(docs) - len(entities)
        if dropped:
            record_dropped(self.collection_name, dropped)
            logger.info(
                f"Dropped {dropped} undecodable document(s) from '{self.collection_name}' query"
            )
        return entities

    # ------------------------------------------------------------------
    # Write preparation
    # ------------------------------------------------------------------

    def _prepare_create(self, data: C) -> dict[str, Any]:
        """Stored fields for a new document, before timestamps are added."""
        return data.model_dump(mode="json", by_alias=True)

    def _prepare_update(self, data: U) -> dict[str, Any]:
        """
        Only the fields the caller supplied with a value.

        An explicit top-level ``None`` means "leave unchanged"; writing it
        would store a null the decoder rejects. Nested nulls (an empty plan
        slot's ``meal_id``) are kept.
        """
        dump = data.model_dump(mode="json", by_alias=True, exclude_unset=True)
        return {key: value for key, value in dump.items() if value is not None}

    def _creation_timestamps(self) -> dict[str, str]:
        if not self.is_timestamped:
            return {}
        now = self._clock()
        return {"created_at": now, "updated_at": now}

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    @timed_operation("find_by_id")
    async def find_by_id(self, id: str) -> E | None:
        """Return the entity, or None if it is missing or undecodable."""
        doc = await self._collection.find_one({"_id": to_store_id(id)})
        if doc is None:
            return None
        return self._decode(doc)

    @timed_operation("find_all")
    async def find_all(self) -> list[E]:
        return await self._query({}, self.default_sort)

    @timed_operation("create")
    async def create(self, data: C) -> E:
        """
        Insert a new document and return it as an entity.

        The written fields are trusted: they do not go back through the
        decoder.
        """
        document = {**self._prepare_create(data), **self._creation_timestamps()}
        # insert_one adds "_id" to the dict it is given
        result = await self._collection.insert_one(dict(document))
        id = str(result.inserted_id)

        logger.debug(f"Created {self.entity_type.__name__} '{id}' in '{self.collection_name}'")
        return self.entity_type.from_document(id, document)

    @timed_operation("update")
    async def update(self, id: str, data: U) -> E | None:
        """
        Apply a partial update.

        Returns None if the document does not exist. An update that
        supplies no fields writes nothing and returns the current entity.
        """
        existing = await self.find_by_id(id)
        if existing is None:
            return None

        fields = self._prepare_update(data)
        if not fields:
            return existing

        if self.include_timestamp_on_update:
            fields["updated_at"] = self._clock()

        await self._collection.update_one({"_id": to_store_id(id)}, {"$set": fields})
        return await self.find_by_id(id)

    @timed_operation("delete")
    async def delete(self, id: str) -> bool:
        """
        Delete a document. Deleting a missing id is not an error.

        Returns:
            True if a document was removed
        """
        result = await self._collection.delete_one({"_id": to_store_id(id)})
        return result.deleted_count > 0
