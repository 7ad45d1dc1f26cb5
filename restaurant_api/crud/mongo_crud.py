import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from bson import ObjectId
from bson.errors import BSONError, InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import DuplicateKeyError, PyMongoError

from restaurant_api.utils.deadline import Deadline
from restaurant_api.utils.errors import (
    DeadlineExceeded,
    DuplicateConflict,
    NotFound,
    PersistenceFailure,
    ValidationError,
)
from restaurant_api.utils.helper import utc_now

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


def public(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Strip the internal storage key; only the business id leaves the repository."""
    if document is None:
        return None
    return {k: v for k, v in document.items() if k != "_id"}


class MongoCRUD:
    """Persistence facade over one collection.

    Documents are addressed by a business id (``id_field``), the hex string of
    the ``_id`` generated at insert time.
    """

    def __init__(self, collection: AsyncIOMotorCollection, id_field: str, label: str, timeout: float = 100.0):
        self.collection = collection
        self.id_field = id_field
        self.label = label
        self.timeout = timeout

    async def _run(self, operation: Callable[[], Awaitable], deadline: Optional[Deadline] = None):
        timeout = deadline.remaining() if deadline is not None else self.timeout
        if timeout <= 0:
            raise DeadlineExceeded(f"{self.label} operation exceeded its deadline")
        try:
            return await asyncio.wait_for(operation(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("%s operation timed out after %.2fs", self.label, timeout)
            raise DeadlineExceeded(f"{self.label} operation exceeded its deadline")
        except DuplicateKeyError as exc:
            raise DuplicateConflict(f"{self.label} already exists") from exc
        except (PyMongoError, BSONError) as exc:
            logger.exception("%s operation failed", self.label)
            raise PersistenceFailure(f"error while accessing {self.label} records") from exc

    def _object_id(self, business_id: str) -> ObjectId:
        try:
            return ObjectId(business_id)
        except (InvalidId, TypeError):
            raise ValidationError(f"invalid {self.id_field}: {business_id}")

    def _prepare(self, document: Dict[str, Any]) -> Dict[str, Any]:
        doc = dict(document)
        now = utc_now()
        oid = doc.setdefault("_id", ObjectId())
        doc.setdefault(self.id_field, str(oid))
        doc.setdefault("created_at", now)
        doc.setdefault("updated_at", now)
        return doc

    # -------- READ --------
    async def find_one(self, filters: Dict[str, Any], deadline: Optional[Deadline] = None) -> Optional[Dict[str, Any]]:
        return public(await self._run(lambda: self.collection.find_one(filters), deadline))

    async def find_by_business_id(self, business_id: str, deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        doc = await self.find_one({self.id_field: business_id}, deadline=deadline)
        if doc is None:
            raise NotFound(f"{self.label} with {self.id_field}={business_id} not found")
        return doc

    async def find_many(self, filters: Optional[Dict[str, Any]] = None, deadline: Optional[Deadline] = None) -> List[Dict[str, Any]]:
        docs = await self._run(lambda: self.collection.find(filters or {}).to_list(length=None), deadline)
        return [public(doc) for doc in docs]

    async def count(self, filters: Optional[Dict[str, Any]] = None, deadline: Optional[Deadline] = None) -> int:
        return await self._run(lambda: self.collection.count_documents(filters or {}), deadline)

    async def find_page(
        self,
        page_size: int = DEFAULT_PAGE_SIZE,
        page: int = 1,
        start_index: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
        deadline: Optional[Deadline] = None,
    ) -> Dict[str, Any]:
        """Count the matched set and slice one page out of it in a single aggregation."""
        if page_size is None or page_size < 1:
            page_size = DEFAULT_PAGE_SIZE
        if page is None or page < 1:
            page = 1
        offset = (page - 1) * page_size if start_index is None else max(0, start_index)

        pipeline = [
            {"$match": filters or {}},
            {"$group": {
                "_id": None,
                "total_count": {"$sum": 1},
                "data": {"$push": "$$ROOT"},
            }},
            {"$project": {
                "_id": 0,
                "total_count": 1,
                "items": {"$slice": ["$data", offset, page_size]},
            }},
        ]
        result = await self._run(lambda: self.collection.aggregate(pipeline).to_list(length=None), deadline)
        if not result:
            return {"total_count": 0, "items": []}
        return {
            "total_count": result[0]["total_count"],
            "items": [public(doc) for doc in result[0]["items"]],
        }

    # -------- CREATE --------
    async def insert_one(self, document: Dict[str, Any], deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        doc = self._prepare(document)
        await self._run(lambda: self.collection.insert_one(doc), deadline)
        return public(doc)

    async def insert_many(self, documents: List[Dict[str, Any]], deadline: Optional[Deadline] = None) -> List[Dict[str, Any]]:
        docs = [self._prepare(document) for document in documents]
        await self._run(lambda: self.collection.insert_many(docs), deadline)
        return [public(doc) for doc in docs]

    # -------- UPDATE --------
    async def _update(
        self,
        filters: Dict[str, Any],
        fields: Dict[str, Any],
        upsert: bool,
        on_insert: Optional[Dict[str, Any]],
        deadline: Optional[Deadline],
    ) -> Dict[str, Any]:
        now = utc_now()
        update: Dict[str, Any] = {"$set": {**fields, "updated_at": now}}
        if upsert:
            update["$setOnInsert"] = {"created_at": now, **(on_insert or {})}
        result = await self._run(lambda: self.collection.update_one(filters, update, upsert=upsert), deadline)
        return {
            "matched_count": result.matched_count,
            "modified_count": result.modified_count,
            "upserted_id": str(result.upserted_id) if result.upserted_id is not None else None,
        }

    async def update_by_filter(self, filters: Dict[str, Any], fields: Dict[str, Any], deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        return await self._update(filters, fields, False, None, deadline)

    async def upsert_by_filter(
        self,
        filters: Dict[str, Any],
        fields: Dict[str, Any],
        on_insert: Optional[Dict[str, Any]] = None,
        deadline: Optional[Deadline] = None,
    ) -> Dict[str, Any]:
        """Set only ``fields`` (plus ``updated_at``); create the document when nothing matches."""
        return await self._update(filters, fields, True, on_insert, deadline)

    async def upsert_by_business_id(self, business_id: str, fields: Dict[str, Any], deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        # Filtering on _id keeps the business id of an upserted document derived from its key.
        oid = self._object_id(business_id)
        return await self.upsert_by_filter({"_id": oid}, fields, on_insert={self.id_field: str(oid)}, deadline=deadline)

    # -------- DELETE --------
    async def delete_by_business_id(self, business_id: str, deadline: Optional[Deadline] = None) -> Dict[str, Any]:
        result = await self._run(lambda: self.collection.delete_one({self.id_field: business_id}), deadline)
        if result.deleted_count == 0:
            raise NotFound(f"{self.label} with {self.id_field}={business_id} not found")
        return {"detail": f"{self.label} deleted successfully"}
