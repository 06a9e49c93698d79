# storage/document.py
import logging
from typing import Any, List, Optional

import pymongo
from bson import ObjectId
from pymongo import MongoClient
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError
from pymongo.errors import PyMongoError

from storage.base import (
    ADMINS,
    USERS,
    AnyOf,
    DuplicateKeyError,
    Predicate,
    Record,
    Sort,
    StorageAdapter,
    StorageError,
    WriteResult,
)
from utils.coerce import format_booking_date, render_value

logger = logging.getLogger(__name__)


class DocumentStorage(StorageAdapter):
    """Storage over MongoDB collections.

    Values are written as received, so ``phone``/``postcode``/admin
    ``password`` may be strings or numbers depending on who wrote them.
    ``booking_date`` is returned untouched unless ``format_dates`` is on.
    """

    def __init__(self, uri: str, db_name: str, format_dates: bool = False, client=None):
        self.uri = uri
        self.db_name = db_name
        self.format_dates = format_dates
        self.client = client
        self.db = None

    def connect(self) -> None:
        try:
            if self.client is None:
                self.client = MongoClient(self.uri)
            self.db = self.client[self.db_name]
            self.db[USERS].create_index("phone", unique=True)
            # older documents have no phone_key
            self.db[USERS].create_index("phone_key", unique=True, sparse=True)
            self.db[ADMINS].create_index("username", unique=True)
        except PyMongoError as exc:
            raise StorageError(str(exc)) from exc
        logger.info("Connected to MongoDB database %s", self.db_name)

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            self.client = None
            self.db = None
            logger.info("MongoDB connection closed")

    # --- helpers ---

    def _collection(self, collection: str):
        if self.db is None:
            raise StorageError("Document store is not connected")
        return self.db[collection]

    def _object_id(self, id: Any) -> Optional[ObjectId]:
        if isinstance(id, ObjectId):
            return id
        if isinstance(id, str) and ObjectId.is_valid(id):
            return ObjectId(id)
        return None

    def _query(self, predicate: Optional[Predicate]) -> dict:
        query = {}
        for field, value in (predicate or {}).items():
            if field == "id":
                field = "_id"
                if isinstance(value, AnyOf):
                    value = AnyOf(filter(None, map(self._object_id, value.values)))
                else:
                    value = self._object_id(value)
                    if value is None:
                        raise LookupError(field)
            if isinstance(value, AnyOf):
                query[field] = {"$in": value.values}
            else:
                query[field] = value
        return query

    def _to_record(self, doc: dict) -> Record:
        record = {"id": str(doc["_id"])}
        for field, value in doc.items():
            if field == "_id":
                continue
            if field == "booking_date" and self.format_dates:
                record[field] = format_booking_date(value)
            else:
                record[field] = render_value(value)
        return record

    # --- CRUD ---

    def find_one(self, collection: str, predicate: Predicate) -> Optional[Record]:
        try:
            query = self._query(predicate)
        except LookupError:
            return None
        try:
            doc = self._collection(collection).find_one(query)
        except PyMongoError as exc:
            raise StorageError(str(exc)) from exc
        return self._to_record(doc) if doc else None

    def find_many(self, collection: str, predicate: Optional[Predicate] = None,
                  sort: Optional[Sort] = None) -> List[Record]:
        try:
            query = self._query(predicate)
        except LookupError:
            return []
        try:
            cursor = self._collection(collection).find(query)
            if sort:
                cursor = cursor.sort([
                    ("_id" if field == "id" else field,
                     pymongo.DESCENDING if direction < 0 else pymongo.ASCENDING)
                    for field, direction in sort
                ])
            return [self._to_record(doc) for doc in cursor]
        except PyMongoError as exc:
            raise StorageError(str(exc)) from exc

    def insert(self, collection: str, fields: Record) -> str:
        doc = {k: v for k, v in fields.items() if k not in ("id", "_id")}
        try:
            result = self._collection(collection).insert_one(doc)
        except MongoDuplicateKeyError as exc:
            raise DuplicateKeyError(str(exc)) from exc
        except PyMongoError as exc:
            raise StorageError(str(exc)) from exc
        return str(result.inserted_id)

    def update(self, collection: str, id: Any, fields: Record) -> WriteResult:
        obj_id = self._object_id(id)
        if obj_id is None:
            return WriteResult.NOT_FOUND
        changes = {k: v for k, v in fields.items() if k not in ("id", "_id")}
        if not changes:
            found = self.find_one(collection, {"id": obj_id})
            return WriteResult.SUCCESS if found else WriteResult.NOT_FOUND
        try:
            result = self._collection(collection).update_one({"_id": obj_id}, {"$set": changes})
        except MongoDuplicateKeyError as exc:
            raise DuplicateKeyError(str(exc)) from exc
        except PyMongoError as exc:
            raise StorageError(str(exc)) from exc
        # matched, not modified: writing identical values is still a hit
        return WriteResult.SUCCESS if result.matched_count else WriteResult.NOT_FOUND

    def delete(self, collection: str, id: Any) -> WriteResult:
        obj_id = self._object_id(id)
        if obj_id is None:
            return WriteResult.NOT_FOUND
        try:
            result = self._collection(collection).delete_one({"_id": obj_id})
        except PyMongoError as exc:
            raise StorageError(str(exc)) from exc
        return WriteResult.SUCCESS if result.deleted_count else WriteResult.NOT_FOUND
