"""Store primitives shared by every backend speaking the pymongo collection API."""

import time
import uuid
from typing import Any

from pymongo import ASCENDING
from pymongo.collection import Collection

from ..document.Document import SYSTEM_FIELDS
from ..errors import ConcurrencyConflictError, StoreError
from ._AbstractBackend import _AbstractBackend
from .continuation import decode_continuation, encode_continuation
from .QueryPage import QueryPage

PROCEDURES_COLLECTION = "_procedures"


def _public(row: dict[str, Any]) -> dict[str, Any]:
    """Drop the MongoDB primary key; callers address documents by ``id`` and ``_self``."""
    return {name: value for name, value in row.items() if name != "_id"}


class _CollectionBackend(_AbstractBackend):
    """Documents are stored with ``_id == id``; ``_etag`` changes on every write."""

    # Exception types a backend raises on a duplicate ``_id``; subclasses extend.
    duplicate_key_errors: tuple[type[Exception], ...] = ()

    def __init__(self, database_name: str, collection_name: str):
        self.database_name = database_name
        self.collection_name = collection_name
        self._client: Any = None
        self._collection: Collection | None = None
        self._procedures: Collection | None = None

    @property
    def collection_link(self) -> str:
        return f"dbs/{self.database_name}/colls/{self.collection_name}"

    def _bind(self) -> None:
        database = self._client[self.database_name]
        self._collection = database[self.collection_name]
        self._procedures = database[PROCEDURES_COLLECTION]

    def _stamp(self, document_id: str, body: dict[str, Any]) -> dict[str, Any]:
        fields = {name: value for name, value in body.items() if name not in SYSTEM_FIELDS}
        return {
            "_id": document_id,
            "id": document_id,
            **fields,
            "_self": f"{self.collection_link}/docs/{document_id}",
            "_etag": uuid.uuid4().hex,
            "_ts": int(time.time()),
        }

    def _id_from_link(self, self_link: str) -> str:
        prefix = f"{self.collection_link}/docs/"
        if not isinstance(self_link, str) or not self_link.startswith(prefix) or len(self_link) == len(prefix):
            raise StoreError(f"Invalid document link for {self.collection_link}: {self_link!r}", code=400)
        return self_link[len(prefix):]

    def query_page(self, filter: dict[str, Any] | None, continuation: str | None, page_size: int) -> QueryPage:
        query = dict(filter or {})
        if continuation:
            after = {"_id": {"$gt": decode_continuation(continuation)}}
            query = {"$and": [query, after]} if query else after
        # One extra row tells whether another page follows.
        rows = list(self._collection.find(query).sort("_id", ASCENDING).limit(page_size + 1))  # type: ignore[union-attr]
        next_token = encode_continuation(rows[page_size - 1]["_id"]) if len(rows) > page_size else None
        return QueryPage(documents=[_public(row) for row in rows[:page_size]], continuation=next_token)

    def count_documents(self, filter: dict[str, Any] | None = None) -> int:
        return self._collection.count_documents(filter or {})  # type: ignore[union-attr]

    def read_document(self, document_id: str) -> dict[str, Any] | None:
        return self._collection.find_one({"_id": document_id}, {"_id": 0})  # type: ignore[union-attr]

    def create_document(self, body: dict[str, Any]) -> dict[str, Any]:
        document_id = body.get("id") or uuid.uuid4().hex
        if not isinstance(document_id, str):
            raise StoreError(f"Document id must be a string, got {type(document_id).__name__}", code=400)
        row = self._stamp(document_id, body)
        try:
            self._collection.insert_one(row)  # type: ignore[union-attr]
        except self.duplicate_key_errors as e:
            raise StoreError(f"Document {document_id!r} already exists", code=409) from e
        return _public(row)

    def replace_document(self, self_link: str, body: dict[str, Any], etag: str) -> dict[str, Any]:
        document_id = self._id_from_link(self_link)
        row = self._stamp(document_id, body)
        result = self._collection.replace_one({"_id": document_id, "_etag": etag}, row)  # type: ignore[union-attr]
        if result.matched_count == 0:
            if self._collection.count_documents({"_id": document_id}):  # type: ignore[union-attr]
                raise ConcurrencyConflictError(document_id, etag)
            raise StoreError(f"Document {document_id!r} not found", code=404)
        return _public(row)

    def delete_document(self, self_link: str) -> None:
        document_id = self._id_from_link(self_link)
        if self._collection.delete_one({"_id": document_id}).deleted_count == 0:  # type: ignore[union-attr]
            raise StoreError(f"Document {document_id!r} not found", code=404)

    def find_procedure(self, procedure_id: str) -> dict[str, Any] | None:
        return self._procedures.find_one(  # type: ignore[union-attr]
            {"_id": f"{self.collection_name}/{procedure_id}"}, {"_id": 0}
        )

    def create_procedure(self, procedure_id: str) -> dict[str, Any]:
        row = {
            "_id": f"{self.collection_name}/{procedure_id}",
            "id": procedure_id,
            "collection": self.collection_name,
            "_self": f"{self.collection_link}/sprocs/{procedure_id}",
            "_etag": uuid.uuid4().hex,
            "_ts": int(time.time()),
        }
        try:
            self._procedures.insert_one(row)  # type: ignore[union-attr]
        except self.duplicate_key_errors as e:
            raise StoreError(f"Procedure {procedure_id!r} already exists for {self.collection_link}", code=409) from e
        return _public(row)
