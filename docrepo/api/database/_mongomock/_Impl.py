"""In-memory MongoDB backend implementation using mongomock."""

import mongomock
import pymongo.errors

from .._CollectionBackend import _CollectionBackend
from ..DatabaseConfig import DatabaseConfig
from ._Data import _Data

# Shared mongomock client for all instances (singleton pattern)
_shared_mongomock_client: mongomock.MongoClient | None = None


def _get_mongomock_client() -> mongomock.MongoClient:
    """Get or create shared mongomock client."""
    global _shared_mongomock_client
    if _shared_mongomock_client is None:
        _shared_mongomock_client = mongomock.MongoClient()
    return _shared_mongomock_client


class _Impl(_CollectionBackend):
    duplicate_key_errors = (mongomock.DuplicateKeyError, pymongo.errors.DuplicateKeyError)

    def __init__(self, database_config: DatabaseConfig, collection_name: str):
        if not isinstance(database_config.data, _Data):
            raise ValueError("MongoMock config data is required")
        super().__init__(database_config.prefix, collection_name)

    def __enter__(self):
        self._client = _get_mongomock_client()
        self._bind()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # Don't close shared client - it's reused across instances
        self._collection = None
        self._procedures = None
        return False
