"""MongoDB backend implementation."""

from typing import Any

import pymongo.errors
from pymongo import MongoClient

from ....mongo_retry import MongoRetryWrapper
from ...errors import StoreError
from .._CollectionBackend import _CollectionBackend
from ..DatabaseConfig import DatabaseConfig
from ._Data import _Data as _DatabaseConfigData


class _Impl(_CollectionBackend):
    duplicate_key_errors = (pymongo.errors.DuplicateKeyError,)

    def __init__(self, database_config: DatabaseConfig, collection_name: str):
        if not isinstance(database_config.data, _DatabaseConfigData):
            raise ValueError("MongoDB config data is required")
        super().__init__(database_config.prefix, collection_name)
        self.uri = database_config.data.uri
        self.server_selection_timeout_ms = database_config.data.server_selection_timeout_ms
        self._client: MongoClient[Any] | None = None

    def __enter__(self):
        self._client = MongoClient(self.uri, serverSelectionTimeoutMS=self.server_selection_timeout_ms)
        try:
            self._client.server_info()  # Test connection
        except pymongo.errors.ServerSelectionTimeoutError as e:
            self._client.close()
            self._client = None
            raise StoreError(f"MongoDB not reachable at {self.uri}: {e}", code=503) from e
        self._bind()
        # Reads retry on transient connection failures; writes never do.
        self._collection = MongoRetryWrapper(self._collection)  # type: ignore[assignment]
        self._procedures = MongoRetryWrapper(self._procedures)  # type: ignore[assignment]
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._client:
            self._client.close()
            self._client = None
        self._collection = None
        self._procedures = None
        return False
