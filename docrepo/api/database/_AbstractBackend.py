"""Abstract base class for document store backends."""

from abc import ABC, abstractmethod
from typing import Any

from .QueryPage import QueryPage


class _AbstractBackend(ABC):
    @abstractmethod
    def __enter__(self):
        pass

    @abstractmethod
    def __exit__(self, exc_type, exc_val, exc_tb):
        pass

    @property
    @abstractmethod
    def collection_link(self) -> str:
        pass

    @abstractmethod
    def query_page(self, filter: dict[str, Any] | None, continuation: str | None, page_size: int) -> QueryPage:
        """Return at most ``page_size`` documents matching ``filter``, ordered by id."""
        pass

    @abstractmethod
    def count_documents(self, filter: dict[str, Any] | None = None) -> int:
        pass

    @abstractmethod
    def read_document(self, document_id: str) -> dict[str, Any] | None:
        pass

    @abstractmethod
    def create_document(self, body: dict[str, Any]) -> dict[str, Any]:
        pass

    @abstractmethod
    def replace_document(self, self_link: str, body: dict[str, Any], etag: str) -> dict[str, Any]:
        """Replace the document only if its current version token equals ``etag``.

        Raises:
            ConcurrencyConflictError: if the stored version token differs
            StoreError: (404) if the document no longer exists
        """
        pass

    @abstractmethod
    def delete_document(self, self_link: str) -> None:
        pass

    @abstractmethod
    def find_procedure(self, procedure_id: str) -> dict[str, Any] | None:
        pass

    @abstractmethod
    def create_procedure(self, procedure_id: str) -> dict[str, Any]:
        pass
