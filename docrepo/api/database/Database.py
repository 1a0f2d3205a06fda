"""Database public API."""

import importlib
import logging
from collections.abc import Iterator
from typing import Any

from ..errors import StoreError
from ..procedure.ProcedureConfig import ProcedureConfig
from ._AbstractBackend import _AbstractBackend
from .DatabaseConfig import _BACKEND_REGISTRY, DatabaseConfig
from .ProcedureRef import ProcedureRef
from .QueryPage import QueryPage

logger = logging.getLogger(__name__)


class Database:
    """Public API for one collection of the configured document store.

    Use as a context manager::

        with Database(config.database, "users") as database:
            raw = database.create_document({"id": "1", "key": "test"})
    """

    def __init__(
        self,
        database_config: DatabaseConfig,
        collection_name: str,
        procedure_config: ProcedureConfig | None = None,
    ):
        self.database_config = database_config
        self.collection_name = collection_name
        self.procedure_config = procedure_config or ProcedureConfig()
        self._impl: _AbstractBackend | None = None

    def __enter__(self):
        backend_type = self.database_config.type
        if backend_type not in _BACKEND_REGISTRY:
            raise ValueError(f"Unsupported backend type: {backend_type!r} (supported: {list(_BACKEND_REGISTRY.keys())})")

        module = importlib.import_module(f"docrepo.api.database._{backend_type}._Impl")
        impl = module._Impl(self.database_config, self.collection_name)
        impl.__enter__()
        self._impl = impl
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._impl:
            impl, self._impl = self._impl, None
            return impl.__exit__(exc_type, exc_val, exc_tb)
        return False

    def _require_impl(self) -> _AbstractBackend:
        if not self._impl:
            raise RuntimeError("Collection not initialized. Use as context manager first.")
        return self._impl

    @property
    def collection_link(self) -> str:
        return self._require_impl().collection_link

    def document_link(self, document_id: str) -> str:
        return f"{self.collection_link}/docs/{document_id}"

    def count_documents(self, filter: dict[str, Any] | None = None) -> int:
        return self._require_impl().count_documents(filter)

    def read_document(self, document_id: str) -> dict[str, Any] | None:
        return self._require_impl().read_document(document_id)

    def create_document(self, body: dict[str, Any]) -> dict[str, Any]:
        return self._require_impl().create_document(body)

    def replace_document(self, self_link: str, body: dict[str, Any], etag: str) -> dict[str, Any]:
        return self._require_impl().replace_document(self_link, body, etag)

    def delete_document(self, self_link: str) -> None:
        self._require_impl().delete_document(self_link)

    def query_page(self, filter: dict[str, Any] | None = None, continuation: str | None = None) -> QueryPage:
        return self._require_impl().query_page(filter, continuation, self.database_config.page_size)

    def iter_documents(self, filter: dict[str, Any] | None = None) -> Iterator[dict[str, Any]]:
        """Yield every matching document, following continuation tokens."""
        continuation: str | None = None
        while True:
            page = self.query_page(filter, continuation)
            yield from page.documents
            if not page.continuation:
                return
            continuation = page.continuation

    def query_all(self, filter: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        return list(self.iter_documents(filter))

    def get_or_create_procedure(self, procedure_id: str) -> ProcedureRef:
        """Return the reference of ``procedure_id``, registering it for this collection if needed."""
        from ..procedure.registry import PROCEDURES

        if procedure_id not in PROCEDURES:
            raise ValueError(f"Unknown procedure: {procedure_id!r} (known: {sorted(PROCEDURES)})")
        impl = self._require_impl()
        raw = impl.find_procedure(procedure_id)
        if raw is None:
            try:
                raw = impl.create_procedure(procedure_id)
                logger.info(f"Registered procedure {procedure_id!r} for {impl.collection_link}")
            except StoreError as e:
                # Another client registered it first.
                if e.code != 409:
                    raise
                raw = impl.find_procedure(procedure_id)
                if raw is None:
                    raise
        return ProcedureRef.from_raw(raw)

    def execute_procedure(self, procedure: ProcedureRef, *args: Any) -> Any:
        """Run a registered procedure against this collection within a fresh execution budget.

        Raises:
            StoreError: (404) if the procedure is not registered for this collection,
                (400) if the reference belongs to another collection
        """
        from ..procedure.ExecutionBudget import ExecutionBudget
        from ..procedure.ProcedureContext import ProcedureContext
        from ..procedure.registry import PROCEDURES

        impl = self._require_impl()
        if procedure.self_link != f"{impl.collection_link}/sprocs/{procedure.id}":
            raise StoreError(f"Procedure {procedure.self_link!r} does not belong to {impl.collection_link}", code=400)
        if procedure.id not in PROCEDURES or impl.find_procedure(procedure.id) is None:
            raise StoreError(f"Procedure {procedure.id!r} is not registered for {impl.collection_link}", code=404)

        context = ProcedureContext(
            impl,
            ExecutionBudget.from_config(self.procedure_config),
            page_size=self.database_config.page_size,
        )
        logger.debug(f"Executing procedure {procedure.id!r} on {impl.collection_link}")
        return PROCEDURES[procedure.id](context, *args)
