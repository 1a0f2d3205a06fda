"""Store access for a running procedure, gated by its execution budget."""

import logging
from typing import TYPE_CHECKING, Any

from .ExecutionBudget import ExecutionBudget

if TYPE_CHECKING:
    from ..database._AbstractBackend import _AbstractBackend
    from ..database.QueryPage import QueryPage

logger = logging.getLogger(__name__)


class ProcedureContext:
    """What a procedure sees of the store during one invocation.

    Each operation returns a "not accepted" value (None or False) instead of
    touching the store once the budget is exhausted. Store errors propagate.
    """

    def __init__(self, backend: "_AbstractBackend", budget: ExecutionBudget, page_size: int = 100):
        self._backend = backend
        self.budget = budget
        self.page_size = page_size

    @property
    def collection_link(self) -> str:
        return self._backend.collection_link

    def _accept(self, operation: str) -> bool:
        if self.budget.accept():
            return True
        logger.debug(f"{operation} not accepted on {self.collection_link} after {self.budget.operations} operations")
        return False

    def query_documents(self, filter: dict[str, Any] | None, continuation: str | None = None) -> "QueryPage | None":
        if not self._accept("query"):
            return None
        return self._backend.query_page(filter, continuation, self.page_size)

    def replace_document(self, self_link: str, body: dict[str, Any], etag: str) -> dict[str, Any] | None:
        if not self._accept("replace"):
            return None
        return self._backend.replace_document(self_link, body, etag)

    def delete_document(self, self_link: str) -> bool:
        if not self._accept("delete"):
            return False
        self._backend.delete_document(self_link)
        return True
