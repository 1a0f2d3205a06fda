"""Bulk delete procedure: empties a collection within one execution budget."""

import logging
from typing import Any

from .ProcedureContext import ProcedureContext

BULK_DELETE_PROCEDURE_ID = "bulkDelete"

logger = logging.getLogger(__name__)


def bulk_delete(context: ProcedureContext) -> dict[str, Any]:
    """Delete every document of the collection, one at a time.

    Deletes a whole page before querying the next one, so writes take
    priority over reads when the budget runs out.

    Returns:
        ``{"deleted": n, "continuation": bool}``; ``continuation`` is true when
        the budget stopped the run and documents may remain.
    """
    body: dict[str, Any] = {"deleted": 0, "continuation": False}
    continuation: str | None = None

    while True:
        page = context.query_documents(None, continuation=continuation)
        if page is None:
            body["continuation"] = True
            break
        if not page.documents:
            break

        for document in page.documents:
            if not context.delete_document(document["_self"]):
                # Remaining documents of this page are picked up by the next invocation.
                body["continuation"] = True
                logger.debug(f"Bulk delete on {context.collection_link} stopped after {body['deleted']} deletes")
                return body
            body["deleted"] += 1

        continuation = page.continuation

    return body
