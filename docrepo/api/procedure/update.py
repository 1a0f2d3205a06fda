"""Update procedure: atomic, optimistic-concurrency-checked field update of one document."""

import logging
from typing import Any

from ..document.Document import Document
from ..errors import BudgetExceededError, DocumentNotFoundError, ProcedureValidationError
from ._operators import apply_update_commands
from .ProcedureContext import ProcedureContext
from .UpdateCommands import UpdateCommands

UPDATE_PROCEDURE_ID = "update"

logger = logging.getLogger(__name__)


def _find_by_id(context: ProcedureContext, document_id: str) -> Document:
    """Query for the document with ``document_id``, following continuation tokens."""
    continuation: str | None = None
    while True:
        page = context.query_documents({"id": document_id}, continuation=continuation)
        if page is None:
            raise BudgetExceededError("The update procedure timed out while querying.")
        if page.documents:
            return Document.from_raw(page.documents[0])
        if not page.continuation:
            raise DocumentNotFoundError(document_id)
        # An empty page with a continuation token only means the store stopped early.
        continuation = page.continuation


def update(context: ProcedureContext, document_id: str, commands: Any) -> dict[str, Any]:
    """Apply ``commands`` to the document ``document_id`` and return the replaced document.

    Operators run in the order $set, $pop, $push, $unshift. The write-back
    only succeeds if nobody replaced the document since it was read.

    Raises:
        ProcedureValidationError: missing id or invalid commands (no store I/O performed)
        DocumentNotFoundError: no document with this id
        OperatorTypeError: an array operator targets an absent or non-array field
        ConcurrencyConflictError: the document changed between read and replace
        BudgetExceededError: the execution budget declined the query or the replace
        StoreError: any other store failure
    """
    if not isinstance(document_id, str) or not document_id:
        raise ProcedureValidationError("The id is undefined or empty.")
    update_commands = UpdateCommands.parse(commands)

    document = _find_by_id(context, document_id)
    updated = apply_update_commands(document, update_commands)

    replaced = context.replace_document(document.self_link, updated.to_raw(), etag=document.etag)
    if replaced is None:
        raise BudgetExceededError("The update procedure timed out while replacing.")
    logger.debug(f"Updated {document.self_link} (etag {document.etag} -> {replaced['_etag']})")
    return replaced
