"""Error hierarchy for the document store, its procedures and the repositories."""


class DocRepoError(Exception):
    """Base class for all docrepo errors."""


class ProcedureError(DocRepoError):
    """Raised by a procedure when an invocation cannot complete."""


class ProcedureValidationError(ProcedureError, ValueError):
    """Raised when procedure arguments are missing or invalid (before any store I/O)."""


class DocumentNotFoundError(ProcedureError):
    """Raised when the document targeted by an update does not exist."""

    def __init__(self, document_id: str):
        self.document_id = document_id
        super().__init__(f"Document not found: {document_id!r}")


class OperatorTypeError(ProcedureError, TypeError):
    """Raised when an array operator targets a field that is absent or not an array."""

    def __init__(self, operator: str, field: str):
        self.operator = operator
        self.field = field
        super().__init__(f"Bad {operator} parameter - field {field!r} in document must be an array.")


class BudgetExceededError(ProcedureError):
    """Raised when the execution budget declined a store operation."""

    def __init__(self, message: str = "The procedure exceeded its execution budget."):
        super().__init__(message)


class StoreError(DocRepoError):
    """Failure of a store primitive (query, create, replace, delete).

    ``code`` follows HTTP status semantics: 400 bad request, 404 not found,
    409 conflict, 412 precondition failed.
    """

    def __init__(self, message: str, code: int = 500):
        self.code = code
        super().__init__(message)

    def __str__(self) -> str:
        return f"{type(self).__name__}(code: {self.code}): {self.args[0]}"


class ConcurrencyConflictError(StoreError):
    """Raised when a conditional replace finds a different version token than the one read."""

    def __init__(self, document_id: str, etag: str):
        self.document_id = document_id
        self.etag = etag
        super().__init__(f"Document {document_id!r} was modified since version {etag!r} was read", code=412)


class RepositoryError(DocRepoError):
    """Raised by repositories for every anticipated failure."""


class UnexpectedDbError(DocRepoError):
    """Raised by repositories when a failure could not be classified."""
