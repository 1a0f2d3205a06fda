"""Base class for all repositories."""

import logging
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

import pydantic
import pymongo.errors

from ...mongo_retry import mongo_retry
from ..config.RepositoryConfig import RepositoryConfig
from ..database.Database import Database
from ..database.ProcedureRef import ProcedureRef
from ..errors import (
    BudgetExceededError,
    ConcurrencyConflictError,
    ProcedureError,
    RepositoryError,
    StoreError,
    UnexpectedDbError,
)
from ..procedure.bulk_delete import BULK_DELETE_PROCEDURE_ID
from ..procedure.update import UPDATE_PROCEDURE_ID
from ..procedure.UpdateCommands import UpdateCommands
from .Entity import Entity

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Entity)

# Failures re-invoking the whole update can fix; everything else is surfaced.
RETRYABLE_ERRORS = (ConcurrencyConflictError, BudgetExceededError)


class BaseRepository(Generic[T]):
    """CRUD operations on one collection, mapping raw documents to ``entity_class``.

    Subclasses pass their collection id and entity class and add specialized queries.
    Every public method raises ``RepositoryError`` for anticipated failures and
    ``UnexpectedDbError`` for anything else; the original exception is chained.
    """

    def __init__(self, collection_id: str, entity_class: type[T], config: RepositoryConfig | None = None):
        self.collection_id = collection_id
        self.entity_class = entity_class
        self._config = config
        self._procedures: dict[str, ProcedureRef] | None = None
        self._provision_lock = threading.Lock()

    @property
    def config(self) -> RepositoryConfig:
        if self._config is None:
            self._config = RepositoryConfig.load()
        return self._config

    def _database(self) -> Database:
        return Database(self.config.database, self.collection_id, self.config.procedure)

    def ensure_provisioned(self) -> dict[str, ProcedureRef]:
        """Register the update and bulk delete procedures for the collection, once."""
        with self._provision_lock:
            if self._procedures is None:
                with self._database() as database:
                    self._procedures = {
                        procedure_id: database.get_or_create_procedure(procedure_id)
                        for procedure_id in (UPDATE_PROCEDURE_ID, BULK_DELETE_PROCEDURE_ID)
                    }
            return self._procedures

    def create(self, entity: T) -> T:
        with self._handle_repository_errors("create"):
            with self._database() as database:
                raw = database.create_document(entity.to_document())
            return self._to_entity(raw)

    def find_one(self, document_id: str) -> T | None:
        """Return the entity with ``document_id`` or None if nothing was found."""
        with self._handle_repository_errors("find_one"):
            with self._database() as database:
                raw = database.read_document(document_id)
            return self._to_entity(raw) if raw is not None else None

    def find_all(self) -> list[T]:
        with self._handle_repository_errors("find_all"):
            with self._database() as database:
                raws = database.query_all()
            return [self._to_entity(raw) for raw in raws]

    def update(self, entity_or_id: T | str, commands: UpdateCommands | dict[str, Any]) -> T:
        """Apply update commands atomically through the update procedure.

        Concurrency conflicts and budget refusals re-invoke the whole procedure
        (which re-reads the document) with exponential backoff.
        """
        with self._handle_repository_errors("update"):
            document_id = self._document_id(entity_or_id)
            wire = commands.to_wire() if isinstance(commands, UpdateCommands) else commands
            procedure = self.ensure_provisioned()[UPDATE_PROCEDURE_ID]
            retry = self.config.retry

            @mongo_retry(
                max_attempts=retry.max_attempts,
                delay_secs=retry.delay_secs,
                backoff_multiplier=retry.backoff_multiplier,
                exceptions=RETRYABLE_ERRORS,
            )
            def execute_update() -> dict[str, Any]:
                with self._database() as database:
                    return database.execute_procedure(procedure, document_id, wire)

            return self._to_entity(execute_update())

    def remove(self, entity_or_id: T | str) -> None:
        with self._handle_repository_errors("remove"):
            with self._database() as database:
                if isinstance(entity_or_id, Entity) and entity_or_id.self_link:
                    document_link = entity_or_id.self_link
                else:
                    document_link = database.document_link(self._document_id(entity_or_id))
                database.delete_document(document_link)

    def remove_all(self) -> int:
        """Delete every document, re-invoking the bulk delete procedure until it completes.

        Returns:
            Number of deleted documents
        """
        with self._handle_repository_errors("remove_all"):
            procedure = self.ensure_provisioned()[BULK_DELETE_PROCEDURE_ID]
            retry = self.config.retry
            total = 0
            idle_invocations = 0
            delay = retry.delay_secs
            while True:
                with self._database() as database:
                    body = database.execute_procedure(procedure)
                total += body["deleted"]
                if not body["continuation"]:
                    logger.info(f"Removed {total} document(s) from {self.collection_id}")
                    return total
                if body["deleted"]:
                    idle_invocations = 0
                    delay = retry.delay_secs
                    continue
                idle_invocations += 1
                if idle_invocations >= retry.max_attempts:
                    raise RepositoryError(
                        f"Bulk delete on {self.collection_id} made no progress after "
                        f"{idle_invocations} invocations ({total} deleted)"
                    )
                logger.warning(f"Bulk delete on {self.collection_id} made no progress; retrying in {delay}s")
                time.sleep(delay)
                delay *= retry.backoff_multiplier

    def _to_entity(self, raw: dict[str, Any]) -> T:
        return self.entity_class.model_validate(raw)

    @staticmethod
    def _document_id(entity_or_id: Entity | str) -> str:
        if isinstance(entity_or_id, str):
            return entity_or_id
        if isinstance(entity_or_id, Entity) and entity_or_id.id:
            return entity_or_id.id
        raise TypeError("The given value has no id field nor is it an id itself.")

    @contextmanager
    def _handle_repository_errors(self, operation: str) -> Iterator[None]:
        """Translate every failure of ``operation`` into the repository error types."""
        try:
            yield
        except RepositoryError:
            raise
        except (ProcedureError, StoreError, TypeError, pymongo.errors.PyMongoError) as e:
            logger.error(f"{type(e).__name__} occurred during {operation} on {self.collection_id}: {e}")
            raise RepositoryError(str(e)) from e
        except pydantic.ValidationError as e:
            logger.error(f"Validation error(s) occurred during {operation} on {self.collection_id}: {e}")
            raise RepositoryError(
                "Validation error(s) occurred during transformation from database document into entity."
            ) from e
        except Exception as e:
            logger.exception(f"Unexpected error during {operation} on {self.collection_id}")
            raise UnexpectedDbError(f"Unexpected error during {operation}: {e}") from e
