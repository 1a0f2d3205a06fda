"""Procedures known to the store, by stable id."""

from collections.abc import Callable
from typing import Any

from .bulk_delete import BULK_DELETE_PROCEDURE_ID, bulk_delete
from .update import UPDATE_PROCEDURE_ID, update

PROCEDURES: dict[str, Callable[..., Any]] = {
    UPDATE_PROCEDURE_ID: update,
    BULK_DELETE_PROCEDURE_ID: bulk_delete,
}
