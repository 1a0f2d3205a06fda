"""Procedures executed against a collection within an execution budget."""

from .bulk_delete import BULK_DELETE_PROCEDURE_ID, bulk_delete
from .ExecutionBudget import ExecutionBudget
from .ProcedureConfig import ProcedureConfig
from .ProcedureContext import ProcedureContext
from .registry import PROCEDURES
from .update import UPDATE_PROCEDURE_ID, update
from .UpdateCommands import UpdateCommands

__all__ = [
    "BULK_DELETE_PROCEDURE_ID",
    "PROCEDURES",
    "UPDATE_PROCEDURE_ID",
    "ExecutionBudget",
    "ProcedureConfig",
    "ProcedureContext",
    "UpdateCommands",
    "bulk_delete",
    "update",
]
