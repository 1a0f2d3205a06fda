"""Per-invocation execution budget."""

import time
from collections.abc import Callable

from .ProcedureConfig import ProcedureConfig


class ExecutionBudget:
    """Wall-clock deadline plus an optional ceiling on store operations.

    Every store operation of a procedure calls ``accept()`` first. Once the
    budget refuses an operation it refuses every later one as well.
    """

    def __init__(
        self,
        timeout_secs: float,
        max_operations: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._clock = clock
        self._deadline = clock() + timeout_secs
        self.max_operations = max_operations
        self.operations = 0

    @classmethod
    def from_config(cls, config: ProcedureConfig) -> "ExecutionBudget":
        return cls(config.timeout_secs, config.max_operations)

    @property
    def exhausted(self) -> bool:
        if self._clock() >= self._deadline:
            return True
        return self.max_operations is not None and self.operations >= self.max_operations

    def accept(self) -> bool:
        """Reserve one operation; False means the operation must not be performed."""
        if self.exhausted:
            return False
        self.operations += 1
        return True
