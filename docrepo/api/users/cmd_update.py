"""Update user command."""

import json
from collections.abc import Iterator

from ..errors import ProcedureValidationError, RepositoryError, UnexpectedDbError
from ..procedure.UpdateCommands import UpdateCommands
from ..StageResult import StageResult
from ._load_repository import _load_repository


def cmd_update(user_id: str, commands: str) -> StageResult:
    """Apply update commands given as a JSON string, e.g. '{"$push": {"tags": "c"}}'."""

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        def fail(message: str) -> None:
            result_obj.result = message
            result_obj.output = {"errors": [message], "warnings": [], "id": user_id, "user": None}

        yield (0.2, "Parsing commands...")
        try:
            update_commands = UpdateCommands.parse(json.loads(commands))
        except json.JSONDecodeError as e:
            yield (1.0, "Complete")
            fail(f"Invalid JSON: {e}")
            return
        except ProcedureValidationError as e:
            yield (1.0, "Complete")
            fail(str(e))
            return

        yield (0.4, "Loading configuration...")
        try:
            repository = _load_repository()
        except ValueError as e:
            yield (1.0, "Complete")
            fail(str(e))
            return

        yield (0.7, "Updating user...")
        try:
            user = repository.update(user_id, update_commands)
        except (RepositoryError, UnexpectedDbError) as e:
            yield (1.0, "Complete")
            fail(f"Update failed: {e}")
            return

        yield (1.0, "Complete")
        result_obj.success = True
        result_obj.result = f"Updated {user}"
        result_obj.output = {
            "errors": [],
            "warnings": [],
            "id": user_id,
            "user": user.model_dump(mode="json", by_alias=True),
        }

    return StageResult(
        announce=f"Updating user {user_id!r}...",
        progress_callback=do_work,
    )
