"""Show user command."""

from collections.abc import Iterator

from ..errors import RepositoryError, UnexpectedDbError
from ..StageResult import StageResult
from ._load_repository import _load_repository


def cmd_show(key: str) -> StageResult:
    """Find a user by key."""

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        yield (0.2, "Loading configuration...")
        try:
            repository = _load_repository()
        except ValueError as e:
            yield (1.0, "Complete")
            result_obj.result = str(e)
            result_obj.output = {"errors": [str(e)], "warnings": [], "key": key, "user": None}
            return

        yield (0.6, f"Querying users with key {key!r}...")
        try:
            user = repository.find_by_key(key)
        except (RepositoryError, UnexpectedDbError) as e:
            yield (1.0, "Complete")
            result_obj.result = f"Query failed: {e}"
            result_obj.output = {"errors": [str(e)], "warnings": [], "key": key, "user": None}
            return

        yield (1.0, "Complete")
        if user is None:
            result_obj.result = f"User with key {key!r} not found"
            result_obj.output = {"errors": [result_obj.result], "warnings": [], "key": key, "user": None}
            return
        result_obj.success = True
        result_obj.result = f"Found {user}"
        result_obj.output = {
            "errors": [],
            "warnings": [],
            "key": key,
            "user": user.model_dump(mode="json", by_alias=True),
        }

    return StageResult(
        announce=f"Looking up user {key!r}...",
        progress_callback=do_work,
    )
