"""Reset users command - deletes all users through the bulk delete procedure."""

from collections.abc import Iterator

from ..errors import RepositoryError, UnexpectedDbError
from ..StageResult import StageResult
from ._load_repository import _load_repository


def cmd_reset() -> StageResult:
    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        yield (0.2, "Loading configuration...")
        try:
            repository = _load_repository()
        except ValueError as e:
            yield (1.0, "Complete")
            result_obj.result = str(e)
            result_obj.output = {"errors": [str(e)], "warnings": [], "deleted_count": 0}
            return

        yield (0.5, "Deleting users...")
        try:
            deleted = repository.remove_all()
        except (RepositoryError, UnexpectedDbError) as e:
            yield (1.0, "Complete")
            result_obj.result = f"Reset failed: {e}"
            result_obj.output = {"errors": [str(e)], "warnings": [], "deleted_count": 0}
            return

        yield (1.0, "Complete")
        result_obj.success = True
        result_obj.result = f"Deleted {deleted} user(s)"
        result_obj.output = {"errors": [], "warnings": [], "deleted_count": deleted}

    return StageResult(
        announce="Resetting users...",
        progress_callback=do_work,
    )
