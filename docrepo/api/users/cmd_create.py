"""Create user command."""

from collections.abc import Iterator
from datetime import datetime, timezone

import pydantic

from ..errors import RepositoryError, UnexpectedDbError
from ..StageResult import StageResult
from ._load_repository import _load_repository
from .UserEntity import UserEntity


def cmd_create(user_id: str, key: str, text: str) -> StageResult:
    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        def fail(message: str) -> None:
            result_obj.result = message
            result_obj.output = {"errors": [message], "warnings": [], "user": None}

        yield (0.2, "Validating user...")
        try:
            user = UserEntity(id=user_id, key=key, text=text, date=datetime.now(timezone.utc))
        except pydantic.ValidationError as e:
            yield (1.0, "Complete")
            fail(f"Invalid user: {e.errors()[0]['msg']}")
            return

        yield (0.4, "Loading configuration...")
        try:
            repository = _load_repository()
        except ValueError as e:
            yield (1.0, "Complete")
            fail(str(e))
            return

        yield (0.7, "Creating user...")
        try:
            created = repository.create(user)
        except (RepositoryError, UnexpectedDbError) as e:
            yield (1.0, "Complete")
            fail(f"Create failed: {e}")
            return

        yield (1.0, "Complete")
        result_obj.success = True
        result_obj.result = f"Created {created}"
        result_obj.output = {"errors": [], "warnings": [], "user": created.model_dump(mode="json", by_alias=True)}

    return StageResult(
        announce=f"Creating user {user_id!r}...",
        progress_callback=do_work,
    )
