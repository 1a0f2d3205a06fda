"""Users repository: CRUD operations and more on UserEntity."""

from ..config.RepositoryConfig import RepositoryConfig
from ..repository.BaseRepository import BaseRepository
from .UserEntity import UserEntity

USERS_COLLECTION = "users"


class UsersRepository(BaseRepository[UserEntity]):
    def __init__(self, config: RepositoryConfig | None = None):
        super().__init__(USERS_COLLECTION, UserEntity, config)

    def find_by_key(self, key: str) -> UserEntity | None:
        """Return the first user with ``key`` or None if nothing was found."""
        with self._handle_repository_errors("find_by_key"):
            with self._database() as database:
                raw = next(database.iter_documents({"key": key}), None)
            return self._to_entity(raw) if raw is not None else None
