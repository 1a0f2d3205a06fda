"""Build a UsersRepository from the configuration file."""

from ..config.RepositoryConfig import RepositoryConfig
from .UsersRepository import UsersRepository


def _load_repository() -> UsersRepository:
    """Raises ValueError if the configuration cannot be loaded."""
    return UsersRepository(RepositoryConfig.load())
