"""Users: entity, repository and commands."""

from .UserEntity import UserEntity
from .UsersRepository import USERS_COLLECTION, UsersRepository

__all__ = [
    "USERS_COLLECTION",
    "UserEntity",
    "UsersRepository",
]
