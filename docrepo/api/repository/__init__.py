"""Repository pattern over the document store.

Repositories:
- BaseRepository: common CRUD operations plus the update and bulk delete procedures
- UsersRepository (docrepo.api.users): user-specific queries
"""

from .BaseRepository import BaseRepository
from .Entity import Entity

__all__ = [
    "BaseRepository",
    "Entity",
]
