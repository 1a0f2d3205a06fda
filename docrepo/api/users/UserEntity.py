"""The user entity."""

from datetime import datetime

from pydantic import Field

from ..repository.Entity import Entity


class UserEntity(Entity):
    key: str = Field(..., min_length=1, description="Lookup key of the user")
    text: str = Field(..., description="Free text")
    date: datetime = Field(..., description="Creation date")

    def __str__(self) -> str:
        return f"UserEntity{{id: {self.id}, key: {self.key}, text: {self.text}, date: {self.date.isoformat()}}}"
