"""Base model for entities persisted by a repository."""

from pydantic import BaseModel, ConfigDict, Field


class Entity(BaseModel):
    """Entity fields plus the system fields the store assigns.

    ``id`` may be omitted on create; the store then generates one.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = Field(default=None, description="Unique id within the collection")
    self_link: str | None = Field(default=None, alias="_self", description="Store link of the document")
    etag: str | None = Field(default=None, alias="_etag", description="Version token of the last write")
    ts: int | None = Field(default=None, alias="_ts", description="Epoch seconds of the last write")

    def to_document(self) -> dict:
        """Serialize to the raw document body (system fields excluded)."""
        return self.model_dump(mode="json", exclude={"self_link", "etag", "ts"}, exclude_none=True)
