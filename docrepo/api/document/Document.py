"""Document representation shared by the store backends and the procedures."""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Fields owned by the store; callers never write them directly.
SYSTEM_FIELDS = frozenset({"_id", "id", "_self", "_etag", "_ts"})


class FieldKind(Enum):
    """Tag describing the shape of a document field value."""

    SCALAR = "scalar"
    ARRAY = "array"
    OBJECT = "object"

    @classmethod
    def of(cls, value: Any) -> "FieldKind":
        if isinstance(value, list):
            return cls.ARRAY
        if isinstance(value, dict):
            return cls.OBJECT
        return cls.SCALAR


@dataclass(frozen=True)
class Document:
    """A stored document: system fields plus an ordered mapping of user fields."""

    id: str
    self_link: str
    etag: str
    fields: dict[str, Any] = field(default_factory=dict)
    ts: int | None = None

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> "Document":
        """Build a Document from the raw mapping returned by the store."""
        try:
            document_id = raw["id"]
            self_link = raw["_self"]
            etag = raw["_etag"]
        except KeyError as e:
            raise ValueError(f"Raw document is missing system field {e.args[0]!r}") from e
        fields = {name: copy.deepcopy(value) for name, value in raw.items() if name not in SYSTEM_FIELDS}
        return cls(id=document_id, self_link=self_link, etag=etag, fields=fields, ts=raw.get("_ts"))

    def to_raw(self) -> dict[str, Any]:
        raw: dict[str, Any] = {"id": self.id, **copy.deepcopy(self.fields), "_self": self.self_link, "_etag": self.etag}
        if self.ts is not None:
            raw["_ts"] = self.ts
        return raw

    def with_fields(self, fields: dict[str, Any]) -> "Document":
        return Document(id=self.id, self_link=self.self_link, etag=self.etag, fields=fields, ts=self.ts)
