"""Reference to a procedure provisioned for a collection."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ProcedureRef:
    id: str
    self_link: str

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> "ProcedureRef":
        return cls(id=raw["id"], self_link=raw["_self"])
