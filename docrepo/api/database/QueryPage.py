"""One page of query results."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class QueryPage:
    """Documents of one page plus the token resuming the query (None on the last page)."""

    documents: list[dict[str, Any]] = field(default_factory=list)
    continuation: str | None = None
