"""Data transfer objects exchanged with the host search function."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List


class SearchStatus(str, Enum):
    """Enumerate the outcomes of a search launched from the history."""

    OK = "ok"
    ERROR = "error"
    CANCELLED = "cancelled"


@dataclass(slots=True)
class SearchResponse:
    """Wrap the result set or the error returned by a search."""

    status: SearchStatus
    message: str = ""
    results: List[Any] = field(default_factory=list)

    @classmethod
    def ok(cls, results: List[Any]) -> "SearchResponse":
        return cls(status=SearchStatus.OK, results=list(results))

    @classmethod
    def error(cls, message: str) -> "SearchResponse":
        return cls(status=SearchStatus.ERROR, message=message)

    @classmethod
    def cancelled(cls) -> "SearchResponse":
        return cls(status=SearchStatus.CANCELLED, message="Búsqueda cancelada.")
