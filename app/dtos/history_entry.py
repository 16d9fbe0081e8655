"""Data Transfer Objects used across the search history feature."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict


@dataclass(frozen=True)
class SearchHistoryEntry:
    """Represent a single query persisted in the search history file."""

    query: str
    ts: int

    @property
    def key(self) -> str:
        """Return the case-insensitive key used to detect duplicates."""

        return self.query.lower()

    @property
    def searchedAt(self) -> datetime:
        """Expose the timestamp as a local ``datetime`` for the view layer."""

        return datetime.fromtimestamp(self.ts)

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-friendly representation stored on disk."""

        return {"query": self.query, "ts": self.ts}
