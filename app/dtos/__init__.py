"""Package for the search history DTOs."""

from app.dtos.history_entry import SearchHistoryEntry
from app.dtos.history_result import HistoryWriteResult, HistoryWriteStatus
from app.dtos.search_response import SearchResponse, SearchStatus

__all__ = [
    "HistoryWriteResult",
    "HistoryWriteStatus",
    "SearchHistoryEntry",
    "SearchResponse",
    "SearchStatus",
]
