"""Controller binding the search history list to the host search function."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from app.controllers.history_controller import HistoryController
from app.dtos.history_entry import SearchHistoryEntry
from app.dtos.search_response import SearchResponse


logger = logging.getLogger(__name__)

EMPTY_HISTORY_TEXT = "Aún no hay búsquedas en el historial."

SearchFunction = Callable[[str], SearchResponse]


@dataclass(frozen=True)
class HistoryRow:
    """Describe a row rendered by the history list."""

    index: Optional[int]
    query: str
    text: str
    searchedAt: str = ""
    selectable: bool = True


def _format_timestamp(value: datetime) -> str:
    """Return a friendly formatted datetime string."""

    return value.strftime("%Y-%m-%d %H:%M")


def build_rows(entries: List[SearchHistoryEntry]) -> List[HistoryRow]:
    """Translate the stored entries into list rows, with an empty-state fallback."""

    if not entries:
        return [HistoryRow(index=None, query="", text=EMPTY_HISTORY_TEXT, selectable=False)]
    return [
        HistoryRow(
            index=position,
            query=entry.query,
            text=entry.query,
            searchedAt=_format_timestamp(entry.searchedAt),
        )
        for position, entry in enumerate(entries, start=1)
    ]


class SearchHistoryListController:
    """Coordinate row rendering, selection and deletion for the history list."""

    def __init__(self, history: HistoryController, search_function: SearchFunction) -> None:
        """Store the history controller and the search callable provided by the host."""

        self._history = history
        self._search_function = search_function

    def build_rows(self) -> List[HistoryRow]:
        """Return the rows reflecting the current content of the history file."""

        return build_rows(self._history.list_entries())

    def is_empty(self) -> bool:
        """Return ``True`` when there is nothing stored in the history."""

        return not self._history.list_entries()

    def select(
        self,
        row: HistoryRow,
        cancel_event: Optional[threading.Event] = None,
    ) -> Optional[SearchResponse]:
        """Move the selected query to the top and run the search for it.

        Returns ``None`` when the row cannot be searched, a cancelled response
        when ``cancel_event`` was set while the search was running, or the
        response of the search function otherwise.
        """

        if not row.selectable or not row.query:
            return None

        self._history.add(row.query)

        try:
            response = self._search_function(row.query)
        except Exception as exc:
            logger.error("La búsqueda de '%s' falló: %s", row.query, exc)
            response = SearchResponse.error(str(exc))

        if cancel_event is not None and cancel_event.is_set():
            return SearchResponse.cancelled()
        return response

    def delete(self, row: HistoryRow) -> List[HistoryRow]:
        """Remove the row from the history and return the refreshed rows."""

        if row.selectable and row.index is not None:
            self._history.remove_at(row.index)
        return self.build_rows()

    def clear(self) -> List[HistoryRow]:
        """Discard the whole history and return the refreshed rows."""

        self._history.clear()
        return self.build_rows()
