"""Controller responsible for interacting with the search history service."""

from __future__ import annotations

import logging
from typing import Any, List, Sequence

from app.dtos.history_entry import SearchHistoryEntry
from app.dtos.history_result import HistoryWriteResult
from app.services.history_service import SearchHistoryService


logger = logging.getLogger(__name__)


class HistoryController:
    """Expose the history store to the views without surfacing write failures."""

    def __init__(self, history_service: SearchHistoryService) -> None:
        """Initialize the controller with the history service dependency."""

        self._history_service = history_service

    def list_entries(self) -> List[SearchHistoryEntry]:
        """Return the stored queries from newest to oldest."""

        return self._history_service.list_entries()

    def add(self, query: Any) -> None:
        """Record a search, moving it to the top of the history."""

        self._report("registrar la búsqueda", self._history_service.add(query))

    def remove_at(self, index: int) -> None:
        """Delete the entry shown at the 1-based ``index``."""

        self._report("eliminar la entrada", self._history_service.remove_at(index))

    def clear(self) -> None:
        """Remove every stored query."""

        self._report("limpiar el historial", self._history_service.clear())

    def save(self, entries: Sequence[SearchHistoryEntry]) -> bool:
        """Persist the given entries and return whether the write succeeded."""

        result = self._history_service.save(entries)
        self._report("guardar el historial", result)
        return bool(result)

    @staticmethod
    def _report(action: str, result: HistoryWriteResult) -> None:
        if result.failed:
            logger.error("No fue posible %s: %s", action, result.message)
