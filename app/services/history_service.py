"""Business logic to manage the most-recently-used search history."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, List, Optional, Sequence

from app.daos.history_dao import HistoryDAOError, HistoryFileDAO
from app.dtos.history_entry import SearchHistoryEntry
from app.dtos.history_result import HistoryWriteResult, HistoryWriteStatus
from app.services.history_codec import HistoryCodecError, decode_document, encode_document


logger = logging.getLogger(__name__)

MAX_ENTRIES = 100


def normalize_query(value: Any) -> Optional[str]:
    """Return the trimmed query or ``None`` when it cannot be stored."""

    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    return cleaned or None


def promote_query(
    entries: Sequence[SearchHistoryEntry],
    query: str,
    ts: int,
    limit: int = MAX_ENTRIES,
) -> List[SearchHistoryEntry]:
    """Move ``query`` to the front, dropping older duplicates and the overflow."""

    new_entry = SearchHistoryEntry(query=query, ts=ts)
    promoted = [new_entry]
    promoted.extend(entry for entry in entries if entry.key != new_entry.key)
    return promoted[:limit]


def remove_position(
    entries: Sequence[SearchHistoryEntry], index: Any
) -> Optional[List[SearchHistoryEntry]]:
    """Return the entries without the 1-based ``index`` or ``None`` if out of range."""

    if not isinstance(index, int) or isinstance(index, bool):
        return None
    if index < 1 or index > len(entries):
        return None
    remaining = list(entries)
    del remaining[index - 1]
    return remaining


def _epoch_seconds() -> int:
    return int(time.time())


class SearchHistoryService:
    """Own the search history file and enforce its dedup and cap rules.

    Every operation reads the document from disk, applies its change and writes
    the full document back while holding the DAO lock, so no copy of the list
    is kept between calls.
    """

    def __init__(
        self,
        dao: HistoryFileDAO,
        clock: Optional[Callable[[], int]] = None,
        max_entries: int = MAX_ENTRIES,
    ) -> None:
        """Create the service with its DAO, clock and capacity."""
        self.dao = dao
        self._clock = clock or _epoch_seconds
        self.max_entries = max_entries

    def load(self) -> List[SearchHistoryEntry]:
        """Return the stored entries, or an empty list when they cannot be read."""
        try:
            text = self.dao.read_all()
        except HistoryDAOError as exc:
            logger.warning("No fue posible leer el historial de búsqueda: %s", exc)
            return []
        if text is None or not text.strip():
            return []
        try:
            return decode_document(text)
        except HistoryCodecError as exc:
            logger.warning("El historial de búsqueda está dañado y se ignora: %s", exc)
            return []

    def save(self, entries: Sequence[SearchHistoryEntry]) -> HistoryWriteResult:
        """Persist ``entries`` as the whole document."""
        try:
            text = encode_document(entries)
        except HistoryCodecError as exc:
            return HistoryWriteResult(HistoryWriteStatus.ENCODE_FAILED, str(exc))
        try:
            self.dao.write_all(text)
        except HistoryDAOError as exc:
            return HistoryWriteResult(HistoryWriteStatus.WRITE_FAILED, str(exc))
        return HistoryWriteResult(HistoryWriteStatus.SAVED, entryCount=len(entries))

    def add(self, query: Any) -> HistoryWriteResult:
        """Register ``query`` as the most recent search."""
        cleaned = normalize_query(query)
        if cleaned is None:
            return HistoryWriteResult(HistoryWriteStatus.SKIPPED, "Consulta vacía o inválida.")
        with self.dao.lock:
            entries = promote_query(self.load(), cleaned, self._clock(), self.max_entries)
            return self.save(entries)

    def remove_at(self, index: Any) -> HistoryWriteResult:
        """Delete the entry at the 1-based ``index`` when it exists."""
        with self.dao.lock:
            remaining = remove_position(self.load(), index)
            if remaining is None:
                return HistoryWriteResult(HistoryWriteStatus.SKIPPED, f"Índice fuera de rango: {index!r}.")
            return self.save(remaining)

    def clear(self) -> HistoryWriteResult:
        """Discard the whole history."""
        with self.dao.lock:
            return self.save([])

    def list_entries(self) -> List[SearchHistoryEntry]:
        """Return the current entries ordered from newest to oldest."""
        return self.load()
