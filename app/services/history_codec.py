"""JSON codec for the search history document."""

from __future__ import annotations

import json
from typing import Any, List, Sequence

from app.dtos.history_entry import SearchHistoryEntry


class HistoryCodecError(ValueError):
    """Raised when the history document cannot be decoded or encoded."""


def _parse_entry(position: int, raw: Any) -> SearchHistoryEntry:
    """Validate a single raw entry, ignoring unknown fields."""

    if not isinstance(raw, dict):
        raise HistoryCodecError(f"La entrada {position} no es un objeto.")
    query = raw.get("query")
    ts = raw.get("ts")
    if not isinstance(query, str):
        raise HistoryCodecError(f"La entrada {position} no tiene un 'query' de texto.")
    # bool is a subclass of int
    if not isinstance(ts, int) or isinstance(ts, bool):
        raise HistoryCodecError(f"La entrada {position} no tiene un 'ts' entero.")
    return SearchHistoryEntry(query=query, ts=ts)


def decode_document(text: str) -> List[SearchHistoryEntry]:
    """Parse the JSON text into entries, rejecting the whole document on any error."""

    if not text or not text.strip():
        raise HistoryCodecError("El documento de historial está vacío.")
    try:
        payload = json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise HistoryCodecError(f"JSON inválido: {exc}") from exc
    if not isinstance(payload, dict):
        raise HistoryCodecError("El documento de historial no es un objeto.")
    raw_entries = payload.get("entries")
    if not isinstance(raw_entries, list):
        raise HistoryCodecError("El campo 'entries' no es una lista.")
    return [_parse_entry(position, raw) for position, raw in enumerate(raw_entries)]


def encode_document(entries: Sequence[SearchHistoryEntry]) -> str:
    """Serialize the entries into the persisted JSON document."""

    try:
        return json.dumps(
            {"entries": [entry.to_dict() for entry in entries]},
            ensure_ascii=False,
            indent=2,
        )
    except (AttributeError, TypeError, ValueError) as exc:
        raise HistoryCodecError(f"No fue posible serializar el historial: {exc}") from exc
