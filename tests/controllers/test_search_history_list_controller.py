"""Tests for the controller binding the history list to the search function."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import List

import pytest

import sys

sys.path.append(str(Path(__file__).resolve().parents[2]))

from app.controllers.history_controller import HistoryController
from app.controllers.search_history_list_controller import (
    EMPTY_HISTORY_TEXT,
    HistoryRow,
    SearchHistoryListController,
)
from app.daos.history_dao import HistoryFileDAO
from app.dtos.search_response import SearchResponse, SearchStatus
from app.services.history_service import SearchHistoryService


class RecordingSearch:
    """Search double that remembers the queries it received."""

    def __init__(self, response: SearchResponse) -> None:
        self.response = response
        self.queries: List[str] = []
        self.history_at_call: List[List[str]] = []
        self.history: HistoryController | None = None

    def __call__(self, query: str) -> SearchResponse:
        self.queries.append(query)
        if self.history is not None:
            self.history_at_call.append([entry.query for entry in self.history.list_entries()])
        return self.response


@pytest.fixture
def history(tmp_path: Path) -> HistoryController:
    counter = iter(range(1_717_000_000, 1_717_100_000))
    service = SearchHistoryService(HistoryFileDAO(tmp_path / "search_history.json"), clock=lambda: next(counter))
    return HistoryController(service)


def _texts(rows: List[HistoryRow]) -> List[str]:
    return [row.text for row in rows]


def test_empty_history_renders_a_single_disabled_row(history: HistoryController) -> None:
    """With no stored queries the list shows the empty-state message."""

    controller = SearchHistoryListController(history, RecordingSearch(SearchResponse.ok([])))

    rows = controller.build_rows()

    assert controller.is_empty()
    assert len(rows) == 1
    assert rows[0].text == EMPTY_HISTORY_TEXT
    assert rows[0].selectable is False


def test_rows_are_numbered_from_one_in_recency_order(history: HistoryController) -> None:
    """Rows follow the stored order and carry 1-based indices and dates."""

    history.add("b")
    history.add("a")
    controller = SearchHistoryListController(history, RecordingSearch(SearchResponse.ok([])))

    rows = controller.build_rows()

    assert [(row.index, row.query) for row in rows] == [(1, "a"), (2, "b")]
    assert all(row.searchedAt for row in rows)


def test_select_promotes_query_before_searching(history: HistoryController) -> None:
    """Selecting a row bumps it to the top before the search runs."""

    history.add("a")
    history.add("b")
    search = RecordingSearch(SearchResponse.ok(["Chapter 1"]))
    search.history = history
    controller = SearchHistoryListController(history, search)
    row = controller.build_rows()[1]

    response = controller.select(row)

    assert response is not None
    assert response.status == SearchStatus.OK
    assert response.results == ["Chapter 1"]
    assert search.queries == ["a"]
    assert search.history_at_call == [["a", "b"]]


def test_select_ignores_the_empty_state_row(history: HistoryController) -> None:
    """The placeholder row never triggers a search."""

    search = RecordingSearch(SearchResponse.ok([]))
    controller = SearchHistoryListController(history, search)

    assert controller.select(controller.build_rows()[0]) is None
    assert search.queries == []


def test_select_reports_cancellation(history: HistoryController) -> None:
    """A cancelled search returns a cancelled response but keeps the history update."""

    history.add("a")
    cancel_event = threading.Event()

    def search(query: str) -> SearchResponse:
        cancel_event.set()
        return SearchResponse.ok(["ignored"])

    controller = SearchHistoryListController(history, search)
    response = controller.select(controller.build_rows()[0], cancel_event)

    assert response is not None
    assert response.status == SearchStatus.CANCELLED
    assert [entry.query for entry in history.list_entries()] == ["a"]


def test_select_turns_search_exceptions_into_error_responses(history: HistoryController) -> None:
    """Exceptions raised by the host search function become error responses."""

    history.add("a")

    def search(query: str) -> SearchResponse:
        raise ConnectionError("servidor no disponible")

    controller = SearchHistoryListController(history, search)
    response = controller.select(controller.build_rows()[0])

    assert response is not None
    assert response.status == SearchStatus.ERROR
    assert "servidor no disponible" in response.message


def test_select_passes_error_responses_through(history: HistoryController) -> None:
    """Error responses from the backend are handed to the view unchanged."""

    history.add("a")
    controller = SearchHistoryListController(history, RecordingSearch(SearchResponse.error("timeout")))

    response = controller.select(controller.build_rows()[0])

    assert response == SearchResponse.error("timeout")


def test_delete_and_clear_refresh_the_rows(history: HistoryController) -> None:
    """Deleting and clearing return the rows re-read from the store."""

    for query in ("c", "b", "a"):
        history.add(query)
    controller = SearchHistoryListController(history, RecordingSearch(SearchResponse.ok([])))

    rows = controller.delete(controller.build_rows()[1])
    assert _texts(rows) == ["a", "c"]

    rows = controller.clear()
    assert _texts(rows) == [EMPTY_HISTORY_TEXT]


def test_delete_with_stale_row_is_tolerated(history: HistoryController) -> None:
    """A row whose index no longer exists leaves the history unchanged."""

    history.add("a")
    controller = SearchHistoryListController(history, RecordingSearch(SearchResponse.ok([])))
    stale = HistoryRow(index=5, query="gone", text="gone")

    assert _texts(controller.delete(stale)) == ["a"]
