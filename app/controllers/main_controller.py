"""Controller coordinating the desktop view with domain services."""

from __future__ import annotations

import logging
from typing import Optional

from app.config.history_config import SearchHistoryConfiguration
from app.controllers.history_controller import HistoryController
from app.controllers.search_history_list_controller import SearchFunction, SearchHistoryListController
from app.daos.history_dao import HistoryFileDAO
from app.dtos.search_response import SearchResponse
from app.services.history_service import SearchHistoryService


def _unconfigured_search(query: str) -> SearchResponse:
    """Fallback used when the host did not provide a search backend."""

    return SearchResponse.error("No hay un motor de búsqueda configurado.")


class MainController:
    """Aggregate specialized controllers required by the desktop GUI."""

    _logger = logging.getLogger(__name__)

    def __init__(
        self,
        search_function: Optional[SearchFunction] = None,
        configuration: Optional[SearchHistoryConfiguration] = None,
    ) -> None:
        """Bootstrap services and expose domain specific controllers."""

        self.configuration = configuration or SearchHistoryConfiguration()
        history_path = self.configuration.get_history_path()
        self._logger.info("Historial de búsqueda en %s", history_path)

        history_service = SearchHistoryService(
            HistoryFileDAO(history_path),
            max_entries=self.configuration.get_max_entries(),
        )
        self.history = HistoryController(history_service)
        self.search_function: SearchFunction = search_function or _unconfigured_search
        self.searchHistory = SearchHistoryListController(self.history, self.search_function)
