"""Tkinter controller coordinating the search window and its history."""
from __future__ import annotations

import logging
import threading
from typing import Optional

import tkinter as tk
import ttkbootstrap as tb
from ttkbootstrap.constants import BOTH, EW, INFO, PRIMARY, SECONDARY, W, X, YES
from ttkbootstrap.dialogs import Messagebox

from app.controllers.main_controller import MainController
from app.controllers.search_history_list_controller import SearchFunction
from app.dtos.search_response import SearchResponse, SearchStatus
from app.views.search_history_view import show_search_history


logger = logging.getLogger(__name__)


class GuiController:
    """Create the GUI elements and orchestrate user interactions."""

    def __init__(self, main_controller: MainController) -> None:
        """Store dependencies used across the GUI interactions."""
        self.controller = main_controller
        self.app: Optional[tb.Window] = None
        self.query_var: Optional[tb.StringVar] = None
        self.status: Optional[tb.StringVar] = None
        self.results: Optional[tk.Listbox] = None

    def run(self) -> None:
        """Initialize and launch the GUI main loop."""
        self.app = tb.Window(themename="flatly")
        self.app.title("Búsqueda")
        self.app.geometry("760x520")

        body = tb.Frame(self.app, padding=(16, 12))
        body.pack(fill=BOTH, expand=YES)
        body.columnconfigure(0, weight=1)
        body.rowconfigure(1, weight=1)

        self.query_var = tb.StringVar()
        entry = tb.Entry(body, textvariable=self.query_var)
        entry.grid(row=0, column=0, sticky=EW, pady=(0, 10))
        entry.bind("<Return>", lambda _event: self._search())
        tb.Button(body, text="Buscar", bootstyle=PRIMARY, command=self._search).grid(
            row=0, column=1, padx=(8, 0), pady=(0, 10)
        )
        tb.Button(body, text="Historial", bootstyle=INFO, command=self._open_history).grid(
            row=0, column=2, padx=(8, 0), pady=(0, 10)
        )

        self.results = tk.Listbox(body, height=16)
        self.results.grid(row=1, column=0, columnspan=3, sticky="nsew")

        self.status = tb.StringVar(value="Listo.")
        tb.Label(self.app, textvariable=self.status, bootstyle=SECONDARY, anchor=W, padding=(16, 6)).pack(fill=X)

        self.app.mainloop()

    def _set_status(self, message: str) -> None:
        if self.status is not None:
            self.status.set(message)

    def _show_results(self, query: str, response: SearchResponse) -> None:
        """Render the result set returned by the search backend."""
        if self.results is None:
            return
        if self.query_var is not None:
            self.query_var.set(query)
        self.results.delete(0, tk.END)
        for item in response.results:
            self.results.insert(tk.END, str(item))
        self._set_status(f"{len(response.results)} resultados para \"{query}\".")

    def _search(self) -> None:
        """Record the typed query and run the search in a worker thread."""
        if self.app is None or self.query_var is None:
            return
        query = self.query_var.get().strip()
        if not query:
            return
        self.controller.history.add(query)
        self._set_status(f"Buscando \"{query}\"...")
        app = self.app

        def worker() -> None:
            try:
                response = self.controller.search_function(query)
            except Exception as exc:
                logger.error("La búsqueda de '%s' falló: %s", query, exc)
                response = SearchResponse.error(str(exc))
            try:
                app.after(0, lambda: self._finish_search(query, response))
            except tk.TclError:
                pass

        threading.Thread(target=worker, daemon=True).start()

    def _finish_search(self, query: str, response: SearchResponse) -> None:
        if response.status == SearchStatus.OK:
            self._show_results(query, response)
            return
        self._set_status("Listo.")
        Messagebox.show_error(response.message or "La búsqueda falló.", "Búsqueda")

    def _open_history(self) -> None:
        """Open the history window on top of the main one."""
        if self.app is None:
            return
        show_search_history(
            self.app,
            self.controller.searchHistory,
            on_results=self._show_results,
            on_return=lambda: self._set_status("Listo."),
        )


def run_gui(search_function: Optional[SearchFunction] = None) -> None:
    """Launch the search window backed by ``search_function``."""

    GuiController(MainController(search_function)).run()
