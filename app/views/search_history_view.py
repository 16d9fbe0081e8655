"""Build the window listing previous searches and relaunching them."""

from __future__ import annotations

import threading
from typing import Callable, Dict, List, Optional
import tkinter as tk
from tkinter import messagebox, ttk

import ttkbootstrap as tb
from ttkbootstrap.constants import *  # noqa: F401,F403
from ttkbootstrap.dialogs import Messagebox

from app.controllers.search_history_list_controller import HistoryRow, SearchHistoryListController
from app.dtos.search_response import SearchResponse, SearchStatus


ResultsCallback = Callable[[str, SearchResponse], None]


def _loading_message(query: str) -> str:
    """Return the text displayed while a search is running."""

    return f'Buscando "{query}"'


def _confirm_clear_history(parent: Optional[tk.Misc]) -> bool:
    """Ask the user to confirm wiping the whole history."""

    return bool(
        messagebox.askyesno(
            "Historial",
            "¿Deseas eliminar todo el historial de búsqueda?",
            parent=parent,
        )
    )


def _is_stale_response(response: Optional[SearchResponse]) -> bool:
    """Return ``True`` when the outcome must not be rendered anymore."""

    return response is None or response.status == SearchStatus.CANCELLED


def _show_loading(parent: tk.Misc, query: str, cancel_event: threading.Event) -> tb.Toplevel:
    """Display a modal progress window with a cancel button."""

    win = tb.Toplevel(parent)
    win.title("Búsqueda")
    win.transient(parent)
    win.resizable(False, False)

    frame = tb.Frame(win, padding=16)
    frame.pack(fill=BOTH, expand=YES)
    tb.Label(frame, text=_loading_message(query)).pack(anchor=W, pady=(0, 8))
    progress = tb.Progressbar(frame, mode="indeterminate", bootstyle=INFO, length=280)
    progress.pack(fill=X)
    progress.start(12)

    def on_cancel() -> None:
        """Flag the running search as cancelled and close the dialog."""

        cancel_event.set()
        win.destroy()
        Messagebox.show_info(SearchResponse.cancelled().message, "Búsqueda", parent=parent)

    tb.Button(frame, text="Cancelar", bootstyle=SECONDARY, command=on_cancel).pack(anchor=E, pady=(12, 0))
    win.protocol("WM_DELETE_WINDOW", on_cancel)
    win.grab_set()
    return win


def show_search_history(
    parent: tk.Misc,
    controller: SearchHistoryListController,
    on_results: Optional[ResultsCallback] = None,
    on_return: Optional[Callable[[], None]] = None,
) -> tb.Toplevel:
    """Open the search history window bound to ``controller``."""

    win = tb.Toplevel(parent)
    win.title("Historial de búsqueda")
    win.geometry("640x480")
    win.transient(parent)

    frame = tb.Frame(win, padding=12)
    frame.pack(fill=BOTH, expand=YES)

    empty_label = tb.Label(frame, text="", bootstyle=SECONDARY)

    columns = ("consulta", "fecha")
    tree = ttk.Treeview(frame, columns=columns, show="headings", height=14, selectmode="browse")
    tree.heading("consulta", text="Consulta")
    tree.heading("fecha", text="Fecha")
    tree.column("consulta", width=420)
    tree.column("fecha", width=150, anchor="center")

    scrollbar = ttk.Scrollbar(frame, orient="vertical", command=tree.yview)
    tree.configure(yscrollcommand=scrollbar.set)

    rows_map: Dict[str, HistoryRow] = {}

    def populate(rows: List[HistoryRow]) -> None:
        """Render the rows or the empty state when nothing is stored."""

        rows_map.clear()
        tree.delete(*tree.get_children())
        if len(rows) == 1 and not rows[0].selectable:
            tree.pack_forget()
            scrollbar.pack_forget()
            empty_label.configure(text=rows[0].text)
            empty_label.pack(anchor=W, pady=12)
            return
        empty_label.pack_forget()
        tree.pack(side=LEFT, fill=BOTH, expand=YES)
        scrollbar.pack(side=RIGHT, fill=Y)
        for row in rows:
            key = tree.insert("", "end", values=(row.text, row.searchedAt))
            rows_map[key] = row

    def get_selected_row() -> Optional[HistoryRow]:
        """Return the row attached to the current selection."""

        selection = tree.selection()
        if not selection:
            return None
        return rows_map.get(selection[0])

    def close() -> None:
        """Close the window and hand control back to the host."""

        win.destroy()
        if on_return:
            on_return()

    def finish_search(row: HistoryRow, loading: tb.Toplevel, response: Optional[SearchResponse]) -> None:
        """Dispatch the search outcome back on the Tk thread."""

        if loading.winfo_exists():
            loading.destroy()
        if _is_stale_response(response):
            if win.winfo_exists():
                populate(controller.build_rows())
            return
        if response.status == SearchStatus.ERROR:
            Messagebox.show_error(response.message or "La búsqueda falló.", "Búsqueda")
            populate(controller.build_rows())
            return
        if on_results:
            on_results(row.query, response)
        win.destroy()

    def search_selected(_event: Optional[tk.Event] = None) -> None:
        """Run the search for the selected query in a worker thread."""

        row = get_selected_row()
        if row is None or not row.selectable:
            return
        cancel_event = threading.Event()
        loading = _show_loading(win, row.query, cancel_event)

        def worker() -> None:
            response = controller.select(row, cancel_event)
            try:
                win.after(0, lambda: finish_search(row, loading, response))
            except tk.TclError:
                pass

        threading.Thread(target=worker, daemon=True).start()

    def delete_selected() -> None:
        """Remove the selected query from the history."""

        row = get_selected_row()
        if row is None:
            return
        populate(controller.delete(row))

    def clear_all() -> None:
        """Remove every stored query after confirmation."""

        if not _confirm_clear_history(win):
            return
        populate(controller.clear())

    menu = tk.Menu(win, tearoff=False)
    menu.add_command(label="Eliminar", command=delete_selected)
    menu.add_command(label="Limpiar todo", command=clear_all)

    def show_context_menu(event: tk.Event) -> None:
        """Select the row under the cursor and open the context menu."""

        item = tree.identify_row(event.y)
        if not item:
            return
        tree.selection_set(item)
        try:
            menu.tk_popup(event.x_root, event.y_root)
        finally:
            menu.grab_release()

    tree.bind("<Double-1>", search_selected)
    tree.bind("<Return>", search_selected)
    tree.bind("<Button-3>", show_context_menu)
    tree.bind("<Delete>", lambda _event: delete_selected())

    actions = tb.Frame(win, padding=(12, 0, 12, 12))
    actions.pack(fill=X)
    tb.Button(actions, text="Buscar", bootstyle=PRIMARY, command=search_selected).pack(side=LEFT)
    tb.Button(actions, text="Eliminar", bootstyle=SECONDARY, command=delete_selected).pack(side=LEFT, padx=6)
    tb.Button(actions, text="Limpiar todo", bootstyle=DANGER, command=clear_all).pack(side=LEFT)
    tb.Button(actions, text="Cerrar", bootstyle=SECONDARY, command=close).pack(side=RIGHT)

    win.protocol("WM_DELETE_WINDOW", close)
    populate(controller.build_rows())
    return win
