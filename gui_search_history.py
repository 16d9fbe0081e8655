"""Entry point for launching the search window with its history."""
from __future__ import annotations

import logging

from app.controllers.gui_controller import run_gui


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_gui()
