"""Resolve where the desktop reader keeps its per-user files."""

import os
from pathlib import Path


APP_FOLDER_NAME = "Rakuyomi"
SEARCH_HISTORY_FILENAME = "search_history.json"


def getSearchHistoryPath(create_parent: bool = True) -> Path:
    """Return the search history JSON file inside the user's AppData folder."""

    base_path = os.environ.get("APPDATA")
    root = Path(base_path) if base_path else Path.home() / "AppData" / "Roaming"
    path = root / APP_FOLDER_NAME / SEARCH_HISTORY_FILENAME
    if create_parent:
        path.parent.mkdir(parents=True, exist_ok=True)
    return path
