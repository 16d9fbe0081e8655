"""Centralized helpers to resolve search history settings from the environment."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterable, Mapping, MutableMapping, Optional, Union

from dotenv import dotenv_values

from app.config.storage_paths import getSearchHistoryPath


class SearchHistoryConfiguration:
    """Load search history overrides from environment variables and .env files.

    Args:
        env_files: Optional iterable with names or paths of ``.env`` files to merge
            into the environment. Relative paths are resolved from the repository
            root.
        environ: Optional mapping used instead of ``os.environ``. Intended for tests.
    """

    DEFAULT_ENV_FILES: tuple[str, ...] = (".env",)
    DEFAULT_MAX_ENTRIES: int = 100
    PATH_KEY = "SEARCH_HISTORY_PATH"
    MAX_ENTRIES_KEY = "SEARCH_HISTORY_MAX_ENTRIES"

    def __init__(
        self,
        env_files: Optional[Iterable[Union[str, Path]]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Persist the environment data used to resolve configuration values."""
        self._env_files = tuple(env_files) if env_files is not None else self.DEFAULT_ENV_FILES
        self._base_environ: MutableMapping[str, str] = dict(environ) if environ is not None else dict(os.environ)
        self._merged_env = self._merge_environment()

    def _merge_environment(self) -> Dict[str, str]:
        """Combine values from .env files with the active environment.

        Returns:
            A dictionary where operating system variables override the values
            defined in .env files.
        """

        merged: Dict[str, str] = {}
        root_dir = Path(__file__).resolve().parents[2]
        for candidate in self._env_files:
            path = Path(candidate)
            if not path.is_absolute():
                path = root_dir / path
            if not path.is_file():
                continue
            for key, value in dotenv_values(path).items():
                if value is not None:
                    merged[key] = value
        merged.update(self._base_environ)
        return merged

    def get_history_path(self) -> Path:
        """Return the JSON file that stores the search history."""

        override = self._merged_env.get(self.PATH_KEY, "").strip()
        if override:
            return Path(override).expanduser()
        return getSearchHistoryPath()

    def get_max_entries(self) -> int:
        """Return the maximum amount of queries retained in the history."""

        raw = self._merged_env.get(self.MAX_ENTRIES_KEY)
        if raw is None:
            return self.DEFAULT_MAX_ENTRIES
        try:
            value = int(raw)
        except ValueError:
            return self.DEFAULT_MAX_ENTRIES
        return value if value > 0 else self.DEFAULT_MAX_ENTRIES
