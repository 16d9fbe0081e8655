"""Tests for the search history configuration helper."""

from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[2]))

from app.config.history_config import SearchHistoryConfiguration


def test_defaults_point_to_appdata_history_file(tmp_path: Path, monkeypatch) -> None:
    """Without overrides the history lives in the application data folder."""

    monkeypatch.setenv("APPDATA", str(tmp_path))
    config = SearchHistoryConfiguration(env_files=(), environ={})

    path = config.get_history_path()

    assert path == tmp_path / "Rakuyomi" / "search_history.json"
    assert path.parent.is_dir()
    assert config.get_max_entries() == 100


def test_environment_overrides_path_and_capacity(tmp_path: Path) -> None:
    """Explicit variables replace the default location and cap."""

    target = tmp_path / "custom.json"
    config = SearchHistoryConfiguration(
        env_files=(),
        environ={"SEARCH_HISTORY_PATH": str(target), "SEARCH_HISTORY_MAX_ENTRIES": "25"},
    )

    assert config.get_history_path() == target
    assert config.get_max_entries() == 25


def test_invalid_capacity_falls_back_to_default() -> None:
    """Non-numeric or non-positive caps are ignored."""

    for raw in ("muchos", "0", "-3"):
        config = SearchHistoryConfiguration(env_files=(), environ={"SEARCH_HISTORY_MAX_ENTRIES": raw})
        assert config.get_max_entries() == 100


def test_env_file_values_yield_to_process_environment(tmp_path: Path) -> None:
    """Values from .env files apply unless the process defines the same key."""

    env_file = tmp_path / ".env"
    env_file.write_text(
        "SEARCH_HISTORY_MAX_ENTRIES=10\nSEARCH_HISTORY_PATH=/tmp/from-env-file.json\n",
        encoding="utf-8",
    )
    config = SearchHistoryConfiguration(
        env_files=(env_file,),
        environ={"SEARCH_HISTORY_MAX_ENTRIES": "40"},
    )

    assert config.get_max_entries() == 40
    assert config.get_history_path() == Path("/tmp/from-env-file.json")


def test_history_path_falls_back_to_roaming_folder_without_appdata(tmp_path: Path, monkeypatch) -> None:
    """Without ``APPDATA`` the file lives under the home directory's Roaming folder."""

    monkeypatch.delenv("APPDATA", raising=False)
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

    path = SearchHistoryConfiguration(env_files=(), environ={}).get_history_path()

    assert path == tmp_path / "AppData" / "Roaming" / "Rakuyomi" / "search_history.json"
