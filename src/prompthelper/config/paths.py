"""
User directories for PromptHelper.

The library, settings, logs and exports live in a visible folder under the
user's Documents directory (``~/Documents/prompthelper`` or the platform
equivalent). ``PROMPTHELPER_HOME`` replaces that root entirely.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import List, Optional


APP_FOLDER_NAME = "prompthelper"
HOME_ENV_VAR = "PROMPTHELPER_HOME"
DATA_FILENAME = "library.json"

_XDG_DOCUMENTS_KEY = "XDG_DOCUMENTS_DIR"


def _xdg_documents_dir() -> Optional[Path]:
    """Read ``XDG_DOCUMENTS_DIR`` from ``~/.config/user-dirs.dirs`` if present."""
    config = Path.home() / ".config" / "user-dirs.dirs"
    try:
        text = config.read_text(encoding="utf-8", errors="ignore")
    except OSError:
        return None

    for raw_line in text.splitlines():
        name, sep, value = raw_line.strip().partition("=")
        if not sep or name.strip() != _XDG_DOCUMENTS_KEY:
            continue
        value = value.strip().strip('"')
        if value.startswith("$HOME/"):
            return Path.home() / value[len("$HOME/"):]
        return Path(value).expanduser()
    return None


def _documents_candidates(home: Path) -> List[Path]:
    if sys.platform.startswith("win"):
        return [home / "Documents", home / "My Documents"]
    if sys.platform == "darwin":
        return [home / "Documents"]
    xdg = _xdg_documents_dir()
    return [xdg] if xdg else [home / "Documents"]


def documents_dir() -> Path:
    """Return the first existing Documents folder, or the home directory."""
    home = Path.home()
    for candidate in _documents_candidates(home):
        if candidate.exists():
            return candidate
    return home


def app_user_root() -> Path:
    override = os.environ.get(HOME_ENV_VAR)
    root = Path(override).expanduser() if override else documents_dir() / APP_FOLDER_NAME
    root.mkdir(parents=True, exist_ok=True)
    return root


def _user_subdir(name: str) -> Path:
    path = app_user_root() / name
    path.mkdir(parents=True, exist_ok=True)
    return path


def app_config_dir() -> Path:
    return _user_subdir("config")


def app_data_dir() -> Path:
    return _user_subdir("data")


def app_logs_dir() -> Path:
    return _user_subdir("logs")


def app_exports_dir() -> Path:
    return _user_subdir("exports")


def default_data_file() -> Path:
    return app_data_dir() / DATA_FILENAME


__all__ = [
    "APP_FOLDER_NAME",
    "DATA_FILENAME",
    "HOME_ENV_VAR",
    "app_config_dir",
    "app_data_dir",
    "app_exports_dir",
    "app_logs_dir",
    "app_user_root",
    "default_data_file",
    "documents_dir",
]
