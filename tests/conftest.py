"""Shared pytest configuration."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
for path in (ROOT / "src", ROOT / "tests"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from prompthelper.core.store import JsonPromptStore  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_user_dir(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Keep tests from writing into the user's real Documents folder."""

    home = tmp_path / "prompthelper-home"
    home.mkdir()
    monkeypatch.setenv("PROMPTHELPER_HOME", str(home))
    monkeypatch.delenv("PROMPTHELPER_DEBUG", raising=False)
    monkeypatch.delenv("PROMPTHELPER_DATA_FILE", raising=False)
    yield


@pytest.fixture
def store() -> JsonPromptStore:
    return JsonPromptStore()


@pytest.fixture
def file_store(tmp_path: Path) -> JsonPromptStore:
    return JsonPromptStore(tmp_path / "data" / "library.json")
