"""Shared fixtures for filtering tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.config.filtering.models import FilterConfig
from app.config.settings import get_settings
from app.main import app
from app.services.filtering.processor import TextProcessor


@pytest.fixture()
def make_processor() -> Callable[..., TextProcessor]:
    """Build a TextProcessor from keyword config values."""

    def _make(**kwargs) -> TextProcessor:
        kwargs.setdefault("min_word_length", 0)
        return TextProcessor(FilterConfig(**kwargs))

    return _make


@pytest.fixture()
def write_text(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write UTF-8 text under tmp_path and return the path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_bytes(content.encode("utf-8"))
        return path

    return _write


@pytest.fixture()
def test_client() -> TestClient:
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def data_dir(tmp_path: Path, monkeypatch) -> Path:
    """Point settings.data_dir at a fresh directory for the duration of one test."""
    root = tmp_path / "data"
    root.mkdir()
    monkeypatch.setenv("DATA_DIR", str(root))
    get_settings.cache_clear()
    yield root
    get_settings.cache_clear()
