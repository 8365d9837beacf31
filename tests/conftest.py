"""Pytest configuration and shared fixtures for item-search tests."""

import json

import pytest

import item_search.io.logging_setup
from tests.harness import FakeClock


@pytest.fixture
def clock():
    """Manual clock; pass clock.set_timer wherever a set_timer factory is taken."""
    return FakeClock()


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    """Point XDG_CONFIG_HOME at a temp dir so settings never touch ~/.config."""
    home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    return home


@pytest.fixture
def write_catalog(tmp_path):
    """Factory: write a catalog JSON payload and return its path."""

    def _write(payload, name="catalog.json"):
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fresh_logging(tmp_path, monkeypatch):
    """Unconfigured logging runtime with log output under tmp_path."""
    monkeypatch.setenv("ITEM_SEARCH_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("ITEM_SEARCH_LOG_FILE", raising=False)
    monkeypatch.delenv("ITEM_SEARCH_LOG_LEVEL", raising=False)
    item_search.io.logging_setup._reset_for_tests()
    yield tmp_path / "logs"
    item_search.io.logging_setup._reset_for_tests()
