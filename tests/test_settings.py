"""Tests for settings file I/O."""

import json

import pytest

import item_search.io.settings as settings


def test_config_path_uses_xdg(config_home):
    assert settings.get_config_path() == config_home / "item-search" / "settings.json"


def test_missing_file_loads_empty(config_home):
    assert settings.load_settings() == {}


def test_corrupt_file_loads_empty(config_home):
    path = settings.get_config_path()
    path.parent.mkdir(parents=True)
    path.write_text("{broken", encoding="utf-8")
    assert settings.load_settings() == {}


def test_non_object_file_loads_empty(config_home):
    path = settings.get_config_path()
    path.parent.mkdir(parents=True)
    path.write_text("[1, 2]", encoding="utf-8")
    assert settings.load_settings() == {}


def test_save_and_load_round_trip_keeps_other_keys(config_home):
    settings.save_settings({"debounce_ms": 150, "custom": True})
    settings.save_setting("placeholder", "Find loot...")
    data = json.loads(settings.get_config_path().read_text(encoding="utf-8"))
    assert data == {"debounce_ms": 150, "custom": True, "placeholder": "Find loot..."}
    assert settings.load_setting("debounce_ms") == 150
    assert settings.load_setting("absent", "fallback") == "fallback"


def test_save_leaves_no_temp_files(config_home):
    settings.save_settings({"debounce_ms": 100})
    leftovers = [p for p in settings.get_config_path().parent.iterdir() if p.suffix == ".tmp"]
    assert leftovers == []


def test_resolved_layers_defaults_disk_and_overrides(config_home):
    settings.save_settings({"debounce_ms": 150, "public_url": "https://disk", "unknown": 1})
    merged = settings.resolved({"public_url": "https://cli", "placeholder": None})
    assert merged == {
        "debounce_ms": 150,
        "placeholder": None,
        "public_url": "https://cli",
        "catalog_path": None,
    }


@pytest.mark.parametrize(
    "raw,expected",
    [(300, 0.3), (0, 0.0), ("120", 0.12), ("abc", 0.3), (-5, 0.3), (None, 0.3)],
)
def test_debounce_seconds(raw, expected):
    assert settings.debounce_seconds({"debounce_ms": raw}) == pytest.approx(expected)


def test_placeholder_default():
    assert settings.placeholder({"placeholder": None}) == "Search item..."
    assert settings.placeholder({"placeholder": "Find"}) == "Find"
