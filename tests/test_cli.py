"""Tests for the item-search command line entry point."""

import pytest

import item_search.cli as cli
import item_search.io.settings
from tests.harness import make_item_dict


class _FakeApp:
    instances: list = []

    def __init__(self, source, **kwargs):
        self.source = source
        self.kwargs = kwargs
        self.ran = False
        _FakeApp.instances.append(self)

    def run(self):
        self.ran = True


@pytest.fixture
def fake_app(monkeypatch, fresh_logging, config_home):
    _FakeApp.instances = []
    monkeypatch.setattr(cli, "ItemSearchApp", _FakeApp)
    return _FakeApp


def test_parser_defaults():
    args = cli.build_parser().parse_args(["items.json"])
    assert args.catalog == "items.json"
    assert args.query is None
    assert args.debounce_ms is None
    assert args.no_dropdown is False


def test_main_without_catalog_fails(fake_app, capsys):
    assert cli.main([]) == 2
    assert "no catalog given" in capsys.readouterr().err
    assert fake_app.instances == []


def test_main_runs_app_with_flags(fake_app, write_catalog):
    path = write_catalog([make_item_dict("Bolts"), make_item_dict("Nuts")])
    code = cli.main(
        [str(path), "--query", "Bol", "--debounce-ms", "120", "--public-url", "https://x", "--no-dropdown"]
    )
    assert code == 0
    (app,) = fake_app.instances
    assert app.ran
    assert [i.name for i in app.source()] == ["Bolts", "Nuts"]
    assert app.kwargs == {
        "default_value": "Bol",
        "placeholder": "Search item...",
        "show_dropdown": False,
        "debounce_interval": pytest.approx(0.12),
        "public_url": "https://x",
    }


def test_main_uses_settings_file(fake_app, write_catalog):
    path = write_catalog([make_item_dict("Bolts")])
    item_search.io.settings.save_settings(
        {"catalog_path": str(path), "debounce_ms": 500, "placeholder": "Find loot..."}
    )
    assert cli.main([]) == 0
    (app,) = fake_app.instances
    assert app.kwargs["placeholder"] == "Find loot..."
    assert app.kwargs["debounce_interval"] == pytest.approx(0.5)
    assert app.kwargs["show_dropdown"] is True
