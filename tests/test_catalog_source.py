"""Tests for the file-backed catalog accessor."""

import os

from item_search.app.catalog_source import FileCatalogSource
from tests.harness import make_item_dict


def test_empty_before_load(write_catalog):
    source = FileCatalogSource(write_catalog([make_item_dict("Bolts")]))
    assert source() == ()


def test_load_reads_bare_list(write_catalog):
    source = FileCatalogSource(write_catalog([make_item_dict("Bolts"), make_item_dict("Nuts")]))
    items = source.load()
    assert [i.name for i in items] == ["Bolts", "Nuts"]
    assert source() is items


def test_load_reads_wrapped_payloads(write_catalog):
    wrapped = FileCatalogSource(write_catalog({"items": [make_item_dict("Bolts")]}, "a.json"))
    graphql = FileCatalogSource(write_catalog({"data": {"items": [make_item_dict("Nuts")]}}, "b.json"))
    assert [i.name for i in wrapped.load()] == ["Bolts"]
    assert [i.name for i in graphql.load()] == ["Nuts"]


def test_unrecognised_payload_is_empty(write_catalog):
    source = FileCatalogSource(write_catalog({"something": "else"}))
    assert source.load() == ()


def test_missing_file_keeps_empty_snapshot(tmp_path, caplog):
    source = FileCatalogSource(tmp_path / "nope.json")
    assert source.load() == ()
    assert "Catalog file not found" in caplog.text


def test_corrupt_file_keeps_previous_snapshot(write_catalog, caplog):
    path = write_catalog([make_item_dict("Bolts")])
    source = FileCatalogSource(path)
    before = source.load()
    path.write_text("{not json", encoding="utf-8")
    assert source.load() is before
    assert "Could not read catalog" in caplog.text


def test_reload_if_changed_swaps_reference(write_catalog):
    path = write_catalog([make_item_dict("Bolts")])
    source = FileCatalogSource(path)
    first = source.load()
    assert source.reload_if_changed() is False

    path.write_text('[{"id": "n", "name": "Nuts"}]', encoding="utf-8")
    stat = path.stat()
    os.utime(path, (stat.st_atime, stat.st_mtime + 10))
    assert source.reload_if_changed() is True
    assert source() is not first
    assert [i.name for i in source()] == ["Nuts"]


def test_reload_if_changed_on_missing_file(tmp_path):
    source = FileCatalogSource(tmp_path / "nope.json")
    assert source.reload_if_changed() is False
