"""File-backed catalog accessor.

Holds one immutable catalog snapshot (a tuple). load() swaps the reference,
which is the signal the controller uses to re-project.

// [LAW:dataflow-not-control-flow] Always attempt the read; a failed read
// keeps the previous snapshot instead of raising.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from item_search.core.catalog import CatalogItem, load_catalog

logger = logging.getLogger(__name__)


def _extract_items(payload) -> list:
    """Accept a bare list, {"items": [...]} or {"data": {"items": [...]}}."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        if isinstance(payload.get("items"), list):
            return payload["items"]
        data = payload.get("data")
        if isinstance(data, dict) and isinstance(data.get("items"), list):
            return data["items"]
    return []


class FileCatalogSource:
    """Callable catalog accessor reading a JSON file."""

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        self._items: tuple[CatalogItem, ...] = ()
        self._mtime: float | None = None

    def __call__(self) -> tuple[CatalogItem, ...]:
        return self._items

    @property
    def items(self) -> tuple[CatalogItem, ...]:
        return self._items

    def load(self) -> tuple[CatalogItem, ...]:
        """Read the file and replace the snapshot. Returns the current snapshot."""
        try:
            mtime = self.path.stat().st_mtime
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.warning("Catalog file not found: %s", self.path)
            return self._items
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read catalog %s: %s", self.path, exc)
            return self._items

        self._items = load_catalog(_extract_items(payload))
        self._mtime = mtime
        logger.info("Loaded %d catalog items from %s", len(self._items), self.path)
        return self._items

    def reload_if_changed(self) -> bool:
        """Reload when the file's mtime moved. Returns True if the snapshot changed."""
        try:
            mtime = self.path.stat().st_mtime
        except OSError:
            return False
        if self._mtime is not None and mtime == self._mtime:
            return False
        before = self._items
        self.load()
        return self._items is not before
