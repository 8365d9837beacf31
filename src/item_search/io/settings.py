"""Settings file I/O for item-search.

Manages a JSON settings file at XDG_CONFIG_HOME/item-search/settings.json.
Import as: import item_search.io.settings
"""

import json
import os
import tempfile
from pathlib import Path

DEFAULT_PLACEHOLDER = "Search item..."

# [LAW:one-source-of-truth] All known settings and their defaults
SCHEMA: dict[str, object] = {
    "debounce_ms": 300,
    "placeholder": None,
    "public_url": "",
    "catalog_path": None,
}


def get_config_path() -> Path:
    """Return path to settings file.

    Uses XDG_CONFIG_HOME (default ~/.config) / item-search / settings.json.
    """
    config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "item-search" / "settings.json"


def load_settings() -> dict:
    """Load settings from JSON file. Returns empty dict on missing/corrupt file."""
    path = get_config_path()
    # [LAW:dataflow-not-control-flow] Always attempt read; empty dict is the "no data" value.
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def save_settings(data: dict) -> None:
    """Atomic write of settings dict to JSON file.

    Creates parent directories if needed. Writes to temp file then renames
    to avoid partial writes on crash.
    """
    path = get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.write("\n")
        os.replace(tmp_path, path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def load_setting(key: str, default=None):
    """Load a single setting by key. Returns default if absent."""
    return load_settings().get(key, default)


def save_setting(key: str, value) -> None:
    """Save a single setting by key (merge into existing settings)."""
    data = load_settings()
    data[key] = value
    save_settings(data)


def resolved(overrides: dict | None = None) -> dict:
    """Known settings: SCHEMA defaults < disk < non-None overrides."""
    disk = load_settings()
    merged = {key: disk.get(key, default) for key, default in SCHEMA.items()}
    for key, value in (overrides or {}).items():
        if value is not None:
            merged[key] = value
    return merged


def debounce_seconds(settings: dict) -> float:
    """debounce_ms as seconds; invalid or negative values fall back to the default."""
    raw = settings.get("debounce_ms", SCHEMA["debounce_ms"])
    try:
        ms = float(raw)
    except (TypeError, ValueError):
        ms = float(SCHEMA["debounce_ms"])
    if ms < 0:
        ms = float(SCHEMA["debounce_ms"])
    return ms / 1000.0


def placeholder(settings: dict) -> str:
    return settings.get("placeholder") or DEFAULT_PLACEHOLDER
