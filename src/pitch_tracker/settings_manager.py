"""
Utility helpers for loading and persisting analysis settings.

Settings are stored as JSON and merged with DEFAULT_SETTINGS so new keys
are available automatically without wiping a coach's existing preferences.
"""
from __future__ import annotations

import json
import os
import threading
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict

CONFIG_DIR_ENV = "PITCH_TRACKER_CONFIG_DIR"
SETTINGS_FILENAME = "settings.json"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "analysis": {
        "top_n": 5,
        "max_comparison_players": 5,
        "language": "ja",
    },
    "ceilings": {
        "avg_speed": 200,
        "max_speed": 200,
        "avg_spin": 3000,
        "avg_true_spin": 3000,
        "avg_spin_efficiency": 100,
        "strike_rate": 100,
    },
    "plots": {
        "out_dir": "build/figures",
        "dpi": 300,
    },
}

SUPPORTED_LANGUAGES = ("ja", "en")

_lock = threading.RLock()


def settings_dir() -> Path:
    return Path(os.environ.get(CONFIG_DIR_ENV) or Path.cwd() / "config")


def settings_path() -> Path:
    return settings_dir() / SETTINGS_FILENAME


def get_setting(settings: Dict[str, Any], key: str) -> Any:
    """
    Look up a dotted key such as ``"plots.dpi"``.

    Keys missing from ``settings`` fall back to DEFAULT_SETTINGS; a key unknown
    to both raises KeyError.
    """
    for source in (settings, DEFAULT_SETTINGS):
        node: Any = source
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                break
            node = node[part]
        else:
            return node
    raise KeyError(key)


def _validate(settings: Dict[str, Any]) -> None:
    language = get_setting(settings, "analysis.language")
    if language not in SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language: {language!r}")
    for key in ("analysis.top_n", "analysis.max_comparison_players", "plots.dpi"):
        value = get_setting(settings, key)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"{key} must be a positive integer, got {value!r}")


def _ensure_settings_file() -> None:
    """Create the settings directory and file with defaults if needed."""
    directory = settings_dir()
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)

    if not settings_path().exists():
        save_settings(DEFAULT_SETTINGS)


def _deep_merge(base: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two dictionaries."""
    for key, value in updates.items():
        if (
            key in base
            and isinstance(base[key], dict)
            and isinstance(value, dict)
        ):
            base[key] = _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def load_settings() -> Dict[str, Any]:
    """Load settings from disk, falling back to defaults as needed."""
    with _lock:
        _ensure_settings_file()
        path = settings_path()
        try:
            with path.open("r", encoding="utf-8") as fh:
                stored = json.load(fh)
        except (json.JSONDecodeError, OSError):
            # Keep the unreadable file around for inspection and start fresh
            backup_path = path.with_suffix(".backup.json")
            try:
                path.replace(backup_path)
            except OSError:
                pass
            stored = {}

        merged = deepcopy(DEFAULT_SETTINGS)
        if isinstance(stored, dict):
            merged = _deep_merge(merged, stored)
        return merged


def save_settings(settings: Dict[str, Any]) -> None:
    """Write the provided settings dictionary to disk."""
    directory = settings_dir()
    directory.mkdir(parents=True, exist_ok=True)
    with settings_path().open("w", encoding="utf-8") as fh:
        json.dump(settings, fh, indent=2, sort_keys=True, ensure_ascii=False)


def update_settings(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Update settings with the provided payload and persist the result."""
    if not isinstance(payload, dict):
        raise ValueError("Settings payload must be an object")

    with _lock:
        current = load_settings()
        updated = _deep_merge(current, payload)
        _validate(updated)
        save_settings(updated)
        return updated


def reset_settings() -> Dict[str, Any]:
    """Reset settings back to defaults."""
    with _lock:
        save_settings(DEFAULT_SETTINGS)
        return deepcopy(DEFAULT_SETTINGS)
