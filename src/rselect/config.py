"""YAML-based configuration for rselect.

Everything lives under one directory:

    ~/.config/rselect/config.yaml   settings (merged over DEFAULT_CONFIG)
    ~/.config/rselect/theme         name of the chosen theme (single line)
    ~/.config/rselect/history       executed/recorded commands, one per line
    ~/.config/rselect/debug.log     debug log (when debug is on)
"""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "items_per_page": None,  # None: derive from terminal height
    "history_limit": 5,
    "history_wrap_width": 80,
    "mouse": True,
    "debug": False,
}


def get_config_dir() -> Path:
    """Get the rselect config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "rselect"


def get_config_path() -> Path:
    return get_config_dir() / "config.yaml"


def get_theme_path() -> Path:
    return get_config_dir() / "theme"


def get_history_path() -> Path:
    return get_config_dir() / "history"


def get_log_path() -> Path:
    """Debug log, written only when debug is on."""
    return get_config_dir() / "debug.log"


def _deep_merge(base: dict, override: dict) -> dict:
    """Return ``base`` updated from ``override``; nested mappings merge per key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = _deep_merge(current, value)
        merged[key] = value
    return merged


def load_config() -> dict[str, Any]:
    """Load config.yaml merged over the defaults.

    A missing, unreadable or malformed file yields the defaults.
    """
    path = get_config_path()
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return copy.deepcopy(DEFAULT_CONFIG)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return copy.deepcopy(DEFAULT_CONFIG)

    if not isinstance(data, dict):
        return copy.deepcopy(DEFAULT_CONFIG)
    return _deep_merge(copy.deepcopy(DEFAULT_CONFIG), data)


def is_debug_enabled(config: dict[str, Any] | None = None) -> bool:
    """Debug is on via RSELECT_DEBUG=1 or ``debug: true`` in config.yaml."""
    if os.environ.get("RSELECT_DEBUG", "").strip() in ("1", "true", "yes"):
        return True
    if config is None:
        config = load_config()
    return bool(config.get("debug", False))


def get_int(config: dict[str, Any], key: str) -> int | None:
    """Read a positive integer setting, falling back to the default."""
    value = config.get(key, DEFAULT_CONFIG.get(key))
    if value is None:
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid %s=%r in config, using default", key, value)
        return DEFAULT_CONFIG.get(key)
    if number < 1:
        return DEFAULT_CONFIG.get(key)
    return number
