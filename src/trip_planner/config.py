"""Preferences loading with defaults and CLI override merging."""

from __future__ import annotations

import copy
from pathlib import Path

import yaml

CONFIG_FILENAME = "trip-planner.yaml"

DEFAULTS = {
    "store_file": "store.json",
    "groceries": {
        "output_format": "markdown",
        "hide_checked": False,
        "aisle_order": [
            "produce",
            "bakery",
            "dairy",
            "canned",
            "dryGoods",
            "condiments",
            "snacks",
            "beverages",
            "deli",
            "other",
        ],
    },
    "planner": {
        "default_trip_name": "Weekend Road Trip",
        "favorite_meal": "lunch",
        "pack_meal_order": ["breakfast", "lunch", "dinner", "snack"],
    },
}


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(data_dir: Path) -> dict:
    """Load preferences from the YAML file in data_dir, falling back to defaults."""
    config_path = data_dir / CONFIG_FILENAME

    if config_path.exists():
        with open(config_path) as f:
            user_config = yaml.safe_load(f) or {}
        return deep_merge(copy.deepcopy(DEFAULTS), user_config)

    return copy.deepcopy(DEFAULTS)


def apply_cli_overrides(config: dict, **overrides: object) -> dict:
    """Apply CLI argument overrides to config.

    Supports flat keys that map into nested config:
      output_format -> groceries.output_format
      hide_checked -> groceries.hide_checked
      store_file -> store_file
    """
    if overrides.get("output_format") is not None:
        config["groceries"]["output_format"] = overrides["output_format"]
    if overrides.get("hide_checked") is not None:
        config["groceries"]["hide_checked"] = bool(overrides["hide_checked"])
    if overrides.get("store_file") is not None:
        config["store_file"] = overrides["store_file"]

    return config
