"""Configuration management for spendwise.

The config file is written by the user and only ever read here; budgets set
during a session are not saved back.
"""

import json
import math
import os
from pathlib import Path
from typing import Any

from spendwise.errors import ConfigError

# Default config filenames
CONFIG_FILENAME = "config.json"
LOCAL_CONFIG_FILENAME = "spendwise.json"


def get_config_dir() -> Path:
    """Get the config directory path (XDG compliant)."""
    xdg_config_home = os.getenv("XDG_CONFIG_HOME", str(Path.home() / ".config"))
    return Path(xdg_config_home) / "spendwise"


def find_config_file() -> Path | None:
    """Find the config file in standard locations.

    Searches for config in the following order:
    1. spendwise.json in current directory
    2. XDG config: ~/.config/spendwise/config.json
    """
    config_paths = [
        Path(LOCAL_CONFIG_FILENAME),
        get_config_dir() / CONFIG_FILENAME,
    ]

    for path in config_paths:
        if path.exists():
            return path

    return None


def load_json_config(config_path: Path) -> dict[str, Any]:
    """Load configuration from a JSON file.

    Raises:
        ConfigError: If the file is missing, not JSON, or not a JSON object
    """
    try:
        with open(config_path, encoding="utf-8") as f:
            config = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {config_path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"Config file {config_path} must contain a JSON object")
    return config


def load_config(config_path: Path | None = None) -> dict[str, Any] | None:
    """Load configuration from config file.

    Args:
        config_path: Explicit path to a config file

    Returns:
        Loaded config dict or None if not found
    """
    if config_path:
        return load_json_config(config_path)

    config_file = find_config_file()
    if config_file:
        return load_json_config(config_file)

    return None


def get_budget_overrides(config: dict[str, Any] | None = None) -> dict[str, float]:
    """Get per-category budget overrides from config.

    Args:
        config: Loaded JSON config

    Returns:
        Dictionary mapping category names to budgets

    Raises:
        ConfigError: If a budget is not a positive number
    """
    if not config or "budgets" not in config:
        return {}

    budgets = config["budgets"]
    if not isinstance(budgets, dict):
        raise ConfigError("'budgets' must map category names to amounts")

    overrides: dict[str, float] = {}
    for name, value in budgets.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"Budget for {name!r} must be a number, got {value!r}")
        if not 0 < value < math.inf:
            raise ConfigError(f"Budget for {name!r} must be positive and finite, got {value!r}")
        overrides[name] = float(value)
    return overrides


def get_match_merchant(
    config: dict[str, Any] | None = None,
    override: bool | None = None,
) -> bool:
    """Get whether merchants feed keyword matching.

    Args:
        config: Loaded JSON config
        override: Optional value to use instead of config

    Returns:
        True if the merchant should be matched as well as the description
    """
    if override is not None:
        return override

    if config:
        return bool(config.get("match_merchant", False))

    return False


def get_log_level(
    config: dict[str, Any] | None = None,
    override: str | None = None,
) -> str | None:
    """Get the configured log level name, if any."""
    if override:
        return override

    if config:
        level = config.get("log_level")
        if level:
            return str(level)

    return None


def parse_budget_option(value: str) -> tuple[str, float]:
    """Parse a "Category=amount" command-line budget override.

    Args:
        value: Option value, e.g. "Food & Dining=1200"

    Returns:
        Tuple of (category name, budget)

    Raises:
        ConfigError: If the value is malformed or the amount is not positive
    """
    name, sep, amount_str = value.rpartition("=")
    name = name.strip()
    if not sep or not name:
        raise ConfigError(f"Expected CATEGORY=AMOUNT, got {value!r}")

    try:
        amount = float(amount_str)
    except ValueError as e:
        raise ConfigError(f"Budget for {name!r} is not a number: {amount_str!r}") from e

    if not 0 < amount < math.inf:
        raise ConfigError(f"Budget for {name!r} must be positive and finite, got {amount_str!r}")

    return name, amount
