"""Configuration management for the budget allocator.

This module centralizes all configuration values including the preset
location, allocation constants, and environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

# Base package directory - assumes this file is in budget_allocator/
_PACKAGE_ROOT = Path(__file__).parent.resolve()

# Presets
PRESETS_DIR = Path(
    os.getenv("BUDGET_ALLOCATOR_PRESETS_DIR", _PACKAGE_ROOT / "presets")
).resolve()
PRESET_NAME = os.getenv("BUDGET_ALLOCATOR_PRESET", "default")

# Logging
LOG_LEVEL = os.getenv("BUDGET_ALLOCATOR_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Allocation defaults
DEFAULT_BUDGET = 100_000
DEFAULT_CURRENCY = "RUB"
SUPPORTED_CURRENCIES: Dict[str, str] = {
    "RUB": "₽",
    "USD": "$",
    "EUR": "€",
}
CURRENCY_DECIMALS = 0

# Balance check
BALANCE_TARGET = 100.0
BALANCE_TOLERANCE = 1e-9

# Input boundaries used by the presentation layer
BUDGET_STEP = 100
PERCENT_MIN = 0.0
PERCENT_MAX = 100.0


def _resolve_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(level: Optional[Union[str, int]] = None) -> None:
    """Install a basic logging handler for the application.

    Calling this more than once only adjusts the level; handlers are
    installed a single time by :func:`logging.basicConfig`.

    Args:
        level: Level name or number. Defaults to ``LOG_LEVEL``.
    """
    resolved = _resolve_level(level if level is not None else LOG_LEVEL)
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger("budget_allocator").setLevel(resolved)


def get_preset_path(name: Optional[str] = None) -> Path:
    """Get the path of a preset file by name (without ``.json``)."""
    return PRESETS_DIR / f"{name or PRESET_NAME}.json"


# Fail fast on a bad level instead of at the first log call.
_resolve_level(LOG_LEVEL)
