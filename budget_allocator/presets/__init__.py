"""Preset allocation tables and their loader.

Presets are stored as JSON files next to this module so the default split
can be changed without code changes. Each file holds a ``budget``, a
``currency`` and an ordered ``categories`` list.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import (
    DEFAULT_BUDGET,
    DEFAULT_CURRENCY,
    SUPPORTED_CURRENCIES,
    get_preset_path,
)
from ..model import AllocationModel, Category, Group

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("key", "name", "group", "percent")


def load_preset_data(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load the raw preset dictionary from disk.

    Args:
        path: Preset file. Defaults to the configured preset.

    Returns:
        Dictionary parsed from the JSON file

    Raises:
        FileNotFoundError: If the preset file doesn't exist
        ValueError: If the file is not a JSON object
    """
    target = path or get_preset_path()
    if not target.exists():
        raise FileNotFoundError(f"Preset file not found: {target}")

    with open(target, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Preset file {target} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Preset file {target} must contain a JSON object")
    return data


def _parse_categories(entries: Any) -> List[Category]:
    if not isinstance(entries, list) or not entries:
        raise ValueError("Preset 'categories' must be a non-empty list")

    categories: List[Category] = []
    seen = set()
    for position, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"Preset category #{position} must be an object")
        missing = [field for field in _REQUIRED_FIELDS if field not in entry]
        if missing:
            raise ValueError(f"Preset category #{position} is missing: {', '.join(missing)}")

        key = str(entry['key'])
        if key in seen:
            raise ValueError(f"Duplicate category key in preset: {key!r}")
        seen.add(key)

        try:
            percent = float(entry['percent'])
        except (TypeError, ValueError) as e:
            raise ValueError(f"Preset category {key!r} has a non-numeric percent") from e

        categories.append(Category(
            key=key,
            name=str(entry['name']),
            group=Group.parse(entry['group']),
            percent=percent,
        ))
    return categories


def parse_preset(data: Dict[str, Any]) -> AllocationModel:
    """Turn a raw preset dictionary into an :class:`AllocationModel`.

    Raises:
        ValueError: If a category is malformed, a key is duplicated, a group
            is unknown, or the currency is not supported
    """
    categories = _parse_categories(data.get('categories'))

    currency = data.get('currency', DEFAULT_CURRENCY)
    if currency not in SUPPORTED_CURRENCIES:
        raise ValueError(f"Preset currency {currency!r} is not supported")

    try:
        budget = float(data.get('budget', DEFAULT_BUDGET))
    except (TypeError, ValueError) as e:
        raise ValueError("Preset budget must be a number") from e
    if budget < 0:
        raise ValueError("Preset budget cannot be negative")

    return AllocationModel(
        categories=tuple(categories),
        budget=budget,
        currency_code=currency,
    )


def load_preset(path: Optional[Path] = None) -> AllocationModel:
    """Load and parse a preset file into a fresh snapshot."""
    target = path or get_preset_path()
    model = parse_preset(load_preset_data(target))
    logger.debug("Loaded preset %s with %d categories", target.name, len(model))
    return model


__all__ = ['load_preset', 'load_preset_data', 'parse_preset']
