"""Write operations on an allocation snapshot.

Each function takes an :class:`~budget_allocator.model.AllocationModel` and
returns a model. Rejected input never raises: the caller gets the input
snapshot back (percent and currency edits) or a normalized value (budget).
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from decimal import Decimal
from numbers import Real
from typing import Any, Optional

from .config import SUPPORTED_CURRENCIES
from .derivation import amount_is_finite
from .model import AllocationModel

logger = logging.getLogger(__name__)


def coerce_number(value: Any) -> Optional[float]:
    """Convert user input to a finite float.

    Accepts ints, floats, decimals and numeric strings. Returns ``None`` for
    ``None``, booleans, non-numeric text, NaN and infinities.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    elif not isinstance(value, (Real, Decimal)):
        return None
    try:
        number = float(value)
    except (OverflowError, ValueError):
        return None
    return number if math.isfinite(number) else None


def set_category_percent(model: AllocationModel, key: str, new_percent: Any) -> AllocationModel:
    """Replace one category's percent.

    No range clamp is applied; the input widget limits values to [0, 100].

    Args:
        model: Current snapshot
        key: Key of the category to edit
        new_percent: New percent value

    Returns:
        A new snapshot sharing every untouched category with ``model``, or
        ``model`` itself when the key is unknown, the value is not a
        finite number, or the category amount would overflow a float
    """
    percent = coerce_number(new_percent)
    if percent is None:
        logger.debug("Ignoring non-numeric percent %r for %r", new_percent, key)
        return model

    index = model.index_of(key)
    if index < 0:
        logger.warning("Ignoring percent edit for unknown category %r", key)
        return model

    if not amount_is_finite(model.budget, percent):
        logger.debug("Ignoring percent %s for %r: amount overflows", percent, key)
        return model

    categories = list(model.categories)
    categories[index] = replace(categories[index], percent=percent)
    logger.debug("Set %s percent to %s", key, percent)
    return replace(model, categories=tuple(categories))


def set_budget(model: AllocationModel, new_budget: Any) -> AllocationModel:
    """Replace the budget.

    A cleared field (``None``) becomes ``0``, as do non-numeric and
    negative values and budgets whose category amounts would overflow a
    float.
    """
    budget = coerce_number(new_budget)
    if budget is None:
        if new_budget is not None:
            logger.debug("Budget %r is not a number, using 0", new_budget)
        budget = 0.0
    elif budget < 0:
        logger.debug("Negative budget %s clamped to 0", budget)
        budget = 0.0
    elif not all(amount_is_finite(budget, c.percent) for c in model.categories):
        logger.debug("Budget %s overflows category amounts, using 0", budget)
        budget = 0.0
    return replace(model, budget=budget)


def set_currency(model: AllocationModel, code: Any) -> AllocationModel:
    """Switch the display currency; unsupported codes leave ``model`` as is."""
    if not isinstance(code, str) or code not in SUPPORTED_CURRENCIES:
        logger.warning("Ignoring unsupported currency %r", code)
        return model
    return replace(model, currency_code=code)
