"""Derivation of monetary amounts and balance status from a snapshot.

:func:`derive` is a pure function of the snapshot. Callers run it after
every accepted mutation; nothing here is cached between snapshots.

Rounding is half-up to whole currency units (``floor(x + 0.5)``), applied
to each category on its own. Group and overall amount totals add up the
already-rounded category amounts, so they can differ from the budget by a
few units.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

import pandas as pd

from .config import BALANCE_TARGET, BALANCE_TOLERANCE
from .model import AllocationModel, Group


@dataclass(frozen=True)
class CategoryRow:
    key: str
    name: str
    group: Group
    percent: float
    amount: int


@dataclass(frozen=True)
class GroupTotals:
    percent_total: float
    amount_total: int


@dataclass(frozen=True)
class ViewModel:
    """Everything the presentation layer needs to render one snapshot."""

    rows: Tuple[CategoryRow, ...]
    groups: Mapping[Group, GroupTotals] = field(hash=False)
    all_percent_total: float
    is_balanced: bool
    budget: float
    currency_code: str
    amount_total: int
    rounding_drift: int

    def row(self, key: str) -> CategoryRow:
        for row in self.rows:
            if row.key == key:
                return row
        raise KeyError(key)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity.

    Example:
        >>> round_half_up(2.5), round_half_up(-2.5), round_half_up(3.49)
        (3, -2, 3)
    """
    return int(math.floor(value + 0.5))


def amount_is_finite(budget: float, percent: float) -> bool:
    """Whether ``budget * percent / 100`` stays a finite float."""
    return math.isfinite(budget * percent / 100)


def category_amount(budget: float, percent: float) -> int:
    """Money allocated to a single category.

    Products that overflow to infinity (or NaN) give ``0``.
    """
    amount = budget * percent / 100
    if not math.isfinite(amount):
        return 0
    return round_half_up(amount)


def is_balanced_total(total: float) -> bool:
    """Whether a percent total counts as 100.

    Uses a small tolerance so sums such as ``33.3 + 33.3 + 33.4`` are not
    reported as unbalanced because of binary floating point.
    """
    return abs(total - BALANCE_TARGET) < BALANCE_TOLERANCE


def derive(model: AllocationModel) -> ViewModel:
    """Compute the view model for ``model``.

    Never fails: unbalanced models, zero budgets and amounts too large for
    a float produce a view like any other.
    """
    rows = tuple(
        CategoryRow(
            key=c.key,
            name=c.name,
            group=c.group,
            percent=c.percent,
            amount=category_amount(model.budget, c.percent),
        )
        for c in model.categories
    )

    percent_by_group: Dict[Group, float] = {group: 0.0 for group in Group}
    amount_by_group: Dict[Group, int] = {group: 0 for group in Group}
    all_percent = 0.0
    for row in rows:
        percent_by_group[row.group] += row.percent
        amount_by_group[row.group] += row.amount
        all_percent += row.percent

    groups = MappingProxyType({
        group: GroupTotals(
            percent_total=percent_by_group[group],
            amount_total=amount_by_group[group],
        )
        for group in Group
    })
    amount_total = sum(row.amount for row in rows)

    return ViewModel(
        rows=rows,
        groups=groups,
        all_percent_total=all_percent,
        is_balanced=is_balanced_total(all_percent),
        budget=model.budget,
        currency_code=model.currency_code,
        amount_total=amount_total,
        rounding_drift=amount_total - category_amount(model.budget, 100),
    )


def view_to_frame(view: ViewModel) -> pd.DataFrame:
    """Category rows as a DataFrame, in display order.

    Columns: key, name, group, percent, amount
    """
    return pd.DataFrame(
        [
            {
                'key': row.key,
                'name': row.name,
                'group': row.group.value,
                'percent': row.percent,
                'amount': row.amount,
            }
            for row in view.rows
        ],
        columns=['key', 'name', 'group', 'percent', 'amount'],
    )


def groups_to_frame(view: ViewModel) -> pd.DataFrame:
    """One row per group with its totals and display color."""
    return pd.DataFrame(
        [
            {
                'group': group.value,
                'percent_total': totals.percent_total,
                'amount_total': totals.amount_total,
                'color': group.color,
            }
            for group, totals in view.groups.items()
        ],
        columns=['group', 'percent_total', 'amount_total', 'color'],
    )
