"""Allocation data model.

The model is a set of immutable values: a :class:`Group` taxonomy, the
:class:`Category` rows, and the :class:`AllocationModel` snapshot that
ties them to a budget and a currency. Snapshots are never edited in place;
the functions in :mod:`budget_allocator.mutations` build new ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple


class Group(str, Enum):
    """Closed set of spending groups, in display order."""

    NEEDS = "Needs"
    WANTS = "Wants"
    INVESTMENTS = "Investments"

    @property
    def color(self) -> str:
        return GROUP_COLORS[self]

    @classmethod
    def parse(cls, value: str) -> "Group":
        """Look up a group by its display value (e.g. ``"Needs"``).

        Raises:
            ValueError: If ``value`` is not one of the three groups
        """
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(g.value for g in cls)
            raise ValueError(f"Unknown group {value!r}; expected one of: {valid}") from None


GROUP_COLORS: Dict[Group, str] = {
    Group.NEEDS: "green",
    Group.WANTS: "blue",
    Group.INVESTMENTS: "gold",
}


@dataclass(frozen=True)
class Category:
    """A single spending category and its share of the budget."""

    key: str
    name: str
    group: Group
    percent: float


@dataclass(frozen=True)
class AllocationModel:
    """Snapshot of categories, budget and display currency.

    ``categories`` keeps display order. The percents are expected, but not
    required, to add up to 100; see :func:`budget_allocator.derivation.derive`.
    """

    categories: Tuple[Category, ...]
    budget: float
    currency_code: str

    def __iter__(self) -> Iterator[Category]:
        return iter(self.categories)

    def __len__(self) -> int:
        return len(self.categories)

    def get(self, key: str) -> Optional[Category]:
        """Return the category with ``key``, or ``None`` when absent."""
        for category in self.categories:
            if category.key == key:
                return category
        return None

    def index_of(self, key: str) -> int:
        """Return the position of ``key`` in display order, or ``-1``."""
        for index, category in enumerate(self.categories):
            if category.key == key:
                return index
        return -1


def initialize() -> AllocationModel:
    """Build the preset snapshot used at startup.

    Returns:
        The configured preset (by default twelve categories, a budget of
        100000 and RUB as currency)
    """
    from .presets import load_preset

    return load_preset()


def reset(current: Optional[AllocationModel] = None) -> AllocationModel:
    """Return the preset snapshot, discarding every edit in ``current``.

    Budget and currency are restored too, not only the percents.
    """
    return initialize()
