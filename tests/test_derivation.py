"""Unit tests for budget_allocator.derivation.

Covers the preset scenarios, the group and overall totals, the rounding
rule, and a seeded sweep over random balanced allocations checking that
the rounded split stays close to the budget.
"""

from __future__ import annotations

import numpy as np
import pytest

from budget_allocator.derivation import (
    amount_is_finite,
    category_amount,
    derive,
    groups_to_frame,
    is_balanced_total,
    round_half_up,
    view_to_frame,
)
from budget_allocator.model import AllocationModel, Category, Group, initialize
from budget_allocator.mutations import set_budget, set_category_percent, set_currency


def test_preset_scenario() -> None:
    view = derive(initialize())
    assert view.all_percent_total == 100
    assert view.is_balanced
    assert view.row("rent").amount == 35000
    assert view.groups[Group.NEEDS].amount_total == 73000
    assert view.groups[Group.NEEDS].percent_total == 73
    assert view.groups[Group.WANTS].amount_total == 17000
    assert view.groups[Group.INVESTMENTS].amount_total == 10000
    assert view.amount_total == 100000
    assert view.rounding_drift == 0
    assert view.budget == 100000
    assert view.currency_code == "RUB"


def test_rent_edit_unbalances() -> None:
    view = derive(set_category_percent(initialize(), "rent", 40))
    assert view.all_percent_total == 105
    assert not view.is_balanced
    assert view.row("rent").amount == 40000
    assert view.groups[Group.NEEDS].amount_total == 78000


def test_rows_keep_display_order() -> None:
    model = initialize()
    view = derive(set_category_percent(model, "travel", 1))
    assert [row.key for row in view.rows] == [c.key for c in model]


def test_currency_switch_keeps_numbers() -> None:
    model = set_budget(initialize(), 123457)
    before = derive(model)
    after = derive(set_currency(model, "EUR"))
    assert after.currency_code == "EUR"
    assert [(r.percent, r.amount) for r in after.rows] == [(r.percent, r.amount) for r in before.rows]
    assert after.groups == before.groups
    assert after.all_percent_total == before.all_percent_total


def test_zero_budget_gives_zero_amounts() -> None:
    view = derive(set_budget(initialize(), None))
    assert view.budget == 0
    assert all(row.amount == 0 for row in view.rows)
    assert view.is_balanced


def test_empty_group_has_zero_totals() -> None:
    model = AllocationModel(
        categories=(Category("a", "A", Group.NEEDS, 100.0),),
        budget=999.0,
        currency_code="USD",
    )
    view = derive(model)
    assert set(view.groups) == set(Group)
    assert view.groups[Group.WANTS].percent_total == 0
    assert view.groups[Group.WANTS].amount_total == 0
    assert view.groups[Group.NEEDS].amount_total == 999


def test_group_amount_sums_rounded_members() -> None:
    # 3 x 33.3% of 1001 rounds to 333 each; the group shows 999 rather
    # than round(1001 * 0.999) == 1000.
    model = AllocationModel(
        categories=tuple(Category(k, k, Group.WANTS, 33.3) for k in "abc"),
        budget=1001.0,
        currency_code="RUB",
    )
    view = derive(model)
    assert [row.amount for row in view.rows] == [333, 333, 333]
    assert view.groups[Group.WANTS].amount_total == 999


def test_row_lookup_unknown_key() -> None:
    with pytest.raises(KeyError):
        derive(initialize()).row("missing")


@pytest.mark.parametrize(
    "value, expected",
    [(0.5, 1), (1.5, 2), (2.5, 3), (2.4999, 2), (-0.5, 0), (-1.5, -1), (-1.6, -2), (7.0, 7)],
)
def test_round_half_up(value, expected) -> None:
    assert round_half_up(value) == expected


def test_category_amount_rounds_per_category() -> None:
    assert category_amount(333, 50) == 167
    assert category_amount(100000, 3) == 3000
    assert isinstance(category_amount(10, 33.3), int)


def test_category_amount_overflow_gives_zero() -> None:
    assert not amount_is_finite(1e307, 1e308)
    assert category_amount(1e307, 1e308) == 0
    assert category_amount(1e308, -1e308) == 0
    assert amount_is_finite(1e306, 35)


def test_derive_survives_huge_budget_and_percent() -> None:
    model = AllocationModel(
        categories=(
            Category("a", "A", Group.NEEDS, 1e308),
            Category("b", "B", Group.WANTS, 1e308),
            Category("c", "C", Group.INVESTMENTS, 5.0),
        ),
        budget=1e307,
        currency_code="RUB",
    )
    view = derive(model)
    assert view.row("a").amount == 0
    assert view.row("b").amount == 0
    assert view.row("c").amount == round_half_up(1e307 * 5 / 100)
    assert not view.is_balanced


def test_derive_after_huge_percent_edit() -> None:
    view = derive(set_category_percent(initialize(), "rent", 1e308))
    assert view.row("rent").amount == 35000
    assert view.is_balanced


def test_view_is_hashable_and_read_only() -> None:
    view = derive(initialize())
    assert hash(view) == hash(derive(initialize()))
    assert view == derive(initialize())
    with pytest.raises(TypeError):
        view.groups[Group.NEEDS] = view.groups[Group.WANTS]  # type: ignore[index]


def test_balance_check_tolerates_float_noise() -> None:
    assert is_balanced_total(100)
    assert is_balanced_total(sum([10.1] * 9) + 9.1)
    assert is_balanced_total(100 + 1e-12)
    assert not is_balanced_total(99.99)
    assert not is_balanced_total(100.01)


def test_rounded_amounts_stay_within_category_count_of_budget() -> None:
    rng = np.random.default_rng(20240611)
    keys = [c.key for c in initialize()]
    for _ in range(500):
        percents = rng.dirichlet(np.ones(len(keys))) * 100
        budget = float(rng.uniform(0, 5_000_000))
        model = AllocationModel(
            categories=tuple(
                Category(key, key, Group.NEEDS, float(p)) for key, p in zip(keys, percents)
            ),
            budget=budget,
            currency_code="RUB",
        )
        view = derive(model)

        expected = sum(round_half_up(budget * float(p) / 100) for p in percents)
        assert view.amount_total == expected
        assert abs(view.rounding_drift) <= len(keys)


def test_view_to_frame() -> None:
    df = view_to_frame(derive(initialize()))
    assert list(df.columns) == ["key", "name", "group", "percent", "amount"]
    assert len(df) == 12
    assert df.loc[df["key"] == "rent", "amount"].item() == 35000
    assert df["amount"].sum() == 100000


def test_groups_to_frame() -> None:
    df = groups_to_frame(derive(initialize()))
    assert df["group"].tolist() == ["Needs", "Wants", "Investments"]
    assert df["amount_total"].tolist() == [73000, 17000, 10000]
    assert df["color"].tolist() == ["green", "blue", "gold"]
