"""Streamlit page for splitting a budget across spending categories.

The page is a thin layer over :class:`~budget_allocator.session.AllocationSession`:
widgets forward their values to the session through ``on_change``
callbacks and everything shown is read from the derived view model.

Run with ``python run_dashboard.py`` or
``streamlit run budget_allocator/dashboard.py``.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import streamlit as st

# Ensure package imports resolve when run as a Streamlit script
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from budget_allocator.config import (
    BUDGET_STEP,
    PERCENT_MAX,
    PERCENT_MIN,
    SUPPORTED_CURRENCIES,
    configure_logging,
)
from budget_allocator.derivation import ViewModel
from budget_allocator.formatting import (
    currency_symbol,
    escape_for_markdown,
    format_currency,
    format_percent,
)
from budget_allocator.model import Group
from budget_allocator.session import AllocationSession
from budget_allocator.visualization import create_category_bar_chart, create_group_pie_chart

SESSION_KEY = 'allocation_session'
BUDGET_WIDGET = 'budget_input'
CURRENCY_WIDGET = 'currency_select'
PERCENT_WIDGET_PREFIX = 'percent_'

# Streamlit markdown has no gold; orange is the closest palette color.
_MARKDOWN_COLORS = {
    Group.NEEDS: 'green',
    Group.WANTS: 'blue',
    Group.INVESTMENTS: 'orange',
}


def clamp_percent(value: Optional[float]) -> Optional[float]:
    """Clamp a percent to the input range; ``None`` passes through."""
    if value is None:
        return None
    return max(PERCENT_MIN, min(PERCENT_MAX, float(value)))


def percent_widget_key(category_key: str) -> str:
    return f"{PERCENT_WIDGET_PREFIX}{category_key}"


def _sync_widget_state(session: AllocationSession, overwrite: bool = False) -> None:
    """Copy the current snapshot into the widget keys.

    Existing widget values are kept unless ``overwrite`` is set, so user
    input that the engine rejected still shows in the field.
    """
    state = st.session_state
    model = session.model
    values = {
        BUDGET_WIDGET: int(model.budget),
        CURRENCY_WIDGET: model.currency_code,
    }
    for category in model.categories:
        values[percent_widget_key(category.key)] = category.percent
    for key, value in values.items():
        if overwrite or key not in state:
            state[key] = value


def _ensure_session_state() -> AllocationSession:
    """Create the allocation session on first run and return it."""
    state = st.session_state
    if SESSION_KEY not in state:
        state[SESSION_KEY] = AllocationSession()
    session = state[SESSION_KEY]
    _sync_widget_state(session)
    return session


def _on_budget_change() -> None:
    st.session_state[SESSION_KEY].on_budget_edited(st.session_state.get(BUDGET_WIDGET))


def _on_currency_change() -> None:
    st.session_state[SESSION_KEY].on_currency_changed(st.session_state.get(CURRENCY_WIDGET))


def _on_percent_change(category_key: str) -> None:
    value = clamp_percent(st.session_state.get(percent_widget_key(category_key)))
    st.session_state[SESSION_KEY].on_percent_edited(category_key, value)


def _on_reset() -> None:
    session = st.session_state[SESSION_KEY]
    session.on_reset_requested()
    _sync_widget_state(session, overwrite=True)


def _group_tag(group: Group) -> str:
    return f":{_MARKDOWN_COLORS[group]}[{group.value}]"


def _money(amount: float, view: ViewModel) -> str:
    return escape_for_markdown(format_currency(amount, view.currency_code))


def render_budget_card(view: ViewModel) -> None:
    """Budget input, currency choice, group totals and the percent total."""
    with st.container(border=True):
        st.subheader("Enter your budget")
        st.number_input(
            f"Budget ({currency_symbol(view.currency_code)})",
            min_value=0,
            step=BUDGET_STEP,
            format="%d",
            key=BUDGET_WIDGET,
            on_change=_on_budget_change,
        )
        st.selectbox(
            "Currency",
            options=list(SUPPORTED_CURRENCIES),
            format_func=lambda code: f"{code} ({SUPPORTED_CURRENCIES[code]})",
            key=CURRENCY_WIDGET,
            on_change=_on_currency_change,
        )
        st.divider()

        for group, totals in view.groups.items():
            st.markdown(
                f"{_group_tag(group)}: {_money(totals.amount_total, view)} "
                f"({format_percent(totals.percent_total)})"
            )

        total_color = 'green' if view.is_balanced else 'red'
        line = f"**Total percent:** :{total_color}[{format_percent(view.all_percent_total)}]"
        if not view.is_balanced:
            line += " :red[Must be 100%]"
        st.markdown(line)
        st.markdown(f"**Total:** {_money(view.budget, view)}")
        if view.rounding_drift:
            st.caption(
                f"Rounded category amounts add up to {_money(view.amount_total, view)}."
            )


def render_allocation_table(view: ViewModel) -> None:
    """Per-category percent editors with the derived amounts."""
    with st.container(border=True):
        st.write("Percentages can be changed. Amounts are recalculated from the budget automatically.")
        if not view.is_balanced:
            st.warning(
                "**Percentages do not add up to 100%**\n\n"
                "Adjust the values to get a correct split.",
                icon="⚠️",
            )

        header = st.columns([3, 2, 2])
        header[0].markdown("**Category**")
        header[1].markdown("**Percent**")
        header[2].markdown("**Amount**")
        for row in view.rows:
            cols = st.columns([3, 2, 2])
            cols[0].markdown(f"{row.name}  \n{_group_tag(row.group)}")
            cols[1].number_input(
                f"{row.name} percent",
                min_value=PERCENT_MIN,
                max_value=PERCENT_MAX,
                key=percent_widget_key(row.key),
                on_change=_on_percent_change,
                args=(row.key,),
                label_visibility="collapsed",
            )
            cols[2].markdown(f"**{_money(row.amount, view)}**")

        st.button("Reset to defaults", on_click=_on_reset)


def render_charts(view: ViewModel) -> None:
    left, right = st.columns(2)
    with left:
        st.plotly_chart(create_group_pie_chart(view), use_container_width=True)
    with right:
        st.plotly_chart(create_category_bar_chart(view), use_container_width=True)


def main() -> None:
    """Main entry point for the allocation page."""
    st.set_page_config(page_title="Budget Allocator", page_icon="💰", layout="wide")
    configure_logging()
    session = _ensure_session_state()
    view = session.view

    st.header("💰 Budget Allocator")
    budget_col, table_col = st.columns([2, 3])
    with budget_col:
        render_budget_card(view)
    with table_col:
        render_allocation_table(view)
    render_charts(view)


if __name__ == '__main__':
    main()
