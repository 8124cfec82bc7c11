"""Plotly visualisation helpers for the budget allocator.

Each function accepts a :class:`~budget_allocator.derivation.ViewModel`
and returns a `plotly.graph_objects.Figure` that Streamlit can render via
``st.plotly_chart``. Group colors come from the model so the charts match
the group tags in the table.
"""

from __future__ import annotations

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .derivation import ViewModel, groups_to_frame, view_to_frame
from .formatting import currency_symbol
from .model import GROUP_COLORS


def _empty_figure(title: str) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=title)
    return fig


def category_shares(view: ViewModel) -> pd.DataFrame:
    """Category rows with each amount's share of the allocated total.

    Adds a ``share`` column (0-1). Shares are zero when nothing is
    allocated, e.g. for a zero budget.
    """
    df = view_to_frame(view)
    amounts = df['amount'].to_numpy(dtype=float)
    total = amounts.sum()
    df['share'] = np.divide(amounts, total, out=np.zeros_like(amounts), where=total != 0)
    return df


def create_group_pie_chart(view: ViewModel, title: str | None = None) -> go.Figure:
    """Donut chart of the money allocated to each group.

    Parameters
    ----------
    view : ViewModel
        Derived view of the current snapshot.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Donut chart with one slice per group.
    """
    df = groups_to_frame(view)
    if df['amount_total'].le(0).all():
        return _empty_figure("No money allocated")
    fig = px.pie(
        df,
        names="group",
        values="amount_total",
        color="group",
        color_discrete_map={g.value: c for g, c in GROUP_COLORS.items()},
        hole=0.45,
    )
    fig.update_traces(textinfo="label+percent", sort=False)
    fig.update_layout(title=title or "Allocation by group", showlegend=False)
    return fig


def create_category_bar_chart(view: ViewModel, title: str | None = None) -> go.Figure:
    """Bar chart of category amounts, colored by group.

    Parameters
    ----------
    view : ViewModel
        Derived view of the current snapshot.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Bar chart with categories in display order.
    """
    df = category_shares(view)
    if df.empty:
        return _empty_figure("No categories to display")
    fig = px.bar(
        df,
        x="name",
        y="amount",
        color="group",
        color_discrete_map={g.value: c for g, c in GROUP_COLORS.items()},
        hover_data={"percent": True, "share": ":.1%"},
    )
    fig.update_layout(
        title=title or "Allocation by category",
        xaxis_title="Category",
        yaxis_title=f"Amount ({currency_symbol(view.currency_code)})",
        xaxis={"categoryorder": "array", "categoryarray": df['name'].tolist()},
    )
    return fig
