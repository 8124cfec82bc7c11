"""Formatting utilities for currency and percent display."""

from __future__ import annotations

from typing import Union

from .config import CURRENCY_DECIMALS, DEFAULT_CURRENCY, SUPPORTED_CURRENCIES

NBSP = "\u00a0"


def currency_symbol(currency_code: str) -> str:
    """Return the display symbol for a currency code.

    Unknown codes are shown as the code itself.

    Example:
        >>> currency_symbol('EUR')
        '€'
    """
    return SUPPORTED_CURRENCIES.get(currency_code, currency_code)


def format_currency(
    amount: Union[float, int],
    currency_code: str = DEFAULT_CURRENCY,
    include_symbol: bool = True,
) -> str:
    """Format an amount in whole currency units.

    Digits are grouped in threes with a no-break space and the symbol
    follows the number, as in ``"100 000 ₽"``.

    Args:
        amount: The amount to format
        currency_code: One of the supported currency codes
        include_symbol: Whether to append the currency symbol

    Returns:
        Formatted currency string

    Example:
        >>> format_currency(73000, 'USD')
        '73\\xa0000\\xa0$'
        >>> format_currency(-1500, include_symbol=False)
        '-1\\xa0500'
    """
    formatted = f"{amount:,.{CURRENCY_DECIMALS}f}".replace(",", NBSP)
    if formatted in ("-0", "-0.0"):
        formatted = formatted[1:]
    if not include_symbol:
        return formatted
    return f"{formatted}{NBSP}{currency_symbol(currency_code)}"


def format_percent(value: float, decimals: int = 2) -> str:
    """Format a percent total, e.g. ``format_percent(100) == '100.00%'``."""
    return f"{value:.{decimals}f}%"


def escape_for_markdown(text: str) -> str:
    """Escape dollar signs so Streamlit markdown doesn't start LaTeX mode.

    Example:
        >>> escape_for_markdown('5 000 $')
        '5 000 \\\\$'
    """
    return text.replace("$", "\\$")
