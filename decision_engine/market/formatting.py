"""Currency symbol mapping and compact money formatting."""

from __future__ import annotations

import math
import re

from decision_engine.models.enums import Currency

CURRENCY_SYMBOLS = {
    Currency.USD: "$",
    Currency.EUR: "€",
    Currency.GBP: "£",
    Currency.JPY: "¥",
    Currency.INR: "₹",
}

_ABBREVIATIONS = [(1e12, "T"), (1e9, "B"), (1e6, "M"), (1e3, "K")]

_SUFFIX_MULTIPLIERS = {"k": 1e3, "m": 1e6, "b": 1e9, "t": 1e12}

_STRIP_PATTERN = re.compile(r"[$€£¥₹,\s]")
_ABBREVIATED_PATTERN = re.compile(r"^([\d.]+)([kmbt]?)$", re.IGNORECASE)


def currency_symbol(currency: Currency) -> str:
    return CURRENCY_SYMBOLS.get(currency, "$")


def format_currency(
    value: float,
    currency: Currency = Currency.USD,
    abbreviated: bool = True,
) -> str:
    """Format money as e.g. ``$1.2M`` or ``$1,234``."""
    symbol = currency_symbol(currency)
    sign = "-" if value < 0 else ""
    magnitude = abs(value)

    if abbreviated:
        for threshold, suffix in _ABBREVIATIONS:
            if magnitude >= threshold:
                return f"{sign}{symbol}{magnitude / threshold:.1f}{suffix}"

    return f"{sign}{symbol}{magnitude:,.0f}"


def parse_currency_input(text: str) -> float:
    """Parse user-typed money such as ``$1.5M`` or ``250,000``.

    Unparseable or non-finite text (``nan``, ``inf``, overflowing digits)
    yields 0.0 so half-typed input never breaks live recalculation.
    """
    cleaned = _STRIP_PATTERN.sub("", text)
    match = _ABBREVIATED_PATTERN.match(cleaned)
    try:
        if match:
            number, suffix = match.groups()
            value = float(number) * _SUFFIX_MULTIPLIERS.get(suffix.lower(), 1.0)
        else:
            value = float(cleaned)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0
