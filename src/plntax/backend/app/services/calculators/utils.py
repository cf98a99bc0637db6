"""Utility helpers for calculator modules."""

from __future__ import annotations


def round_currency(value: float) -> float:
    """Round monetary amounts to two decimals."""

    return round(value, 2)


def format_percentage(value: float) -> str:
    """Return a human-readable percentage label for ``value``."""

    percentage = round(value * 100, 4)
    if percentage.is_integer():
        return f"{int(percentage)}%"
    return f"{percentage:.2f}%"
