"""Conversion between user-entered PLN amounts and floats.

Amounts are entered the way the Polish locale prints them (``1 234,56 zł``):
everything except digits, the comma and the minus sign is ignored and the
comma acts as the decimal separator. Unlike a lenient ``parseFloat`` the
parser refuses text that does not leave a well-formed number behind, so a
typo never silently becomes ``0``.
"""

from __future__ import annotations

import math
import re
from numbers import Real

GROUP_SEPARATOR = "\u00a0"
CURRENCY_SUFFIX = "\u00a0zł"

_DISCARDED_CHARACTERS = re.compile(r"[^0-9,-]")
_AMOUNT_PATTERN = re.compile(r"-?(?:[0-9]+(?:,[0-9]*)?|,[0-9]+)")
# Polish formatting leaves four-digit integers ungrouped.
_MINIMUM_GROUPED_DIGITS = 5


class InvalidAmountError(ValueError):
    """Raised when a value cannot be interpreted as a finite amount."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Cannot interpret {value!r} as an amount")
        self.value = value


def parse_amount(value: str | Real) -> float:
    """Return the numeric value of ``value``.

    Blank text is treated as ``0.0``. Numbers are passed through after a
    finiteness check.
    """

    if isinstance(value, bool):
        raise InvalidAmountError(value)

    if isinstance(value, Real):
        number = float(value)
    else:
        text = str(value)
        if not text.strip():
            return 0.0

        cleaned = _DISCARDED_CHARACTERS.sub("", text)
        if not _AMOUNT_PATTERN.fullmatch(cleaned):
            raise InvalidAmountError(value)
        number = float(cleaned.replace(",", "."))

    if not math.isfinite(number):
        raise InvalidAmountError(value)
    return number


def format_amount(value: float) -> str:
    """Render ``value`` as a ``pl-PL`` PLN currency string with two decimals."""

    if not math.isfinite(value):
        raise ValueError(f"Cannot format non-finite amount {value!r}")

    rendered = f"{abs(value):,.2f}"
    integer, _, fraction = rendered.partition(".")
    digits = integer.replace(",", "")
    if len(digits) < _MINIMUM_GROUPED_DIGITS:
        integer = digits
    else:
        integer = integer.replace(",", GROUP_SEPARATOR)

    sign = "-" if value < 0 and rendered.strip("0.,") else ""
    return f"{sign}{integer},{fraction}{CURRENCY_SUFFIX}"


def normalise_amount_text(value: str | Real) -> str:
    """Reformat an entered amount for display, leaving blank input blank."""

    if isinstance(value, str) and not value.strip():
        return ""
    return format_amount(parse_amount(value))


__all__ = [
    "CURRENCY_SUFFIX",
    "GROUP_SEPARATOR",
    "InvalidAmountError",
    "format_amount",
    "normalise_amount_text",
    "parse_amount",
]
