"""Integer-cent money helpers.

Every value that crosses an untrusted boundary (request bodies, persisted
splits, keystroke input) goes through one of these functions so the
calculation code never sees NaN, infinity, None or negative amounts.
"""

import math
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional


_MONEY_INPUT_PATTERN = re.compile(r"[0-9]*\.?[0-9]{0,2}")
_NON_MONEY_CHARS = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"[0-9]*\.?[0-9]*")


def safe_number(value: Any) -> float:
    """
    Coerce a value to a finite, non-negative float.

    None, NaN, infinities, negative numbers and anything float() rejects
    all become 0.0.
    """
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def to_cents(value: Any) -> int:
    """
    Coerce a value to a non-negative integer number of cents.

    Fractional values are truncated toward zero. Also used for quantities,
    which follow the same rule.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value if value > 0 else 0
    return int(safe_number(value))


def is_valid_money_input(text: Any) -> bool:
    """
    Check whether text is a legal in-progress money entry.

    Allows the empty string, digits, a single decimal point and at most two
    digits after it. Used to gate keystrokes, not to convert values.
    """
    if not isinstance(text, str):
        return False
    return _MONEY_INPUT_PATTERN.fullmatch(text) is not None


def money_string_to_cents(text: Any) -> int:
    """
    Convert a decimal money string to integer cents.

    "4" -> 400, "4." -> 400, "4.9" -> 490, "4.99" -> 499. Extra decimal
    digits are truncated, not rounded: "4.999" -> 499. Characters other
    than digits and "." are stripped first; anything still unparseable
    returns 0.
    """
    if not isinstance(text, str) or text in ("", "."):
        return 0

    cleaned = _NON_MONEY_CHARS.sub("", text)
    parts = cleaned.split(".")

    if len(parts) == 1:
        return int(parts[0]) * 100 if parts[0] else 0

    if len(parts) == 2:
        whole = int(parts[0]) if parts[0] else 0
        decimal = parts[1][:2].ljust(2, "0")
        return whole * 100 + int(decimal)

    return 0


def cents_to_money_string(cents: Any) -> str:
    """
    Format positive cents as "D.DD" for an input field.

    Zero, negative and non-finite values return "" so an untouched field
    stays empty. A $0.00 entry therefore displays the same as no entry.
    """
    if isinstance(cents, bool):
        return ""
    if isinstance(cents, int):
        if cents <= 0:
            return ""
        return f"{cents // 100}.{cents % 100:02d}"
    try:
        number = float(cents)
    except (TypeError, ValueError, OverflowError):
        return ""
    if not math.isfinite(number) or number <= 0:
        return ""
    return f"{number / 100:.2f}"


def format_currency(cents: Any) -> str:
    """Format cents as "$D.DD". Non-numeric and non-finite values render as "$0.00"."""
    if isinstance(cents, int) and not isinstance(cents, bool):
        sign = "-" if cents < 0 else ""
        whole, part = divmod(abs(cents), 100)
        return f"${sign}{whole}.{part:02d}"
    try:
        number = float(cents)
    except (TypeError, ValueError, OverflowError):
        return "$0.00"
    if not math.isfinite(number):
        return "$0.00"
    return f"${number / 100:.2f}"


def parse_currency(text: str) -> Optional[int]:
    """
    Loosely parse a display string such as "$12.345" into cents.

    Unlike money_string_to_cents this rounds half up to the nearest cent.
    Returns None when no number can be read.
    """
    cleaned = _NON_MONEY_CHARS.sub("", text or "")
    prefix = _LEADING_NUMBER.match(cleaned).group()
    if prefix in ("", "."):
        return None

    try:
        amount = Decimal(prefix)
    except InvalidOperation:
        return None

    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
