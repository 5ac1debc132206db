"""Pure display helpers for numbers, hashrates and timestamps."""

from __future__ import annotations

import math
import re
from datetime import UTC, datetime
from typing import Any

_MILLION = 1_000_000
_BILLION = 1_000_000_000
_TRILLION = 1_000_000_000_000

_HASHRATE_UNITS = ("H/s", "KH/s", "MH/s", "GH/s", "TH/s", "PH/s", "EH/s")
_HASHRATE_THRESHOLDS = (1.0, 1e3, 1e6, 1e9, 1e12, 1e15, 1e18)
_TH_TO_H = 1e12

# A position between digits followed by a multiple of three digits
_THOUSANDS_RE = re.compile(r"\B(?=(\d{3})+(?!\d))")


def _to_float(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def format_number(value: Any) -> str:
    """Abbreviate a large magnitude with an M/B/T suffix.

    Values below one million are shown with two decimals and no suffix.
    Zero, NaN, infinities and anything non-numeric format as ``"0"``.

    Examples:
        >>> format_number(1_500_000)
        '1.50M'
        >>> format_number(2_300_000_000)
        '2.30B'
        >>> format_number(float("nan"))
        '0'
    """
    number = _to_float(value)
    if number is None or number == 0:
        return "0"

    magnitude = abs(number)
    if magnitude >= _TRILLION:
        return f"{number / _TRILLION:.2f}T"
    if magnitude >= _BILLION:
        return f"{number / _BILLION:.2f}B"
    if magnitude >= _MILLION:
        return f"{number / _MILLION:.2f}M"
    return f"{number:.2f}"


def format_hashrate(th_per_second: float) -> str:
    """Render a hashrate given in TH/s with the largest fitting unit.

    Two decimals are used, except one decimal when the scaled value lies in
    [10, 100) at any unit above H/s.

    Args:
        th_per_second: Hashrate in terahashes per second.

    Returns:
        Human-readable hashrate such as ``"100.00 TH/s"``.

    Raises:
        ValueError: If the input is NaN or infinite.
    """
    if not math.isfinite(th_per_second):
        raise ValueError(f"hashrate must be finite, got {th_per_second!r}")

    hashrate = th_per_second * _TH_TO_H
    unit_index = 0
    while (
        unit_index < len(_HASHRATE_UNITS) - 1
        and hashrate >= _HASHRATE_THRESHOLDS[unit_index + 1]
    ):
        unit_index += 1

    scaled = hashrate / _HASHRATE_THRESHOLDS[unit_index]
    decimals = 1 if unit_index > 0 and 10 <= scaled < 100 else 2
    return f"{scaled:.{decimals}f} {_HASHRATE_UNITS[unit_index]}"


def group_digits(digits: str) -> str:
    """Insert thousands separators into a digit string.

    Works on the text itself, so integers of any size keep every digit.

    Examples:
        >>> group_digits("1234567")
        '1,234,567'
    """
    return _THOUSANDS_RE.sub(",", digits)


def format_integer(value: int | str) -> str:
    """Comma-group an integer given either as ``int`` or as digit text."""
    if isinstance(value, int):
        return f"{value:,}"
    return group_digits(value)


def format_amount(value: float, decimals: int = 8) -> str:
    """Fixed-point amount with grouping, trailing zeros trimmed.

    >>> format_amount(1234.5)
    '1,234.5'
    """
    text = f"{value:,.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_halving(amount: float, timestamp: int) -> str:
    """Describe the next reward reduction on three lines.

    The first line holds the new reward, the second the UTC date and the
    third the UTC time.

    >>> format_halving(12.5, 0)
    '12.50000000 KAS\\non Thu, 01 Jan 1970\\n00:00:00 GMT'
    """
    moment = datetime.fromtimestamp(timestamp, UTC)
    date_part = moment.strftime("%a, %d %b %Y")
    time_part = moment.strftime("%H:%M:%S GMT")
    return f"{amount:.8f} KAS\non {date_part}\n{time_part}"


def split_wait(remaining_seconds: float) -> tuple[int, int]:
    """Split a remaining wait into whole (minutes, seconds)."""
    total = max(0, int(remaining_seconds))
    minutes, seconds = divmod(total, 60)
    return minutes % 60, seconds
