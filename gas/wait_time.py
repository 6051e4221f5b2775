"""
Compact duration strings for gas wait-time estimates.
"""

from __future__ import annotations

import math

from gas.validation import validate_minutes

MINUTES_PER_WEEK = 10080
MINUTES_PER_DAY = 1440
MINUTES_PER_HOUR = 60


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def parse_wait_time(minutes, str_hour: str, str_min: str, str_sec: str) -> str:
    """
    Format a wait time given in minutes, largest unit first.

    Only the largest non-zero unit is shown, with one exception: a day count
    is still appended after a week count. Week and day labels are fixed
    ("week", "day"); the hour, minute and second labels are supplied by the
    caller and glued to the number without a space.

        parse_wait_time(90, "h", "m", "s")    -> "1h"
        parse_wait_time(0.5, "h", "m", "s")   -> "30s"
        parse_wait_time(11520, "h", "m", "s") -> "1week 1day"

    Returns an empty string below one second.

    Raises:
        InvalidInput: If minutes is negative, NaN, Inf or not a number.
    """
    remaining = validate_minutes(minutes)
    parts: list[str] = []

    weeks = math.floor(remaining / MINUTES_PER_WEEK)
    remaining %= MINUTES_PER_WEEK
    days = math.floor(remaining / MINUTES_PER_DAY)
    remaining %= MINUTES_PER_DAY
    hours = math.floor(remaining / MINUTES_PER_HOUR)
    remaining %= MINUTES_PER_HOUR
    whole_minutes = math.floor(remaining)
    remaining %= 1
    # two-decimal rounding of the fraction before scaling to seconds
    seconds = _round_half_up(remaining * 100) * 3 / 5

    if weeks:
        parts.append(f"{weeks}week")
    if days:
        parts.append(f"{days}day")
    if not parts and hours:
        parts.append(f"{hours}{str_hour}")
    if not parts and whole_minutes >= 1:
        parts.append(f"{whole_minutes}{str_min}")
    if not parts and seconds > 1:
        parts.append(f"{math.ceil(seconds)}{str_sec}")

    return " ".join(parts)


__all__ = ["parse_wait_time"]
