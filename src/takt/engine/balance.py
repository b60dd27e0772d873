"""Duration rendering and overtime balance against a daily target."""
from __future__ import annotations

import math

from takt.domain.models import AggregatedRecord

DEFAULT_TARGET_HOURS = 8.0
NEUTRAL_LABEL = "00h00m"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _split_hours(hours: float) -> tuple[int, int]:
    """Split non-negative fractional hours into whole hours and rounded minutes."""
    whole = int(hours)
    minutes = _round_half_up((hours - whole) * 60)
    if minutes >= 60:
        whole += minutes // 60
        minutes %= 60
    return whole, minutes


def parse_target_hours(value: str | None, default: float = DEFAULT_TARGET_HOURS) -> float:
    """Parse a daily target given as decimal hours (``7.5``) or clock time (``7:30``).

    Anything unparsable, non-finite or non-positive yields *default*.
    """
    if value is None or not value.strip():
        return default
    value = value.strip()

    if ":" in value:
        parts = value.split(":")
        if len(parts) != 2:
            return default
        try:
            hours, minutes = int(parts[0]), int(parts[1])
        except ValueError:
            return default
        if hours < 0 or not 0 <= minutes < 60:
            return default
        target = hours + minutes / 60.0
    else:
        try:
            target = float(value)
        except ValueError:
            return default

    if not math.isfinite(target) or target <= 0:
        return default
    return target


def hours_to_text(total_hours: float) -> str:
    """Unsigned rendering used for totals and averages."""
    if total_hours <= 0:
        return NEUTRAL_LABEL
    if total_hours <= 24:
        hours, minutes = _split_hours(total_hours)
        return f"{hours}h{minutes:02d}m"
    days = int(total_hours // 24)
    hours, minutes = _split_hours(total_hours - days * 24)
    if hours >= 24:
        days, hours = days + 1, hours - 24
    return f"{days}d{hours:02d}h{minutes:02d}m"


def overtime_label(difference: float, target_hours: float = DEFAULT_TARGET_HOURS) -> str:
    """Signed balance, counting whole days in units of *target_hours*.

    >>> overtime_label(17.5, 8.0)
    '+2d1h30m'
    """
    if difference == 0:
        return NEUTRAL_LABEL
    if target_hours <= 0:
        target_hours = DEFAULT_TARGET_HOURS

    sign = "+" if difference > 0 else "-"
    magnitude = abs(difference)

    if magnitude < target_hours:
        hours, minutes = _split_hours(magnitude)
        return f"{sign}{hours}h{minutes:02d}m"

    days = int(magnitude // target_hours)
    hours, minutes = _split_hours(magnitude - days * target_hours)
    if hours == 0 and minutes == 0:
        return f"{sign}{days}d"
    if minutes == 0:
        return f"{sign}{days}d{hours}h"
    return f"{sign}{days}d{hours}h{minutes:02d}m"


def expected_hours(target_hours: float, active_days: int) -> float:
    return target_hours * active_days


def balance_hours(record: AggregatedRecord, target_hours: float) -> float:
    """Hours worked minus hours expected for the days actually worked in the group."""
    return record.total_hours - expected_hours(target_hours, record.active_days)
