"""Year activity grid: one cell per day, bucketed into effort tiers."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import MAXYEAR, MINYEAR, date, timedelta
from enum import Enum
from typing import Sequence

from takt.domain.exceptions import InvalidYearError
from takt.domain.models import AggregatedRecord


class Tier(str, Enum):
    MINIMAL = "minimal"
    LIGHT = "light"
    NORMAL = "normal"
    HEAVY = "heavy"
    VERY_HEAVY = "very_heavy"


# Upper bounds (exclusive), checked in order; anything above is VERY_HEAVY.
TIER_THRESHOLDS: tuple[tuple[float, Tier], ...] = (
    (1.0, Tier.MINIMAL),
    (4.0, Tier.LIGHT),
    (8.0, Tier.NORMAL),
    (12.0, Tier.HEAVY),
)


def classify_hours(hours: float) -> Tier:
    for bound, tier in TIER_THRESHOLDS:
        if hours < bound:
            return tier
    return Tier.VERY_HEAVY


@dataclass(frozen=True, slots=True)
class GridDay:
    day: date
    hours: float
    tier: Tier


@dataclass(slots=True)
class GridWeek:
    week: int
    start: date
    days: list[GridDay] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ActivityGrid:
    year: int
    weeks: tuple[GridWeek, ...]

    @property
    def tracked_days(self) -> int:
        return sum(len(w.days) for w in self.weeks)

    @property
    def active_days(self) -> int:
        return sum(1 for w in self.weeks for d in w.days if d.tier is not Tier.MINIMAL)

    @property
    def activity_rate(self) -> float:
        """Percentage of tracked days that were not minimal."""
        tracked = self.tracked_days
        return self.active_days / tracked * 100 if tracked else 0.0


def check_year(year: int) -> int:
    if not MINYEAR <= year <= MAXYEAR:
        raise InvalidYearError(year)
    return year


def build_grid(days: Sequence[AggregatedRecord], year: int, last_day: date) -> ActivityGrid:
    """Lay out *year* week by week, stopping at *last_day*.

    *days* must be a day-level aggregation. Days belonging to a different
    ISO year (the first days of January, the last days of December) are
    left out so every row is one ISO week of *year*.
    Raises ``InvalidYearError`` outside years 1-9999.
    """
    check_year(year)
    hours_by_day = {a.group: a.total_hours for a in days}
    weeks: dict[int, GridWeek] = {}

    current = date(year, 1, 1)
    end = min(date(year, 12, 31), last_day)
    while current <= end:
        iso_year, week, _ = current.isocalendar()
        if iso_year == year:
            row = weeks.get(week)
            if row is None:
                monday = current - timedelta(days=current.weekday())
                row = weeks[week] = GridWeek(week=week, start=monday)
            hours = hours_by_day.get(current.isoformat(), 0.0)
            row.days.append(GridDay(day=current, hours=hours, tier=classify_hours(hours)))
        current += timedelta(days=1)

    return ActivityGrid(year=year, weeks=tuple(weeks[k] for k in sorted(weeks)))
