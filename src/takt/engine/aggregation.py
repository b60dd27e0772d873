"""Calendar-period aggregation of reconstructed sessions."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Sequence

from takt.domain.exceptions import UnsupportedPeriodError
from takt.domain.models import AggregatedRecord, EventRecord, Session
from takt.engine.sessions import reconstruct_sessions

Labeler = Callable[[datetime], str]

DATE_FORMAT = "%Y-%m-%d"


def _iso_week(ts: datetime) -> str:
    # ISO year, not calendar year: 2024-12-30 belongs to 2025-W01.
    iso_year, week, _ = ts.isocalendar()
    return f"{iso_year:04d}-W{week:02d}"


PERIOD_LABELERS: dict[str, Labeler] = {
    "day": lambda ts: ts.strftime(DATE_FORMAT),
    "week": _iso_week,
    "month": lambda ts: f"{ts.year:04d}-{ts.month:02d}",
    "year": lambda ts: f"{ts.year:04d}",
}

PERIODS = tuple(PERIOD_LABELERS)


def period_labeler(period: str) -> Labeler:
    try:
        return PERIOD_LABELERS[period]
    except KeyError:
        raise UnsupportedPeriodError(period) from None


@dataclass
class _GroupBuilder:
    group: str
    total_hours: float = 0.0
    dates: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    def merge(self, session: Session) -> None:
        self.total_hours += session.hours
        self.dates.append(session.started_at.strftime(DATE_FORMAT))
        if session.notes:
            self.notes.append(session.notes)

    def build(self) -> AggregatedRecord:
        dates = tuple(dict.fromkeys(self.dates))
        return AggregatedRecord(
            group=self.group,
            total_hours=self.total_hours,
            dates=dates,
            average_hours=self.total_hours / len(dates),
            notes=tuple(self.notes),
        )


def aggregate_sessions(sessions: Sequence[Session], labeler: Labeler) -> list[AggregatedRecord]:
    """Group sessions by ``labeler(session.started_at)``, newest key first."""
    builders: dict[str, _GroupBuilder] = {}
    for session in sessions:
        key = labeler(session.started_at)
        builder = builders.get(key)
        if builder is None:
            builder = builders[key] = _GroupBuilder(group=key)
        builder.merge(session)
    return [builders[key].build() for key in sorted(builders, reverse=True)]


def aggregate(
    records: Sequence[EventRecord], period: str, *, now: datetime | None = None,
) -> list[AggregatedRecord]:
    """Reconstruct sessions from *records* and bucket them by *period*.

    Raises ``EmptyLedgerError`` for an empty input and
    ``UnsupportedPeriodError`` for anything but day/week/month/year.
    """
    labeler = period_labeler(period)
    sessions = reconstruct_sessions(records, now=now)
    return aggregate_sessions(sessions, labeler)
