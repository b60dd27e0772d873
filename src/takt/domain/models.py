"""Ledger value types.

Event records are the only persisted state. Sessions and aggregated
records are derived per call and never written back.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

HEADER = ("timestamp", "kind", "notes")


class EventKind(str, Enum):
    IN = "in"
    OUT = "out"


@dataclass(frozen=True, slots=True)
class EventRecord:
    """One check-in or check-out marker as stored in the ledger."""

    timestamp: datetime
    kind: EventKind
    notes: str = ""

    def to_row(self) -> list[str]:
        return [format_timestamp(self.timestamp), self.kind.value, self.notes]


@dataclass(frozen=True, slots=True)
class Session:
    """A check-in paired with the check-out that closed it.

    ``inferred`` is set when the closing event was synthesized at
    reconstruction time because the newest ledger event is still open.
    """

    started_at: datetime
    ended_at: datetime
    notes: str = ""
    inferred: bool = False

    @property
    def hours(self) -> float:
        return (self.ended_at - self.started_at).total_seconds() / 3600

    @property
    def day(self) -> date:
        return self.started_at.date()


@dataclass(frozen=True, slots=True)
class AggregatedRecord:
    """Sessions bucketed under one calendar-period key."""

    group: str
    total_hours: float
    dates: tuple[str, ...]
    average_hours: float
    notes: tuple[str, ...] = field(default_factory=tuple)

    @property
    def active_days(self) -> int:
        return len(self.dates)


def format_timestamp(ts: datetime) -> str:
    """Render *ts* as RFC 3339, using ``Z`` for a zero UTC offset."""
    text = ts.isoformat()
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text
