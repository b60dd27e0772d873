"""Aggregation by calendar period."""
from datetime import datetime, timedelta, timezone

import pytest

from takt.domain.exceptions import EmptyLedgerError, UnsupportedPeriodError
from takt.domain.models import EventKind, EventRecord
from takt.engine.aggregation import PERIODS, aggregate, period_labeler

from conftest import at, ledger_from_sessions

UTC = timezone.utc


def test_single_session_day_total():
    now = datetime.now().astimezone()
    records = [
        EventRecord(now - timedelta(hours=2), EventKind.OUT),
        EventRecord(now - timedelta(hours=4), EventKind.IN),
    ]
    groups = aggregate(records, "day")
    assert len(groups) == 1
    assert groups[0].total_hours == pytest.approx(2.0)


@pytest.mark.parametrize("period", PERIODS)
def test_every_period_produces_non_zero_averages(period):
    records = ledger_from_sessions((at(hours=0), at(hours=3)))
    groups = aggregate(records, period)
    assert groups
    assert all(g.average_hours > 0 for g in groups)


def test_unsupported_period_fails():
    records = ledger_from_sessions((at(hours=0), at(hours=3)))
    with pytest.raises(UnsupportedPeriodError, match="unsupported period: fortnight"):
        aggregate(records, "fortnight")


def test_empty_records_fail():
    with pytest.raises(EmptyLedgerError):
        aggregate([], "day")


def test_day_keys_sorted_newest_first():
    records = ledger_from_sessions(
        (at(days=0), at(days=0, hours=2)),
        (at(days=2), at(days=2, hours=1)),
        (at(days=1), at(days=1, hours=3)),
    )
    groups = aggregate(records, "day")
    assert [g.group for g in groups] == ["2024-03-06", "2024-03-05", "2024-03-04"]
    assert [g.total_hours for g in groups] == [1.0, 3.0, 2.0]


def test_dates_deduplicated_before_average():
    # Two sessions on Monday, one on Tuesday, same ISO week.
    records = ledger_from_sessions(
        (at(hours=0), at(hours=3)),
        (at(hours=4), at(hours=7)),
        (at(days=1), at(days=1, hours=2)),
        notes="focus",
    )
    (week,) = aggregate(records, "week")
    assert week.group == "2024-W10"
    assert week.total_hours == 8.0
    assert week.dates == ("2024-03-05", "2024-03-04")
    assert week.active_days == 2
    assert week.average_hours == 4.0
    assert week.notes == ("focus", "focus", "focus")


def test_week_keys_use_iso_year_at_year_boundary():
    def span(y, m, d):
        start = datetime(y, m, d, 9, 0, tzinfo=UTC)
        return start, start + timedelta(hours=8)

    records = ledger_from_sessions(
        span(2024, 12, 27),  # 2024-W52
        span(2024, 12, 30),  # ISO 2025-W01 though still calendar 2024
        span(2025, 1, 6),    # 2025-W02
    )
    groups = aggregate(records, "week")
    assert [g.group for g in groups] == ["2025-W02", "2025-W01", "2024-W52"]


def test_month_and_year_labels():
    ts = datetime(2025, 2, 3, 10, 0, tzinfo=UTC)
    assert period_labeler("month")(ts) == "2025-02"
    assert period_labeler("year")(ts) == "2025"
    assert period_labeler("day")(ts) == "2025-02-03"


def test_group_uses_check_in_date():
    # Overnight session counts entirely towards the day it started.
    start = datetime(2024, 5, 31, 22, 0, tzinfo=UTC)
    records = ledger_from_sessions((start, start + timedelta(hours=4)))
    (month,) = aggregate(records, "month")
    assert month.group == "2024-05"
    assert month.total_hours == 4.0
