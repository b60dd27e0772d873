"""Summary use-case service. Owns engine -> DTO mapping; callers never see engine types."""
from __future__ import annotations
from datetime import date

from takt.api.schemas.grid import GridResponse, GridWeekRead
from takt.api.schemas.summary import SummaryResponse, SummaryRow
from takt.config import Settings
from takt.domain.exceptions import EmptyLedgerError
from takt.domain.models import AggregatedRecord
from takt.engine.aggregation import aggregate
from takt.engine.balance import balance_hours, hours_to_text, overtime_label
from takt.engine.grid import build_grid, check_year
from takt.infra.ledger.store import LedgerStore


class SummaryService:
    def __init__(self, store: LedgerStore, settings: Settings) -> None:
        self._store = store
        self._settings = settings

    def _row(self, agg: AggregatedRecord, target: float) -> SummaryRow:
        diff = balance_hours(agg, target)
        return SummaryRow(
            group=agg.group,
            total_hours=agg.total_hours,
            total=hours_to_text(agg.total_hours),
            days=agg.active_days,
            average_hours=agg.average_hours,
            average=hours_to_text(agg.average_hours),
            balance_hours=diff,
            balance=overtime_label(diff, target),
            notes=list(agg.notes),
        )

    def summarize(self, period: str, limit: int | None = None) -> SummaryResponse:
        if limit is None:
            limit = self._settings.TAKT_HEAD
        groups = aggregate(self._store.read_records(-1), period)
        if limit < 1 or limit > len(groups):
            limit = len(groups)

        target = self._settings.target_hours
        return SummaryResponse(
            period=period,
            target_hours=target,
            rows=[self._row(a, target) for a in groups[:limit]],
        )

    def grid(self, year: int | None = None) -> GridResponse:
        year = check_year(year if year is not None else date.today().year)
        records = self._store.read_records(-1)
        if not records:
            raise EmptyLedgerError("no records found")
        last_day = records[0].timestamp.date()

        days = aggregate(records, "day")
        grid = build_grid(days, year, last_day)
        return GridResponse(
            year=grid.year,
            weeks=[GridWeekRead.model_validate(w) for w in grid.weeks],
            tracked_days=grid.tracked_days,
            active_days=grid.active_days,
            activity_rate=grid.activity_rate,
        )
