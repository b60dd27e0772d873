import os
import sys
from contextlib import contextmanager
from typing import Optional

import typer

from takt import __version__
from takt.api.schemas.grid import GridResponse
from takt.api.schemas.summary import SummaryResponse
from takt.config import Settings, load_settings
from takt.domain.exceptions import TaktError
from takt.domain.models import HEADER, format_timestamp
from takt.engine.grid import Tier
from takt.infra import external
from takt.infra.ledger.csv_store import CsvLedgerStore
from takt.logging import configure_logging, get_run_id, logger
from takt.services.ledger_service import LedgerService
from takt.services.summary_service import SummaryService

app = typer.Typer(no_args_is_help=True)

TIER_SYMBOLS = {
    Tier.MINIMAL: "·",
    Tier.LIGHT: "▪",
    Tier.NORMAL: "▮",
    Tier.HEAVY: "▆",
    Tier.VERY_HEAVY: "█",
}
TIER_LEGEND = {
    Tier.MINIMAL: "0h00m - 1h00m   (minimal)",
    Tier.LIGHT: "1h00m - 4h00m   (light)",
    Tier.NORMAL: "4h00m - 8h00m   (normal)",
    Tier.HEAVY: "8h00m - 12h00m  (heavy)",
    Tier.VERY_HEAVY: "12h00m or more  (very heavy)",
}


@app.callback()
def main(ctx: typer.Context):
    """
    takt: check in, check out, and see where the hours went.

    Configuration comes from TAKT_FILE, TAKT_TARGET_HOURS, TAKT_EDITOR,
    TAKT_HEAD and TAKT_LOG_LEVEL (environment or .env).
    """
    settings = load_settings()
    configure_logging(settings.TAKT_LOG_LEVEL)
    ctx.obj = settings


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj


def _store(ctx: typer.Context) -> CsvLedgerStore:
    return CsvLedgerStore(_settings(ctx).ledger_path)


@contextmanager
def _abort_on_error():
    try:
        yield
    except TaktError as e:
        logger.debug("Command failed: %s", e.message)
        typer.echo(f"❌ Error: {e.message}", err=True)
        raise typer.Exit(code=1)


# ── Ledger ──────────────────────────────────────────────────────────────────

@app.command(name="check")
def check(ctx: typer.Context, notes: str = typer.Argument("", help="Free-text note")):
    """Check in or out (toggles automatically)."""
    with _abort_on_error():
        record = LedgerService(_store(ctx), _settings(ctx)).check(notes)
    print(f"Check {record.kind.value} at {format_timestamp(record.timestamp)}")


@app.command(name="cat")
def cat(ctx: typer.Context, head: Optional[int] = typer.Argument(None, help="Rows to show")):
    """Show the most recent records, newest first."""
    with _abort_on_error():
        records = LedgerService(_store(ctx), _settings(ctx)).list_records(head)
    print(f"{HEADER[0]:<25} {HEADER[1]:<5} {HEADER[2]}")
    for r in records.items:
        print(f"{format_timestamp(r.timestamp):<25} {r.kind.value:<5} {r.notes}")


# ── Summaries ───────────────────────────────────────────────────────────────

def _print_summary(summary: SummaryResponse) -> None:
    if summary.period == "day":
        row = "{:<12} {:>6}\t{:>4}\t{:>6}\t{:>8}"
    else:
        # wider total column for week, month, year
        row = "{:<8} {:>10}\t{:>4}\t{:>6}\t{:>8}"
    print(row.format("Date", "Total", "Days", "Avg", "Balance"))
    for r in summary.rows:
        print(row.format(r.group, r.total, r.days, r.average, r.balance))


def _summary_command(ctx: typer.Context, period: str, head: Optional[int]) -> None:
    with _abort_on_error():
        summary = SummaryService(_store(ctx), _settings(ctx)).summarize(period, head)
    _print_summary(summary)


@app.command(name="day")
def day(ctx: typer.Context, head: Optional[int] = typer.Argument(None, help="Periods to show, 0 for all")):
    """Daily summary with balance against the target."""
    _summary_command(ctx, "day", head)


@app.command(name="week")
def week(ctx: typer.Context, head: Optional[int] = typer.Argument(None, help="Periods to show, 0 for all")):
    """Weekly (ISO week) summary with balance against the target."""
    _summary_command(ctx, "week", head)


@app.command(name="month")
def month(ctx: typer.Context, head: Optional[int] = typer.Argument(None, help="Periods to show, 0 for all")):
    """Monthly summary with balance against the target."""
    _summary_command(ctx, "month", head)


@app.command(name="year")
def year(ctx: typer.Context, head: Optional[int] = typer.Argument(None, help="Periods to show, 0 for all")):
    """Yearly summary with balance against the target."""
    _summary_command(ctx, "year", head)


# ── Grid ────────────────────────────────────────────────────────────────────

def _print_grid(grid: GridResponse, legend: bool) -> None:
    pad = "    "
    print(f"{pad}{'Date':<10} Wk M T W T F S S")
    print(f"{pad}{'═' * 34}")

    current_month = None
    for w in grid.weeks:
        month_key = w.start.strftime("%Y-%m")
        if current_month is not None and month_key != current_month:
            print(f"{pad}{'─' * 34}")
        current_month = month_key

        cells = [" "] * 7
        for d in w.days:
            cells[d.day.weekday()] = TIER_SYMBOLS[d.tier]
        print(f"{pad}{w.start.isoformat()} {w.week:02d} {' '.join(cells)}")

    if grid.tracked_days:
        print(f"\n{pad}Summary:")
        print(f"{pad}├─ Total tracked days: {grid.tracked_days}")
        print(f"{pad}├─ Active work days: {grid.active_days}")
        print(f"{pad}└─ Activity rate: {grid.activity_rate:.1f}%")

    if legend:
        print(f"\n{pad}Legend:")
        for tier, text in TIER_LEGEND.items():
            print(f"{pad}  {TIER_SYMBOLS[tier]} {text}")


@app.command(name="grid")
def grid(
    ctx: typer.Context,
    year_: Optional[int] = typer.Argument(None, metavar="YEAR", help="Defaults to the current year"),
    legend: bool = typer.Option(False, "--legend", help="Explain the symbols"),
):
    """Year grid of daily activity, one row per ISO week."""
    with _abort_on_error():
        result = SummaryService(_store(ctx), _settings(ctx)).grid(year_)
    _print_grid(result, legend)


# ── External tools ──────────────────────────────────────────────────────────

@app.command(name="edit")
def edit(ctx: typer.Context):
    """Open the ledger in TAKT_EDITOR."""
    settings = _settings(ctx)
    with _abort_on_error():
        external.open_editor(settings.TAKT_EDITOR, settings.ledger_path)


@app.command(name="commit")
def commit(
    ctx: typer.Context,
    push: bool = typer.Option(True, "--push/--no-push", help="Push after committing"),
):
    """Commit (and push) the ledger file to its git repository."""
    with _abort_on_error():
        steps = external.commit_ledger(_settings(ctx).ledger_path, push=push)
    for step in steps:
        print(f"Records {step}")


# ── Ops ─────────────────────────────────────────────────────────────────────

@app.command(name="doctor")
def doctor(ctx: typer.Context):
    """
    Show resolved configuration and check the ledger location.
    """
    settings = _settings(ctx)
    path = settings.ledger_path
    failures: list[str] = []

    print("\n🩺 takt doctor\n")
    print("[Environment]")
    print(f"  Python: {sys.version.split()[0]}")
    print(f"  Run ID: {get_run_id()}")

    print("\n[Configuration]")
    print(f"  TAKT_FILE:          {path}")
    print(f"  TAKT_TARGET_HOURS:  {settings.target_hours:g}h")
    print(f"  TAKT_EDITOR:        {settings.TAKT_EDITOR or '(not set)'}")
    print(f"  TAKT_HEAD:          {settings.TAKT_HEAD}")

    print("\n[Ledger]")
    if path.exists():
        if os.access(path, os.W_OK):
            print(f"  {path.name:<20} ✅ Exists and writable")
        else:
            print(f"  {path.name:<20} ❌ Exists but NOT writable")
            failures.append(f"{path} is not writable")
    elif path.parent.exists() and os.access(path.parent, os.W_OK):
        print(f"  {path.name:<20} ✅ Does not exist yet; directory is writable")
    else:
        print(f"  {path.name:<20} ❌ Directory {path.parent} missing or not writable")
        failures.append(f"cannot create {path}")

    if failures:
        print()
        for msg in failures:
            print(f"  ❌ {msg}")
        raise typer.Exit(code=1)
    print("\nAll good ✅")


@app.command(name="version")
def version():
    """Print version information."""
    print(f"takt version {__version__}")
    print(f"Python {sys.version.split()[0]} on {sys.platform}")


@app.command(name="serve")
def serve(
    ctx: typer.Context,
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Bind port"),
):
    """Serve the HTTP API."""
    import uvicorn
    from takt.api.app import create_app

    uvicorn.run(create_app(_settings(ctx)), host=host, port=port)


# Short aliases kept out of --help.
for _alias, _command in {
    "c": check, "display": cat, "d": day, "w": week, "m": month, "y": year,
    "e": edit, "cm": commit,
}.items():
    app.command(name=_alias, hidden=True)(_command)


if __name__ == "__main__":
    app()
