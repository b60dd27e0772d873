"""Shared test fixtures.

  ledger_path: path of a ledger file that does not exist yet, inside tmp_path.
  settings: Settings pointing at ledger_path, isolated from the real env / .env.
  store: CsvLedgerStore over ledger_path.
  write_ledger: writes raw CSV lines (header added) to ledger_path.
  client: FastAPI TestClient wired to the same settings.
"""
from datetime import datetime, timedelta, timezone

import pytest

from takt.config import Settings
from takt.domain.models import EventKind, EventRecord
from takt.infra.ledger.csv_store import CsvLedgerStore
from takt.logging import logger as takt_logger

TAKT_ENV_VARS = ("TAKT_FILE", "TAKT_TARGET_HOURS", "TAKT_EDITOR", "TAKT_HEAD", "TAKT_LOG_LEVEL")

# A fixed Monday well in the past, so no record trips the future-timestamp check.
BASE = datetime(2024, 3, 4, 9, 0, tzinfo=timezone.utc)


def at(days: float = 0, hours: float = 0) -> datetime:
    return BASE + timedelta(days=days, hours=hours)


def ledger_from_sessions(*spans: tuple[datetime, datetime], notes: str = "") -> list[EventRecord]:
    """Build a newest-first record list from (start, end) pairs."""
    records: list[EventRecord] = []
    for start, end in sorted(spans, reverse=True):
        records.append(EventRecord(end, EventKind.OUT, ""))
        records.append(EventRecord(start, EventKind.IN, notes))
    return records


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in TAKT_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _reset_takt_logger():
    """configure_logging() binds a handler to the stderr of the moment; drop it after each test."""
    level = takt_logger.level
    yield
    for handler in [h for h in takt_logger.handlers if getattr(h, "_takt", False)]:
        takt_logger.removeHandler(handler)
    takt_logger.setLevel(level)


@pytest.fixture
def ledger_path(tmp_path):
    return tmp_path / "takt.csv"


@pytest.fixture
def settings(ledger_path) -> Settings:
    return Settings(_env_file=None, TAKT_FILE=str(ledger_path))


@pytest.fixture
def store(ledger_path) -> CsvLedgerStore:
    return CsvLedgerStore(ledger_path)


@pytest.fixture
def write_ledger(ledger_path):
    def _write(*lines: str) -> None:
        body = "".join(f"{line}\n" for line in ("timestamp,kind,notes", *lines))
        ledger_path.write_text(body, encoding="utf-8")
    return _write


@pytest.fixture
def client(settings):
    """FastAPI TestClient backed by the isolated ledger."""
    from fastapi.testclient import TestClient
    from takt.api.app import create_app

    app = create_app(settings)
    with TestClient(app) as c:
        yield c
