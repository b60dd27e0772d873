"""CSV-file backed LedgerStore implementation."""
from __future__ import annotations

import csv
import logging
import os
import shutil
import tempfile
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Iterator, TextIO

from takt.domain.exceptions import LedgerIOError, RecordValidationError
from takt.domain.models import HEADER, EventRecord
from takt.domain.validation import parse_row
from takt.infra.ledger.store import LedgerStore

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".bak"

# Whole-file read failures; row-level problems surface as RecordValidationError.
_READ_ERRORS = (OSError, csv.Error, UnicodeDecodeError)

# One re-entrant lock per ledger file, shared by every store over that path.
_PATH_LOCKS: dict[Path, threading.RLock] = {}
_PATH_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    key = path.expanduser().absolute()
    with _PATH_LOCKS_GUARD:
        return _PATH_LOCKS.setdefault(key, threading.RLock())


def backup_path_for(path: Path) -> Path:
    return path.with_name(path.name + BACKUP_SUFFIX)


def _csv_writer(fh: TextIO):
    return csv.writer(fh, lineterminator="\n")


def _truncate(records: list[EventRecord], limit: int) -> list[EventRecord]:
    if limit == 0:
        return []
    if limit > 0:
        return records[:limit]
    return records


@contextmanager
def _atomic_writer(path: Path) -> Iterator[TextIO]:
    """Yield a temp file next to *path*; replace *path* with it on clean exit."""
    tmp = tempfile.NamedTemporaryFile(
        "w", newline="", encoding="utf-8", delete=False,
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp",
    )
    try:
        with tmp:
            yield tmp
            tmp.flush()
            os.fsync(tmp.fileno())
        if path.exists():
            shutil.copymode(path, tmp.name)
        os.replace(tmp.name, path)
    except BaseException:
        if os.path.exists(tmp.name):
            os.remove(tmp.name)
        raise


class CsvLedgerStore(LedgerStore):
    """LedgerStore backed by a comma-separated file with one header row.

    Layout::

        timestamp,kind,notes
        2025-01-09T17:45:00+01:00,out,End of day
        2025-01-09T09:02:11+01:00,in,

    New events are prepended. Every write goes through a temporary sibling
    file and ``os.replace`` so readers never observe a torn ledger. There is
    no cross-process locking: two concurrent writers can lose an update.
    Within one process, reads and appends on the same path are serialized.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.backup_path = backup_path_for(self.path)
        self._lock = _lock_for(self.path)

    # ------------------------------------------------------------------
    # LedgerStore interface
    # ------------------------------------------------------------------

    def read_records(self, limit: int = -1) -> list[EventRecord]:
        with self._lock:
            return self._read_records(limit)

    def append_record(self, record: EventRecord) -> None:
        with self._lock:
            self._append_record(record)

    def locked(self) -> threading.RLock:
        return self._lock

    def _read_records(self, limit: int) -> list[EventRecord]:
        if not self.path.exists():
            self.create()
        self.backup()

        try:
            return self._read_file(self.path, limit)
        except _READ_ERRORS as exc:
            logger.warning("Could not read %s (%s); trying backup", self.path, exc)
            try:
                return _truncate(self.recover(), limit)
            except LedgerIOError:
                raise LedgerIOError(f"could not read ledger {self.path}: {exc}") from exc

    def _append_record(self, record: EventRecord) -> None:
        if not self.path.exists():
            self.create()
        try:
            with self.path.open(newline="", encoding="utf-8") as prev, \
                    _atomic_writer(self.path) as fh:
                writer = _csv_writer(fh)
                writer.writerow(HEADER)
                writer.writerow(record.to_row())
                prev.readline()  # drop the old header
                shutil.copyfileobj(prev, fh)
        except OSError as exc:
            raise LedgerIOError(f"could not write ledger {self.path}: {exc}") from exc
        logger.info("Appended '%s' event to %s", record.kind.value, self.path)

    def backup(self) -> Path:
        try:
            shutil.copyfile(self.path, self.backup_path)
        except OSError as exc:
            raise LedgerIOError(f"could not create backup: {exc}") from exc
        return self.backup_path

    def recover(self) -> list[EventRecord]:
        try:
            records = self._read_file(self.backup_path, -1)
        except _READ_ERRORS as exc:
            raise LedgerIOError(f"could not recover from backup: {exc}") from exc
        logger.warning("Recovered %d record(s) from %s", len(records), self.backup_path)
        return records

    # ------------------------------------------------------------------
    # File helpers
    # ------------------------------------------------------------------

    def create(self) -> None:
        """Create an empty ledger holding only the header row."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with _atomic_writer(self.path) as fh:
                _csv_writer(fh).writerow(HEADER)
        except OSError as exc:
            raise LedgerIOError(f"failed to create file: {exc}") from exc
        logger.info("Created ledger %s", self.path)

    def _write_records(self, path: Path, records: Iterable[EventRecord]) -> None:
        with _atomic_writer(path) as fh:
            writer = _csv_writer(fh)
            writer.writerow(HEADER)
            writer.writerows(r.to_row() for r in records)

    def _read_file(self, path: Path, limit: int) -> list[EventRecord]:
        with path.open(newline="", encoding="utf-8") as fh:
            rows = list(csv.reader(fh, strict=True))

        if limit == 0 or len(rows) < 2:
            return []

        now = datetime.now(timezone.utc)
        valid: list[EventRecord] = []
        invalid_lines: list[int] = []
        for line_no, row in enumerate(rows[1:], start=1):
            if not row:
                continue
            try:
                valid.append(parse_row(row, now))
            except RecordValidationError as exc:
                logger.debug("Line %d of %s rejected: %s", line_no, path, exc.message)
                invalid_lines.append(line_no)

        if invalid_lines:
            logger.warning(
                "Found %d invalid record(s) at lines: %s", len(invalid_lines), invalid_lines,
            )
            try:
                self._write_records(path, valid)
            except OSError as exc:
                logger.error("Could not clean up invalid records in %s: %s", path, exc)

        return _truncate(valid, limit)
