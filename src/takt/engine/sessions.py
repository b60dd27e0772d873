"""Session reconstruction from newest-first event records."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from takt.domain.exceptions import EmptyLedgerError
from takt.domain.models import EventKind, EventRecord, Session

logger = logging.getLogger(__name__)

INFERRED_NOTE = "Inferred by takt."


def infer_last_out(
    records: Sequence[EventRecord], now: datetime | None = None,
) -> list[EventRecord]:
    """Return the records with a synthetic ``out`` prepended when the newest one is ``in``.

    The input is never mutated.
    """
    effective = list(records)
    if effective and effective[0].kind is EventKind.IN:
        stamp = now or datetime.now().astimezone()
        effective.insert(0, EventRecord(timestamp=stamp, kind=EventKind.OUT, notes=INFERRED_NOTE))
    return effective


def reconstruct_sessions(
    records: Sequence[EventRecord], now: datetime | None = None,
) -> list[Session]:
    """Pair each ``out`` with the nearest older ``in``.

    Records are scanned in storage order (newest first). An ``in`` with no
    pending ``out`` is dropped; an ``out`` overwritten by a newer-in-scan
    ``out`` before any ``in`` is dropped as well.
    """
    if not records:
        raise EmptyLedgerError("no records to process")

    effective = infer_last_out(records, now)
    synthetic = effective[0] if len(effective) > len(records) else None

    sessions: list[Session] = []
    pending: EventRecord | None = None
    for record in effective:
        if record.kind is EventKind.OUT:
            pending = record
        elif pending is not None:
            session = Session(
                started_at=record.timestamp,
                ended_at=pending.timestamp,
                notes=record.notes,
                inferred=pending is synthetic,
            )
            if session.hours < 0:
                logger.warning(
                    "Session starting %s ends before it starts (%.2fh); ledger rows are out of order",
                    record.timestamp.isoformat(), session.hours,
                )
            sessions.append(session)
            pending = None
    return sessions
