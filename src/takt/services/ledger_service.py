"""Ledger use-case service: check in/out and list recent events."""
from __future__ import annotations
from datetime import datetime

from takt.api.schemas.records import RecordList, RecordRead
from takt.config import Settings
from takt.domain.models import EventKind, EventRecord
from takt.infra.ledger.store import LedgerStore


class LedgerService:
    def __init__(self, store: LedgerStore, settings: Settings) -> None:
        self._store = store
        self._settings = settings

    def next_kind(self) -> EventKind:
        """``in`` on an empty ledger or after an ``out``, ``out`` otherwise."""
        latest = self._store.read_records(1)
        if not latest or latest[0].kind is EventKind.OUT:
            return EventKind.IN
        return EventKind.OUT

    def check(self, notes: str = "", now: datetime | None = None) -> RecordRead:
        stamp = now or datetime.now()
        if stamp.tzinfo is None:
            stamp = stamp.astimezone()
        # The toggle is read and written under one lock so concurrent checks alternate.
        with self._store.locked():
            record = EventRecord(
                timestamp=stamp.replace(microsecond=0),
                kind=self.next_kind(),
                notes=notes,
            )
            self._store.append_record(record)
        return RecordRead.model_validate(record)

    def list_records(self, limit: int | None = None) -> RecordList:
        if limit is None:
            limit = self._settings.TAKT_HEAD
        records = self._store.read_records(limit)
        return RecordList(
            items=[RecordRead.model_validate(r) for r in records],
            total=len(records),
        )
