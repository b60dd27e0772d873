"""LedgerStore contract used by the services."""
from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from pathlib import Path

from takt.domain.models import EventRecord


class LedgerStore(ABC):
    """Durable, newest-first storage of event records."""

    @abstractmethod
    def read_records(self, limit: int = -1) -> list[EventRecord]:
        """Return records newest first.

        ``limit > 0`` truncates, ``limit == 0`` returns nothing and a negative
        limit returns everything.
        """

    @abstractmethod
    def append_record(self, record: EventRecord) -> None:
        """Persist *record* as the newest event, all-or-nothing."""

    @abstractmethod
    def locked(self) -> AbstractContextManager:
        """Hold exclusive in-process access, re-entrantly, e.g. across a read-then-append."""

    @abstractmethod
    def backup(self) -> Path:
        """Copy the current ledger to its single backup slot and return that path."""

    @abstractmethod
    def recover(self) -> list[EventRecord]:
        """Read all records from the backup slot."""
