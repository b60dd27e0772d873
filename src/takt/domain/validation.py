"""Row-level validation for ledger content.

Everything here raises ``RecordValidationError``; the store decides what
to do with a bad row.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Sequence

from takt.domain.exceptions import RecordValidationError
from takt.domain.models import HEADER, EventKind, EventRecord

# YYYY-MM-DDTHH:MM:SS[.frac] then Z or +HH:MM; fromisoformat alone also takes week dates and short times.
_RFC3339 = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})"
)


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp. Offsets are mandatory."""
    value = value.strip()
    if not _RFC3339.fullmatch(value):
        raise RecordValidationError(f"invalid timestamp: {value!r}")
    try:
        ts = datetime.fromisoformat(value)
    except ValueError as exc:
        raise RecordValidationError(f"invalid timestamp: {value!r}") from exc
    return ts


def validate_record(record: EventRecord, now: datetime | None = None) -> EventRecord:
    now = now or datetime.now(timezone.utc)
    if record.timestamp is None or record.timestamp.tzinfo is None:
        raise RecordValidationError("invalid timestamp")
    if not isinstance(record.kind, EventKind):
        raise RecordValidationError(f"invalid kind: {record.kind} (must be 'in' or 'out')")
    if record.timestamp > now:
        raise RecordValidationError(f"timestamp in future: {record.timestamp.isoformat()}")
    return record


def parse_row(row: Sequence[str], now: datetime | None = None) -> EventRecord:
    """Turn one CSV row into a validated ``EventRecord``."""
    if len(row) != len(HEADER):
        raise RecordValidationError(
            f"expected {len(HEADER)} columns, got {len(row)}"
        )
    raw_ts, raw_kind, notes = row
    timestamp = parse_timestamp(raw_ts)
    try:
        kind = EventKind(raw_kind)
    except ValueError as exc:
        raise RecordValidationError(
            f"invalid kind: {raw_kind} (must be 'in' or 'out')"
        ) from exc
    return validate_record(EventRecord(timestamp=timestamp, kind=kind, notes=notes), now)
