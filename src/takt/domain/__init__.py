from takt.domain.models import AggregatedRecord, EventKind, EventRecord, Session

__all__ = [
    "AggregatedRecord",
    "EventKind",
    "EventRecord",
    "Session",
]
