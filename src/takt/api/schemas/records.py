"""Ledger record DTOs: pure Pydantic, no file access."""
from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel

from takt.domain.models import EventKind


class RecordRead(BaseModel):
    model_config = {"from_attributes": True}

    timestamp: datetime
    kind: EventKind
    notes: str = ""


class RecordList(BaseModel):
    items: list[RecordRead]
    total: int


class CheckRequest(BaseModel):
    notes: str = ""
