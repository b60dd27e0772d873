"""Period summary DTOs."""
from __future__ import annotations
from pydantic import BaseModel


class SummaryRow(BaseModel):
    group: str
    total_hours: float
    total: str
    days: int
    average_hours: float
    average: str
    balance_hours: float
    balance: str
    notes: list[str] = []


class SummaryResponse(BaseModel):
    period: str
    target_hours: float
    rows: list[SummaryRow]
