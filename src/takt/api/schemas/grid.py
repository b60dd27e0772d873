"""Activity grid DTOs."""
from __future__ import annotations
from datetime import date
from pydantic import BaseModel

from takt.engine.grid import Tier


class GridDayRead(BaseModel):
    model_config = {"from_attributes": True}

    day: date
    hours: float
    tier: Tier


class GridWeekRead(BaseModel):
    model_config = {"from_attributes": True}

    week: int
    start: date
    days: list[GridDayRead]


class GridResponse(BaseModel):
    year: int
    weeks: list[GridWeekRead]
    tracked_days: int
    active_days: int
    activity_rate: float
