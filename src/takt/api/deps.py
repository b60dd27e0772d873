"""FastAPI dependencies."""
from __future__ import annotations
from fastapi import Request

from takt.config import Settings
from takt.infra.ledger.store import LedgerStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> LedgerStore:
    """The single store built by the app factory."""
    return request.app.state.store
