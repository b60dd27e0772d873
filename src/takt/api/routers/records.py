"""Ledger record endpoints."""
from fastapi import APIRouter, Depends

from takt.api.deps import get_settings, get_store
from takt.api.schemas.records import CheckRequest, RecordList, RecordRead
from takt.config import Settings
from takt.infra.ledger.store import LedgerStore
from takt.services.ledger_service import LedgerService

router = APIRouter(prefix="/records", tags=["records"])


@router.get("", response_model=RecordList)
def list_records(
    limit: int | None = None,
    store: LedgerStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> RecordList:
    return LedgerService(store, settings).list_records(limit)


@router.post("/check", response_model=RecordRead, status_code=201)
def check(
    payload: CheckRequest,
    store: LedgerStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> RecordRead:
    return LedgerService(store, settings).check(payload.notes)
