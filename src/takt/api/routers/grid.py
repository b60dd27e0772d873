"""Activity grid endpoint."""
from fastapi import APIRouter, Depends

from takt.api.deps import get_settings, get_store
from takt.api.schemas.grid import GridResponse
from takt.config import Settings
from takt.infra.ledger.store import LedgerStore
from takt.services.summary_service import SummaryService

router = APIRouter(prefix="/grid", tags=["grid"])


@router.get("/{year}", response_model=GridResponse)
def get_grid(
    year: int,
    store: LedgerStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> GridResponse:
    return SummaryService(store, settings).grid(year)
