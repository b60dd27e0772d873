"""Period summary endpoints."""
from fastapi import APIRouter, Depends

from takt.api.deps import get_settings, get_store
from takt.api.schemas.summary import SummaryResponse
from takt.config import Settings
from takt.infra.ledger.store import LedgerStore
from takt.services.summary_service import SummaryService

router = APIRouter(prefix="/summary", tags=["summary"])


@router.get("/{period}", response_model=SummaryResponse)
def summarize(
    period: str,
    limit: int | None = None,
    store: LedgerStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> SummaryResponse:
    return SummaryService(store, settings).summarize(period, limit)
