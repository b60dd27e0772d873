"""FastAPI application factory."""
from __future__ import annotations
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from takt import __version__
from takt.config import Settings, load_settings
from takt.domain.exceptions import DomainError, EmptyLedgerError, LedgerIOError
from takt.infra.ledger.csv_store import CsvLedgerStore


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(title="takt API", version=__version__)
    app.state.settings = settings
    app.state.store = CsvLedgerStore(settings.ledger_path)

    # Import routers inside create_app() to avoid circular imports at module load time
    from takt.api.routers.records import router as records_router
    from takt.api.routers.summary import router as summary_router
    from takt.api.routers.grid import router as grid_router

    app.include_router(records_router)
    app.include_router(summary_router)
    app.include_router(grid_router)

    @app.exception_handler(EmptyLedgerError)
    def _empty(request: Request, exc: EmptyLedgerError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.message})

    @app.exception_handler(DomainError)
    def _domain(request: Request, exc: DomainError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.message})

    @app.exception_handler(LedgerIOError)
    def _io(request: Request, exc: LedgerIOError) -> JSONResponse:
        return JSONResponse(status_code=503, content={"detail": exc.message})

    @app.get("/health", tags=["ops"])
    def health() -> dict:
        return {"status": "ok"}

    return app
