"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from turtletrace.config.settings import get_settings
from turtletrace.config.logging_config import setup_logging
from turtletrace.repositories.sqlalchemy.database import init_db, get_session
from turtletrace.repositories.sqlalchemy import SqlAlchemyCollectionStore
from turtletrace.repositories.collections import (
    CollectionAccountRepository,
    CollectionPositionRepository,
)
from turtletrace.api.deps import get_market_data_service
from turtletrace.api.routers import (
    accounts_router,
    positions_router,
    portfolio_router,
    tags_router,
    reviews_router,
    data_router,
)
from turtletrace.core.exceptions import AppError, NotFoundError
from turtletrace.domain.views import RefreshSummary
from turtletrace.services import AccountService, LedgerService, PriceRefresher

logger = logging.getLogger(__name__)


def initialize_storage() -> None:
    """Create tables, run collection migrations and ensure the default account."""
    init_db()
    db = get_session()
    try:
        store = SqlAlchemyCollectionStore(db)
        state = AccountService(
            account_repo=CollectionAccountRepository(store),
            position_repo=CollectionPositionRepository(store),
        ).initialize()
        logger.info("Storage ready (%d accounts)", len(state.accounts))
    finally:
        db.close()


async def scheduled_refresh() -> RefreshSummary:
    """Refresh every position's price using a dedicated session."""
    db = get_session()
    try:
        store = SqlAlchemyCollectionStore(db)
        ledger = LedgerService(
            position_repo=CollectionPositionRepository(store),
            account_repo=CollectionAccountRepository(store),
            market_data=get_market_data_service(),
        )
        return await ledger.refresh_prices()
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    initialize_storage()

    current = get_settings()
    refresher = None
    if current.auto_refresh_enabled:
        refresher = PriceRefresher(
            scheduled_refresh,
            interval_seconds=current.quote_refresh_interval_seconds,
        )
        refresher.start()
    app.state.price_refresher = refresher

    yield

    # Shutdown
    if refresher is not None:
        await refresher.stop()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="A-share position ledger, profit attribution and trading journal",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(accounts_router)
app.include_router(positions_router)
app.include_router(portfolio_router)
app.include_router(tags_router)
app.include_router(reviews_router)
app.include_router(data_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    status_code = 404 if isinstance(exc, NotFoundError) else 400
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
