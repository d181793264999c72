"""Dependency injection for FastAPI."""

from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from turtletrace.repositories.sqlalchemy.database import get_db
from turtletrace.repositories.sqlalchemy import SqlAlchemyCollectionStore
from turtletrace.repositories.collections import (
    CollectionPositionRepository,
    CollectionAccountRepository,
    CollectionReviewRepository,
    CollectionTagRepository,
)
from turtletrace.repositories.protocols import CollectionStore
from turtletrace.providers import create_provider
from turtletrace.services import (
    LedgerService,
    AccountService,
    AnalysisService,
    MarketDataService,
    TagService,
    ReviewService,
    BackupService,
)
from turtletrace.csv import CsvExporter
from turtletrace.config.settings import get_settings

# Shared across requests so the quote cache outlives a single request
_market_data_service: Optional[MarketDataService] = None


def get_collection_store(db: Session = Depends(get_db)) -> CollectionStore:
    """Provide the CollectionStore backing every repository."""
    return SqlAlchemyCollectionStore(db)


def get_position_repo(
    store: CollectionStore = Depends(get_collection_store),
) -> CollectionPositionRepository:
    """Provide PositionRepository instance."""
    return CollectionPositionRepository(store)


def get_account_repo(
    store: CollectionStore = Depends(get_collection_store),
) -> CollectionAccountRepository:
    """Provide AccountRepository instance."""
    return CollectionAccountRepository(store)


def get_review_repo(
    store: CollectionStore = Depends(get_collection_store),
) -> CollectionReviewRepository:
    return CollectionReviewRepository(store)


def get_tag_repo(
    store: CollectionStore = Depends(get_collection_store),
) -> CollectionTagRepository:
    return CollectionTagRepository(store)


def get_market_data_service() -> MarketDataService:
    """Provide the process-wide MarketDataService instance."""
    global _market_data_service
    if _market_data_service is None:
        settings = get_settings()
        _market_data_service = MarketDataService(
            provider=create_provider(settings),
            cache_ttl_seconds=settings.quote_cache_ttl_seconds,
        )
    return _market_data_service


def reset_market_data_service() -> None:
    """Drop the shared MarketDataService (after settings change)."""
    global _market_data_service
    _market_data_service = None


def get_ledger_service(
    position_repo: CollectionPositionRepository = Depends(get_position_repo),
    account_repo: CollectionAccountRepository = Depends(get_account_repo),
    market_data: MarketDataService = Depends(get_market_data_service),
) -> LedgerService:
    """Provide LedgerService instance."""
    return LedgerService(
        position_repo=position_repo,
        account_repo=account_repo,
        market_data=market_data,
    )


def get_account_service(
    account_repo: CollectionAccountRepository = Depends(get_account_repo),
    position_repo: CollectionPositionRepository = Depends(get_position_repo),
) -> AccountService:
    """Provide AccountService instance."""
    return AccountService(account_repo=account_repo, position_repo=position_repo)


def get_analysis_service(
    position_repo: CollectionPositionRepository = Depends(get_position_repo),
    account_repo: CollectionAccountRepository = Depends(get_account_repo),
) -> AnalysisService:
    """Provide AnalysisService instance."""
    return AnalysisService(position_repo=position_repo, account_repo=account_repo)


def get_tag_service(
    tag_repo: CollectionTagRepository = Depends(get_tag_repo),
) -> TagService:
    return TagService(tag_repo)


def get_review_service(
    review_repo: CollectionReviewRepository = Depends(get_review_repo),
) -> ReviewService:
    return ReviewService(review_repo)


def get_backup_service(
    position_repo: CollectionPositionRepository = Depends(get_position_repo),
    account_repo: CollectionAccountRepository = Depends(get_account_repo),
) -> BackupService:
    """Provide BackupService instance."""
    return BackupService(position_repo=position_repo, account_repo=account_repo)


def get_csv_exporter(
    analysis: AnalysisService = Depends(get_analysis_service),
) -> CsvExporter:
    """Provide CsvExporter instance."""
    return CsvExporter(analysis_service=analysis)
