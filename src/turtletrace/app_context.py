"""Application context for in-process service management.

Provides a centralized way to access all services without HTTP.
Used by scripts (demo data, backups) to drive the backend directly.
"""

from pathlib import Path
from typing import Optional

from turtletrace.config.settings import Settings, set_settings, get_settings
from turtletrace.repositories.sqlalchemy.database import (
    init_db_with_path,
    reset_database,
    get_session,
)
from turtletrace.repositories.sqlalchemy import SqlAlchemyCollectionStore
from turtletrace.repositories.collections import (
    CollectionPositionRepository,
    CollectionAccountRepository,
    CollectionReviewRepository,
    CollectionTagRepository,
)
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


class AppContext:
    """
    Application context providing in-process access to all services.

    Services share one database session; call ``refresh_session`` after
    another process has written to the database.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        self._data_dir = data_dir
        self._session = None
        self._initialized = False

        # Service instances (lazy initialized)
        self._ledger_service: Optional[LedgerService] = None
        self._account_service: Optional[AccountService] = None
        self._analysis_service: Optional[AnalysisService] = None
        self._market_data_service: Optional[MarketDataService] = None
        self._tag_service: Optional[TagService] = None
        self._review_service: Optional[ReviewService] = None
        self._backup_service: Optional[BackupService] = None
        self._csv_exporter: Optional[CsvExporter] = None

    def initialize(self, data_dir: Optional[Path] = None) -> None:
        """
        Initialize or reinitialize the application with a data directory.

        Args:
            data_dir: Data directory path. Uses default if not provided.
        """
        if data_dir:
            self._data_dir = data_dir

        settings = Settings(data_dir=self._data_dir)
        set_settings(settings)

        reset_database()
        init_db_with_path(settings.get_data_dir() / "turtletrace.db")

        self.close()
        self._reset_services()
        self._market_data_service = None
        self.accounts.initialize()
        self._initialized = True

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def data_dir(self) -> Path:
        """Get the current data directory."""
        return get_settings().get_data_dir()

    def _get_session(self):
        if self._session is None:
            self._session = get_session()
        return self._session

    def refresh_session(self) -> None:
        """Refresh the database session (call after external changes)."""
        if self._session:
            self._session.close()
        self._session = get_session()
        self._reset_services()

    def _reset_services(self) -> None:
        self._ledger_service = None
        self._account_service = None
        self._analysis_service = None
        self._tag_service = None
        self._review_service = None
        self._backup_service = None
        self._csv_exporter = None

    # Repository accessors
    def _get_store(self) -> SqlAlchemyCollectionStore:
        return SqlAlchemyCollectionStore(self._get_session())

    def _get_position_repo(self) -> CollectionPositionRepository:
        return CollectionPositionRepository(self._get_store())

    def _get_account_repo(self) -> CollectionAccountRepository:
        return CollectionAccountRepository(self._get_store())

    # Service accessors
    @property
    def market_data(self) -> MarketDataService:
        """Get the MarketDataService instance (kept across session refreshes)."""
        if self._market_data_service is None:
            settings = get_settings()
            self._market_data_service = MarketDataService(
                provider=create_provider(settings),
                cache_ttl_seconds=settings.quote_cache_ttl_seconds,
            )
        return self._market_data_service

    @property
    def ledger(self) -> LedgerService:
        if self._ledger_service is None:
            self._ledger_service = LedgerService(
                position_repo=self._get_position_repo(),
                account_repo=self._get_account_repo(),
                market_data=self.market_data,
            )
        return self._ledger_service

    @property
    def accounts(self) -> AccountService:
        if self._account_service is None:
            self._account_service = AccountService(
                account_repo=self._get_account_repo(),
                position_repo=self._get_position_repo(),
            )
        return self._account_service

    @property
    def analysis(self) -> AnalysisService:
        if self._analysis_service is None:
            self._analysis_service = AnalysisService(
                position_repo=self._get_position_repo(),
                account_repo=self._get_account_repo(),
            )
        return self._analysis_service

    @property
    def tags(self) -> TagService:
        if self._tag_service is None:
            self._tag_service = TagService(CollectionTagRepository(self._get_store()))
        return self._tag_service

    @property
    def reviews(self) -> ReviewService:
        if self._review_service is None:
            self._review_service = ReviewService(CollectionReviewRepository(self._get_store()))
        return self._review_service

    @property
    def backup(self) -> BackupService:
        if self._backup_service is None:
            self._backup_service = BackupService(
                position_repo=self._get_position_repo(),
                account_repo=self._get_account_repo(),
            )
        return self._backup_service

    @property
    def csv_exporter(self) -> CsvExporter:
        if self._csv_exporter is None:
            self._csv_exporter = CsvExporter(analysis_service=self.analysis)
        return self._csv_exporter

    def close(self) -> None:
        """Clean up resources."""
        if self._session:
            self._session.close()
            self._session = None


# Global application context (singleton for scripts)
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: AppContext) -> None:
    """Set the global application context."""
    global _app_context
    _app_context = context
