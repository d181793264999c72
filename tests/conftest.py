"""
Pytest configuration and fixtures for TurtleTrace tests.

This module provides:
- In-memory CollectionStore and SQLite database fixtures
- Deterministic async quote providers
- Time helpers for the Asia/Shanghai market timezone
- Service and repository fixtures
- Factory helpers for positions and accounts
"""

import asyncio
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from turtletrace.main import app
from turtletrace.api.deps import get_market_data_service
from turtletrace.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from turtletrace.repositories.sqlalchemy import orm_models  # noqa: F401
from turtletrace.repositories.sqlalchemy import SqlAlchemyCollectionStore
from turtletrace.repositories.memory import InMemoryCollectionStore
from turtletrace.repositories.collections import (
    CollectionPositionRepository,
    CollectionAccountRepository,
    CollectionReviewRepository,
    CollectionTagRepository,
)
from turtletrace.services import (
    LedgerService,
    AccountService,
    AccountCreate,
    AnalysisService,
    MarketDataService,
    TagService,
    ReviewService,
    BackupService,
    PositionOpen,
)
from turtletrace.services import position_ledger
from turtletrace.csv import CsvExporter
from turtletrace.domain.models import Account, Position, TransactionType
from turtletrace.domain.views import Quote
from turtletrace.core.timezone import MARKET_TZ
from turtletrace.config.settings import Settings, set_settings, reset_settings


# =============================================================================
# TIMEZONE HELPERS
# =============================================================================


def market_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in Asia/Shanghai."""
    return MARKET_TZ.localize(datetime(year, month, day, hour, minute, second))


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return market_datetime(2024, 6, 14, 14, 30, 0)


def run(coro):
    """Run a coroutine to completion from a synchronous test."""
    return asyncio.run(coro)


# =============================================================================
# STORAGE FIXTURES
# =============================================================================


@pytest.fixture
def memory_store() -> InMemoryCollectionStore:
    """Fresh in-memory collection store."""
    return InMemoryCollectionStore()


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_store(test_session) -> SqlAlchemyCollectionStore:
    return SqlAlchemyCollectionStore(test_session)


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def position_repo(memory_store) -> CollectionPositionRepository:
    return CollectionPositionRepository(memory_store)


@pytest.fixture
def account_repo(memory_store) -> CollectionAccountRepository:
    return CollectionAccountRepository(memory_store)


@pytest.fixture
def review_repo(memory_store) -> CollectionReviewRepository:
    return CollectionReviewRepository(memory_store)


@pytest.fixture
def tag_repo(memory_store) -> CollectionTagRepository:
    return CollectionTagRepository(memory_store)


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class DeterministicMarketProvider:
    """
    Deterministic async quote provider for testing.

    Provides fixed quotes with no randomness and counts lookups.
    """

    FIXED_QUOTES = {
        "600519.SH": ("贵州茅台", Decimal("1700.00"), Decimal("1690.00")),
        "000858.SZ": ("五粮液", Decimal("150.00"), Decimal("148.00")),
        "601318.SH": ("中国平安", Decimal("45.00"), Decimal("45.50")),
    }

    def __init__(self, as_of: Optional[datetime] = None):
        self._as_of = as_of or market_datetime(2024, 6, 14, 15, 0, 0)
        self.calls: list[str] = []

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        self.calls.append(symbol)
        entry = self.FIXED_QUOTES.get(symbol.upper())
        if entry is None:
            return None
        name, price, prev_close = entry
        return Quote(
            symbol=symbol.upper(),
            name=name,
            price=price,
            change=price - prev_close,
            open_price=prev_close,
            high_price=max(price, prev_close),
            low_price=min(price, prev_close),
            prev_close=prev_close,
            timestamp=self._as_of,
        )

    def set_price(self, symbol: str, price: Decimal) -> None:
        name, _, prev_close = self.FIXED_QUOTES[symbol]
        self.FIXED_QUOTES = {**self.FIXED_QUOTES, symbol: (name, price, prev_close)}


class FailingMarketProvider:
    """Quote provider that always raises an exception."""

    def __init__(self):
        self.calls = 0

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        self.calls += 1
        raise ConnectionError("Network unavailable")


@pytest.fixture
def deterministic_provider(fixed_now) -> DeterministicMarketProvider:
    return DeterministicMarketProvider(as_of=fixed_now)


@pytest.fixture
def failing_provider() -> FailingMarketProvider:
    return FailingMarketProvider()


@pytest.fixture
def market_data_service(deterministic_provider) -> MarketDataService:
    """Provide test MarketDataService with deterministic provider."""
    return MarketDataService(
        provider=deterministic_provider,
        cache_ttl_seconds=60,
    )


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def account_service(account_repo, position_repo) -> AccountService:
    return AccountService(account_repo=account_repo, position_repo=position_repo)


@pytest.fixture
def ledger_service(position_repo, account_repo, market_data_service) -> LedgerService:
    return LedgerService(
        position_repo=position_repo,
        account_repo=account_repo,
        market_data=market_data_service,
    )


@pytest.fixture
def analysis_service(position_repo, account_repo) -> AnalysisService:
    return AnalysisService(position_repo=position_repo, account_repo=account_repo)


@pytest.fixture
def tag_service(tag_repo) -> TagService:
    return TagService(tag_repo)


@pytest.fixture
def review_service(review_repo) -> ReviewService:
    return ReviewService(review_repo)


@pytest.fixture
def backup_service(position_repo, account_repo) -> BackupService:
    return BackupService(position_repo=position_repo, account_repo=account_repo)


@pytest.fixture
def csv_exporter(analysis_service) -> CsvExporter:
    return CsvExporter(analysis_service=analysis_service)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def default_account(account_service) -> Account:
    """The default account synthesized on first load."""
    account_service.initialize()
    return account_service.get_default_account()


@pytest.fixture
def second_account(account_service, default_account) -> Account:
    return account_service.create_account(AccountCreate(name="策略账户"))


@pytest.fixture
def open_position(ledger_service) -> Callable[..., Position]:
    """Factory that opens a position through the ledger service."""

    def _open(
        symbol: str = "600519.SH",
        price: Decimal = Decimal("1680.50"),
        quantity: Decimal = Decimal("100"),
        account_id: Optional[str] = None,
    ) -> Position:
        return run(ledger_service.open_position(
            PositionOpen(symbol=symbol, price=price, quantity=quantity, account_id=account_id)
        ))

    return _open


def make_position(
    symbol: str = "600519.SH",
    price: Decimal = Decimal("1680.50"),
    quantity: Decimal = Decimal("100"),
    current_price: Optional[Decimal] = None,
    account_id: Optional[str] = "A",
    name: str = "贵州茅台",
) -> Position:
    """Build a position from a single buy without touching storage."""
    quote = Quote(symbol=symbol, name=name, price=current_price or price)
    return position_ledger.open_position(symbol, price, quantity, quote, account_id=account_id)


def sell(position: Position, price: str, quantity: str) -> Position:
    return position_ledger.apply_trade(
        position, TransactionType.SELL, Decimal(price), Decimal(quantity)
    )


def buy(position: Position, price: str, quantity: str) -> Position:
    return position_ledger.apply_trade(
        position, TransactionType.BUY, Decimal(price), Decimal(quantity)
    )


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def api_provider(fixed_now) -> DeterministicMarketProvider:
    return DeterministicMarketProvider(as_of=fixed_now)


@pytest.fixture
def client(test_engine, tmp_path, api_provider) -> TestClient:
    """Provide FastAPI test client with test database and quotes."""
    # Startup initialization runs against a throwaway data dir
    set_settings(Settings(data_dir=tmp_path))
    reset_database()

    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    market_data = MarketDataService(provider=api_provider, cache_ttl_seconds=60)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_market_data_service] = lambda: market_data
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(Decimal(actual) - Decimal(expected))
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
