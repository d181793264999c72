"""Service layer - business logic orchestration."""

from turtletrace.services.ledger_service import LedgerService, PositionOpen, TradeCreate
from turtletrace.services.account_service import AccountService, AccountCreate, AccountUpdate
from turtletrace.services.analysis_service import AnalysisService
from turtletrace.services.market_data_service import MarketDataService
from turtletrace.services.tag_service import TagService
from turtletrace.services.review_service import ReviewService
from turtletrace.services.backup_service import BackupService
from turtletrace.services.price_refresher import PriceRefresher

__all__ = [
    "LedgerService",
    "PositionOpen",
    "TradeCreate",
    "AccountService",
    "AccountCreate",
    "AccountUpdate",
    "AnalysisService",
    "MarketDataService",
    "TagService",
    "ReviewService",
    "BackupService",
    "PriceRefresher",
]
