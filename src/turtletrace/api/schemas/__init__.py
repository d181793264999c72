"""Pydantic schemas for API request/response."""

from turtletrace.api.schemas.account import (
    AccountCreateRequest,
    AccountUpdateRequest,
    AccountResponse,
    AccountListResponse,
    ActiveAccountRequest,
    ActiveAccountResponse,
    AccountStatsResponse,
    AccountStatsListResponse,
)
from turtletrace.api.schemas.position import (
    TransactionResponse,
    PositionOpenRequest,
    TradeRequest,
    PositionPayload,
    PositionResponse,
    PositionListResponse,
    PositionReplaceRequest,
    RefreshResponse,
)
from turtletrace.api.schemas.portfolio import (
    PositionProfitResponse,
    ClearedPositionProfitResponse,
    ClearedProfitResponse,
    ProfitSummaryResponse,
)
from turtletrace.api.schemas.tag import TagCreateRequest, TagResponse
from turtletrace.api.schemas.review import (
    DailyReviewBody,
    DailyReviewResponse,
    DuplicateReviewRequest,
    WeeklyReviewBody,
    WeeklyReviewResponse,
)
from turtletrace.api.schemas.data import ImportRequest, ImportResponse

__all__ = [
    "AccountCreateRequest",
    "AccountUpdateRequest",
    "AccountResponse",
    "AccountListResponse",
    "ActiveAccountRequest",
    "ActiveAccountResponse",
    "AccountStatsResponse",
    "AccountStatsListResponse",
    "TransactionResponse",
    "PositionOpenRequest",
    "TradeRequest",
    "PositionPayload",
    "PositionResponse",
    "PositionListResponse",
    "PositionReplaceRequest",
    "RefreshResponse",
    "PositionProfitResponse",
    "ClearedPositionProfitResponse",
    "ClearedProfitResponse",
    "ProfitSummaryResponse",
    "TagCreateRequest",
    "TagResponse",
    "DailyReviewBody",
    "DailyReviewResponse",
    "DuplicateReviewRequest",
    "WeeklyReviewBody",
    "WeeklyReviewResponse",
    "ImportRequest",
    "ImportResponse",
]
