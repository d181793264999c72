"""Pydantic schemas for daily and weekly review endpoints.

Review sections are stored as plain dictionaries; these models define
and validate their shape at the API boundary.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field

Trend = Literal["up", "down", "flat"]


# =============================================================================
# DAILY SECTIONS
# =============================================================================


class MarketIndex(BaseModel):
    name: str
    code: str
    change: Decimal = Decimal("0")
    change_amount: Decimal = Decimal("0")
    volume: Decimal = Decimal("0")
    amount: Decimal = Decimal("0")


class KeyStat(BaseModel):
    name: str
    value: str
    trend: Trend = "flat"


class MarketData(BaseModel):
    indices: list[MarketIndex] = Field(default_factory=list)
    key_stats: list[KeyStat] = Field(default_factory=list)
    market_mood: Literal["bullish", "bearish", "neutral"] = "neutral"
    mood_note: Optional[str] = None


class SectorInfo(BaseModel):
    name: str
    change: Decimal = Decimal("0")
    leading_stocks: list[str] = Field(default_factory=list)
    fund_flow: Decimal = Decimal("0")
    reason: Optional[str] = None


class SectorData(BaseModel):
    hot_sectors: list[SectorInfo] = Field(default_factory=list)
    cold_sectors: list[SectorInfo] = Field(default_factory=list)
    overall_flow: Optional[str] = None


class PositionReviewItem(BaseModel):
    symbol: str
    name: str
    change: Decimal = Decimal("0")
    daily_profit: Decimal = Decimal("0")
    total_profit: Decimal = Decimal("0")
    current_price: Decimal = Decimal("0")
    cost_price: Decimal = Decimal("0")
    quantity: Decimal = Decimal("0")
    note: Optional[str] = None
    next_high: Optional[Decimal] = None
    next_low: Optional[Decimal] = None


class DailyProfitSummary(BaseModel):
    total_profit: Decimal = Decimal("0")
    win_count: int = 0
    loss_count: int = 0
    win_rate: Decimal = Decimal("0")


class SoldTodayItem(BaseModel):
    symbol: str
    name: str
    profit: Decimal = Decimal("0")
    profit_rate: Decimal = Decimal("0")
    reason: str = ""


class PositionData(BaseModel):
    positions: list[PositionReviewItem] = Field(default_factory=list)
    daily_summary: DailyProfitSummary = Field(default_factory=DailyProfitSummary)
    sold_today: list[SoldTodayItem] = Field(default_factory=list)


class DragonTigerStock(BaseModel):
    symbol: str
    name: str
    reason: str = ""
    buy_seats: list[str] = Field(default_factory=list)
    sell_seats: list[str] = Field(default_factory=list)
    net_buy: Decimal = Decimal("0")
    institution: Optional[str] = None


class DragonTigerData(BaseModel):
    stocks: list[DragonTigerStock] = Field(default_factory=list)
    summary: Optional[str] = None


class NewsItem(BaseModel):
    title: str
    source: str = ""
    time: str = ""
    impact: Literal["positive", "negative", "neutral"] = "neutral"
    related_stocks: list[str] = Field(default_factory=list)
    interpretation: Optional[str] = None


class PolicyNews(BaseModel):
    title: str
    content: str = ""
    impact_sectors: list[str] = Field(default_factory=list)


class NewsDigest(BaseModel):
    major_news: list[NewsItem] = Field(default_factory=list)
    policy_news: list[PolicyNews] = Field(default_factory=list)
    overall: Optional[str] = None


class OperationTransaction(BaseModel):
    symbol: str
    name: str
    txn_type: Literal["buy", "sell"]
    price: Decimal
    quantity: Decimal
    amount: Decimal
    mood: str = ""
    reasons: list[str] = Field(default_factory=list)


class OperationReflection(BaseModel):
    what_worked: Optional[str] = None
    what_failed: Optional[str] = None
    lessons: Optional[str] = None
    emotional_state: Optional[str] = None


class Operations(BaseModel):
    transactions: list[OperationTransaction] = Field(default_factory=list)
    reflection: OperationReflection = Field(default_factory=OperationReflection)


class WatchListItem(BaseModel):
    symbol: str
    name: str
    reason: str = ""
    target_price: Optional[Decimal] = None
    stop_loss: Optional[Decimal] = None
    action: Literal["buy", "sell", "hold", "observe"] = "observe"


class RiskControl(BaseModel):
    max_position: Decimal = Decimal("0")
    stop_loss_ratio: Decimal = Decimal("0")


class TomorrowPlan(BaseModel):
    strategy: str = ""
    watch_list: list[WatchListItem] = Field(default_factory=list)
    risk_control: RiskControl = Field(default_factory=RiskControl)
    market_focus: Optional[str] = None


class DailyReviewBody(BaseModel):
    """Editable content of a daily review."""

    market_data: Optional[MarketData] = None
    sector_data: Optional[SectorData] = None
    position_data: Optional[PositionData] = None
    dragon_tiger: Optional[DragonTigerData] = None
    news_digest: Optional[NewsDigest] = None
    operations: Optional[Operations] = None
    tomorrow_plan: Optional[TomorrowPlan] = None
    summary: str = ""


class DailyReviewResponse(DailyReviewBody):
    review_id: str
    review_date: date
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    saved: bool = True


class DuplicateReviewRequest(BaseModel):
    to_date: date


# =============================================================================
# WEEKLY SECTIONS
# =============================================================================


class EmotionCyclePhase(str, Enum):
    STARTUP = "startup"
    MAIN_RISE = "main_rise"
    CLIMAX = "climax"
    DIVERGENCE = "divergence"
    RETREAT = "retreat"


class CoreGoals(BaseModel):
    main_sectors: list[str] = Field(default_factory=list, max_length=2)
    core_logic: str = ""


class MarketPerformance(BaseModel):
    shanghai_change: Decimal = Decimal("0")
    shanghai_volume_trend: Trend = "flat"
    chinext_change: Decimal = Decimal("0")
    chinext_volume_trend: Trend = "flat"
    note: Optional[str] = None


class SectorPerformance(BaseModel):
    sector_change: Decimal = Decimal("0")
    market_change: Decimal = Decimal("0")
    outperformance: Decimal = Decimal("0")
    note: Optional[str] = None


class Achievements(BaseModel):
    market_performance: MarketPerformance = Field(default_factory=MarketPerformance)
    sector_performance: SectorPerformance = Field(default_factory=SectorPerformance)
    highlights: list[str] = Field(default_factory=list)
    lowlights: list[str] = Field(default_factory=list)
    main_sector_position: Decimal = Decimal("0")
    total_profit_loss: Decimal = Decimal("0")
    win_rate: Decimal = Decimal("0")


class ResourceAnalysis(BaseModel):
    focused_on_main: bool = False
    scattered_attention: bool = False
    trading_frequency: Literal["excessive", "moderate", "missed"] = "moderate"


class MarketRhythm(BaseModel):
    emotion_cycle: EmotionCyclePhase = EmotionCyclePhase.STARTUP
    key_signals: list[str] = Field(default_factory=list)
    northward_funds: str = ""
    volume: str = ""
    limit_up_count: str = ""


class PositionPlan(BaseModel):
    main_rise: str = ""
    divergence: str = ""


class FocusTarget(BaseModel):
    name: str
    symbol: str
    logic: str = ""


class WeeklyRiskControl(BaseModel):
    max_single_loss: Decimal = Decimal("0")
    retreat_position: Decimal = Decimal("0")


class NextWeekStrategy(BaseModel):
    main_sector: str = ""
    catalyst_events: list[str] = Field(default_factory=list)
    position_plan: PositionPlan = Field(default_factory=PositionPlan)
    focus_targets: list[FocusTarget] = Field(default_factory=list, max_length=3)
    risk_control: WeeklyRiskControl = Field(default_factory=WeeklyRiskControl)


class WeeklyReviewBody(BaseModel):
    """Editable content of a weekly review."""

    core_goals: Optional[CoreGoals] = None
    achievements: Optional[Achievements] = None
    resource_analysis: Optional[ResourceAnalysis] = None
    market_rhythm: Optional[MarketRhythm] = None
    next_week_strategy: Optional[NextWeekStrategy] = None
    key_insight: str = ""


class WeeklyReviewResponse(WeeklyReviewBody):
    review_id: str
    week_label: str
    start_date: date
    end_date: date
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    saved: bool = True
