"""Profit summary endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from turtletrace.api.deps import get_analysis_service
from turtletrace.api.schemas import ClearedProfitResponse, ProfitSummaryResponse
from turtletrace.services import AnalysisService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("/summary", response_model=ProfitSummaryResponse)
def get_summary(
    account_id: Optional[str] = Query(None, description="Account view (all accounts if omitted)"),
    include_cleared: bool = Query(False, description="Include cleared positions in the position list"),
    analysis: AnalysisService = Depends(get_analysis_service),
) -> ProfitSummaryResponse:
    """
    Unrealized profit for the view.

    Totals cover open positions only; ``cleared_profit`` carries the
    realized result of cleared positions, or null when there are none.
    """
    summary = analysis.summary(account_id, include_cleared=include_cleared)
    return ProfitSummaryResponse.model_validate(summary)


@router.get("/cleared", response_model=Optional[ClearedProfitResponse])
def get_cleared_profit(
    account_id: Optional[str] = Query(None, description="Account view (all accounts if omitted)"),
    analysis: AnalysisService = Depends(get_analysis_service),
) -> Optional[ClearedProfitResponse]:
    """Realized profit over cleared positions; null when nothing is cleared."""
    cleared = analysis.cleared_profit(account_id)
    if cleared is None:
        return None
    return ClearedProfitResponse.model_validate(cleared)
