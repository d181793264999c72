"""Daily and weekly trading journal endpoints."""

from dataclasses import replace
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from turtletrace.api.deps import get_review_service
from turtletrace.api.schemas import (
    DailyReviewBody,
    DailyReviewResponse,
    DuplicateReviewRequest,
    WeeklyReviewBody,
    WeeklyReviewResponse,
)
from turtletrace.domain.models import DAILY_SECTIONS, WEEKLY_SECTIONS, DailyReview, WeeklyReview
from turtletrace.services import ReviewService

router = APIRouter(prefix="/reviews", tags=["reviews"])


def _daily_response(review: DailyReview, saved: bool = True) -> DailyReviewResponse:
    return DailyReviewResponse(
        review_id=review.review_id,
        review_date=review.review_date,
        created_at=review.created_at,
        updated_at=review.updated_at,
        summary=review.summary,
        saved=saved,
        **review.sections,
    )


def _weekly_response(review: WeeklyReview, saved: bool = True) -> WeeklyReviewResponse:
    return WeeklyReviewResponse(
        review_id=review.review_id,
        week_label=review.week_label,
        start_date=review.start_date,
        end_date=review.end_date,
        created_at=review.created_at,
        updated_at=review.updated_at,
        key_insight=review.key_insight,
        saved=saved,
        **review.sections,
    )


# =============================================================================
# DAILY
# =============================================================================


@router.get("/daily", response_model=list[DailyReviewResponse])
def list_daily_reviews(
    start: Optional[date] = Query(None, description="First date (inclusive)"),
    end: Optional[date] = Query(None, description="Last date (inclusive)"),
    service: ReviewService = Depends(get_review_service),
) -> list[DailyReviewResponse]:
    """List daily reviews, newest first, optionally within a date range."""
    if start is not None or end is not None:
        reviews = service.list_reviews_in_range(start or date.min, end or date.max)
    else:
        reviews = service.list_reviews()
    return [_daily_response(r) for r in reviews]


@router.get("/daily/{review_date}", response_model=DailyReviewResponse)
def get_daily_review(
    review_date: date,
    service: ReviewService = Depends(get_review_service),
) -> DailyReviewResponse:
    return _daily_response(service.get_review(review_date))


@router.get("/daily/{review_date}/init", response_model=DailyReviewResponse)
def init_daily_review(
    review_date: date,
    service: ReviewService = Depends(get_review_service),
) -> DailyReviewResponse:
    """Stored review for the date, or an empty unsaved one (``saved`` = false)."""
    saved = service.find_review(review_date) is not None
    return _daily_response(service.initialize_review(review_date), saved=saved)


@router.put("/daily/{review_date}", response_model=DailyReviewResponse)
def save_daily_review(
    review_date: date,
    request: DailyReviewBody,
    service: ReviewService = Depends(get_review_service),
) -> DailyReviewResponse:
    """Create or overwrite the review for a date."""
    sections = request.model_dump(mode="json", exclude_none=True, include=set(DAILY_SECTIONS))
    review = replace(
        service.initialize_review(review_date),
        sections=sections,
        summary=request.summary,
    )
    return _daily_response(service.save_review(review))


@router.delete("/daily/{review_date}", status_code=204)
def delete_daily_review(
    review_date: date,
    service: ReviewService = Depends(get_review_service),
) -> Response:
    service.delete_review(review_date)
    return Response(status_code=204)


@router.post("/daily/{review_date}/duplicate", response_model=DailyReviewResponse, status_code=201)
def duplicate_daily_review(
    review_date: date,
    request: DuplicateReviewRequest,
    service: ReviewService = Depends(get_review_service),
) -> DailyReviewResponse:
    """Copy a review to another date, overwriting any review there."""
    return _daily_response(service.duplicate_review(review_date, request.to_date))


# =============================================================================
# WEEKLY
# =============================================================================


@router.get("/weekly", response_model=list[WeeklyReviewResponse])
def list_weekly_reviews(
    year: Optional[int] = Query(None, ge=1900, le=9999),
    service: ReviewService = Depends(get_review_service),
) -> list[WeeklyReviewResponse]:
    """List weekly reviews, newest first, optionally for one year."""
    if year is not None:
        reviews = service.list_weekly_reviews_by_year(year)
    else:
        reviews = service.list_weekly_reviews()
    return [_weekly_response(r) for r in reviews]


@router.get("/weekly/current", response_model=WeeklyReviewResponse)
def init_current_weekly_review(
    service: ReviewService = Depends(get_review_service),
) -> WeeklyReviewResponse:
    """This week's review, or an empty unsaved one."""
    review = service.initialize_weekly_review()
    saved = service.find_weekly_review(review.week_label) is not None
    return _weekly_response(review, saved=saved)


@router.get("/weekly/{week_label}", response_model=WeeklyReviewResponse)
def get_weekly_review(
    week_label: str,
    service: ReviewService = Depends(get_review_service),
) -> WeeklyReviewResponse:
    return _weekly_response(service.get_weekly_review(week_label))


@router.get("/weekly/{week_label}/init", response_model=WeeklyReviewResponse)
def init_weekly_review(
    week_label: str,
    service: ReviewService = Depends(get_review_service),
) -> WeeklyReviewResponse:
    saved = service.find_weekly_review(week_label) is not None
    return _weekly_response(service.initialize_weekly_review(week_label), saved=saved)


@router.put("/weekly/{week_label}", response_model=WeeklyReviewResponse)
def save_weekly_review(
    week_label: str,
    request: WeeklyReviewBody,
    service: ReviewService = Depends(get_review_service),
) -> WeeklyReviewResponse:
    """Create or overwrite the review for an ISO week (e.g. 2024-W03)."""
    sections = request.model_dump(mode="json", exclude_none=True, include=set(WEEKLY_SECTIONS))
    review = replace(
        service.initialize_weekly_review(week_label),
        sections=sections,
        key_insight=request.key_insight,
    )
    return _weekly_response(service.save_weekly_review(review))


@router.delete("/weekly/{week_label}", status_code=204)
def delete_weekly_review(
    week_label: str,
    service: ReviewService = Depends(get_review_service),
) -> Response:
    service.delete_weekly_review(week_label)
    return Response(status_code=204)
