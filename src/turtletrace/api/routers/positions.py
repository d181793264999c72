"""Position ledger endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from turtletrace.api.deps import get_ledger_service
from turtletrace.api.schemas import (
    PositionOpenRequest,
    TradeRequest,
    PositionResponse,
    PositionListResponse,
    PositionReplaceRequest,
    RefreshResponse,
)
from turtletrace.core.exceptions import ValidationError
from turtletrace.repositories.codec import position_from_dict
from turtletrace.services import LedgerService, PositionOpen, TradeCreate
from turtletrace.services.backup_service import validate_position

router = APIRouter(prefix="/positions", tags=["positions"])


def _list_response(positions) -> PositionListResponse:
    return PositionListResponse(
        positions=[PositionResponse.model_validate(p) for p in positions],
        count=len(positions),
    )


@router.get("", response_model=PositionListResponse)
def list_positions(
    account_id: Optional[str] = Query(None, description="Account view (all accounts if omitted)"),
    service: LedgerService = Depends(get_ledger_service),
) -> PositionListResponse:
    """List positions, open and cleared, in an account view."""
    return _list_response(service.list_positions(account_id))


@router.post("", response_model=PositionResponse, status_code=201)
async def open_position(
    request: PositionOpenRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> PositionResponse:
    """Open a position with its first buy; the quote supplies the stock name."""
    position = await service.open_position(
        PositionOpen(
            symbol=request.symbol,
            price=request.price,
            quantity=request.quantity,
            account_id=request.account_id,
            emotion=request.emotion,
            reasons=request.reasons,
        )
    )
    return PositionResponse.model_validate(position)


@router.put("", response_model=PositionListResponse)
def replace_positions(
    request: PositionReplaceRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> PositionListResponse:
    """
    Replace every position in the given account view.

    Positions of other accounts are kept. Returns the full stored list.
    """
    incoming = [position_from_dict(p.model_dump(mode="json")) for p in request.positions]
    for position in incoming:
        problems = validate_position(position)
        if problems:
            raise ValidationError(f"{position.symbol}: {'; '.join(problems)}")
    return _list_response(service.replace_positions(incoming, request.account_id))


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_prices(
    account_id: Optional[str] = Query(None, description="Account view (all accounts if omitted)"),
    service: LedgerService = Depends(get_ledger_service),
) -> RefreshResponse:
    """Fetch fresh quotes for every position in the view."""
    summary = await service.refresh_prices(account_id)
    return RefreshResponse.model_validate(summary)


@router.get("/{position_id}", response_model=PositionResponse)
def get_position(
    position_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> PositionResponse:
    return PositionResponse.model_validate(service.get_position(position_id))


@router.delete("/{position_id}", status_code=204)
def delete_position(
    position_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> Response:
    """Delete a position together with its trade history."""
    service.delete_position(position_id)
    return Response(status_code=204)


@router.post("/{position_id}/trades", response_model=PositionResponse, status_code=201)
def execute_trade(
    position_id: str,
    request: TradeRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> PositionResponse:
    """Record a buy or sell on an existing position."""
    position = service.execute_trade(
        position_id,
        TradeCreate(
            txn_type=request.txn_type,
            price=request.price,
            quantity=request.quantity,
            emotion=request.emotion,
            reasons=request.reasons,
        ),
    )
    return PositionResponse.model_validate(position)
