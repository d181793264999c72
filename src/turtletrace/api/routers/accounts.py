"""Account management endpoints."""

from fastapi import APIRouter, Depends, Response

from turtletrace.api.deps import get_account_service, get_analysis_service
from turtletrace.api.schemas import (
    AccountCreateRequest,
    AccountUpdateRequest,
    AccountResponse,
    AccountListResponse,
    ActiveAccountRequest,
    ActiveAccountResponse,
    AccountStatsResponse,
    AccountStatsListResponse,
)
from turtletrace.services import AccountService, AccountCreate, AccountUpdate, AnalysisService
from turtletrace.services.profit_engine import calculate_total_stats

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.get("", response_model=AccountListResponse)
def list_accounts(
    service: AccountService = Depends(get_account_service),
) -> AccountListResponse:
    """List all accounts."""
    accounts = service.list_accounts()
    default = service.get_default_account()
    return AccountListResponse(
        accounts=[AccountResponse.model_validate(a) for a in accounts],
        count=len(accounts),
        default_account_id=default.account_id,
    )


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    request: AccountCreateRequest,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Create a new account."""
    account = service.create_account(
        AccountCreate(
            name=request.name,
            account_type=request.account_type,
            broker=request.broker,
            description=request.description,
            color=request.color,
            is_default=request.is_default,
        )
    )
    return AccountResponse.model_validate(account)


@router.get("/active", response_model=ActiveAccountResponse)
def get_active_account(
    service: AccountService = Depends(get_account_service),
) -> ActiveAccountResponse:
    """Get the last selected account view (null = all accounts)."""
    return ActiveAccountResponse(account_id=service.get_last_active_account_id())


@router.put("/active", response_model=ActiveAccountResponse)
def set_active_account(
    request: ActiveAccountRequest,
    service: AccountService = Depends(get_account_service),
) -> ActiveAccountResponse:
    """Select the account view."""
    service.set_last_active_account(request.account_id)
    return ActiveAccountResponse(account_id=request.account_id)


@router.get("/stats", response_model=AccountStatsListResponse)
def get_account_stats(
    analysis: AnalysisService = Depends(get_analysis_service),
) -> AccountStatsListResponse:
    """Per-account open-position statistics plus the total row."""
    per_account = analysis.all_account_stats()
    return AccountStatsListResponse(
        accounts=[AccountStatsResponse.model_validate(s) for s in per_account],
        total=AccountStatsResponse.model_validate(calculate_total_stats(per_account)),
    )


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: str,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Get account by ID."""
    return AccountResponse.model_validate(service.get_account(account_id))


@router.patch("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: str,
    request: AccountUpdateRequest,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Update account fields (partial update)."""
    account = service.update_account(
        account_id,
        AccountUpdate(**request.model_dump(exclude_unset=True)),
    )
    return AccountResponse.model_validate(account)


@router.delete("/{account_id}", status_code=204)
def delete_account(
    account_id: str,
    service: AccountService = Depends(get_account_service),
) -> Response:
    """Delete an account. Fails for the default account or while positions are open."""
    service.delete_account(account_id)
    return Response(status_code=204)


@router.post("/{account_id}/default", response_model=AccountResponse)
def set_default_account(
    account_id: str,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Make this account the default."""
    return AccountResponse.model_validate(service.set_default_account(account_id))


@router.get("/{account_id}/stats", response_model=AccountStatsResponse)
def get_single_account_stats(
    account_id: str,
    analysis: AnalysisService = Depends(get_analysis_service),
) -> AccountStatsResponse:
    return AccountStatsResponse.model_validate(analysis.account_stats(account_id))
