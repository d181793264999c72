"""Backup export/import endpoints."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Response

from turtletrace.api.deps import get_backup_service, get_csv_exporter
from turtletrace.api.schemas import ImportRequest, ImportResponse
from turtletrace.core.timezone import now_market
from turtletrace.csv import CsvExporter
from turtletrace.services import BackupService

router = APIRouter(prefix="/data", tags=["data"])


@router.get("/export")
def export_backup(
    account_id: Optional[str] = Query(None, description="Account view (full backup if omitted)"),
    service: BackupService = Depends(get_backup_service),
) -> dict[str, Any]:
    """JSON backup of positions; full backups also carry the accounts."""
    return service.export_data(account_id)


@router.post("/import", response_model=ImportResponse)
def import_backup(
    request: ImportRequest,
    service: BackupService = Depends(get_backup_service),
) -> ImportResponse:
    """Replace stored positions with the valid rows of a backup."""
    summary = service.import_data(request.model_dump())
    return ImportResponse.model_validate(summary)


@router.get("/export.csv")
def export_csv(
    account_id: Optional[str] = Query(None, description="Account view (all accounts if omitted)"),
    exporter: CsvExporter = Depends(get_csv_exporter),
) -> Response:
    """Open positions and totals as a UTF-8 CSV spreadsheet."""
    filename = f"positions_{now_market().strftime('%Y%m%d')}.csv"
    return Response(
        content=exporter.render(account_id),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
