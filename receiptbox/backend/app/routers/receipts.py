from fastapi import APIRouter, Depends

from app.dependencies import get_coordinator, get_ledger_year
from app.ledger.coordinator import AppendCoordinator
from app.ledger.exceptions import LedgerError
from app.schemas.common import ApiResponse
from app.schemas.receipt import (
    LedgerTotalResponse,
    ReceiptCreate,
    ReceiptRecorded,
    RecomputeResponse,
    SkippedRowResponse,
)
from app.services.receipt_service import submit_entry
from app.utils.currency import format_amount

router = APIRouter(prefix="/receipts", tags=["receipts"])

# Handlers are sync so FastAPI runs them in its threadpool; the
# coordinator lock serialises the workbook writes.


@router.post("")
def create_receipt(
    body: ReceiptCreate,
    coordinator: AppendCoordinator = Depends(get_coordinator),
    year: int = Depends(get_ledger_year),
) -> ApiResponse[ReceiptRecorded]:
    result = submit_entry(coordinator, body.date, body.payee, body.amount, year)
    if not result.success:
        return ApiResponse.fail(result.message)
    return ApiResponse.ok(
        ReceiptRecorded(
            total=result.total,
            partition=result.partition,
            row=result.row,
        )
    )


@router.get("/total")
def get_total(
    coordinator: AppendCoordinator = Depends(get_coordinator),
    year: int = Depends(get_ledger_year),
) -> ApiResponse[LedgerTotalResponse]:
    return ApiResponse.ok(
        LedgerTotalResponse(
            total=format_amount(coordinator.total),
            year=year,
            state=coordinator.state.value,
        )
    )


@router.post("/recompute")
def recompute_total(
    coordinator: AppendCoordinator = Depends(get_coordinator),
) -> ApiResponse[RecomputeResponse]:
    """Rescan the ledger workbook and reset the running total from it."""
    try:
        result = coordinator.recompute()
    except LedgerError as e:
        return ApiResponse.fail(f"Recompute failed: {e}")
    return ApiResponse.ok(
        RecomputeResponse(
            total=format_amount(result.total),
            rows_counted=result.rows_counted,
            skipped=[
                SkippedRowResponse(
                    partition=s.partition, row=s.row, value=str(s.value),
                )
                for s in result.skipped
            ],
        )
    )
