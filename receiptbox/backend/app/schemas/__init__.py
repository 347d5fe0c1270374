from app.schemas.common import ApiResponse
from app.schemas.receipt import (
    LedgerTotalResponse,
    ReceiptCreate,
    ReceiptRecorded,
    RecomputeResponse,
    SkippedRowResponse,
)

__all__ = [
    "ApiResponse",
    "LedgerTotalResponse",
    "ReceiptCreate",
    "ReceiptRecorded",
    "RecomputeResponse",
    "SkippedRowResponse",
]
