from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.responses import PlainTextResponse

from app.config import settings
from app.dependencies import build_coordinator, get_coordinator, get_ledger_year
from app.ledger.coordinator import AppendCoordinator
from app.routers import receipts
from app.schemas.receipt import ReceiptCreate
from app.services.receipt_service import submit_entry

import logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: a ledger that cannot be initialised aborts the server
    settings.DATA_DIR.mkdir(parents=True, exist_ok=True)
    coordinator = build_coordinator()
    coordinator.start()
    app.state.coordinator = coordinator
    logger.info(
        "Recording receipts for %d into %s", settings.LEDGER_YEAR, settings.LEDGER_PATH,
    )
    yield
    # Shutdown (nothing to clean up, every append is saved immediately)


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

API_PREFIX = "/api/v1"
app.include_router(receipts.router, prefix=API_PREFIX)


@app.post("/", response_class=PlainTextResponse)
def legacy_submit(
    body: ReceiptCreate,
    coordinator: AppendCoordinator = Depends(get_coordinator),
    year: int = Depends(get_ledger_year),
) -> str:
    """Endpoint used by receiptbox clients; replies with plain text."""
    result = submit_entry(coordinator, body.date, body.payee, body.amount, year)
    return result.message


@app.get("/health")
async def health_check() -> dict:
    return {"status": "ok", "version": settings.APP_VERSION}
