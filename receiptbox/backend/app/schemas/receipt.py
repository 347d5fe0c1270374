from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator


class ReceiptCreate(BaseModel):
    """Raw receipt as sent by a receiptbox client.

    Fields stay strings; the ledger validator decides what they mean.
    Older clients send the payee as ``restaurant``.
    """

    date: str
    payee: str = Field(..., validation_alias=AliasChoices("payee", "restaurant"))
    amount: str

    @field_validator("date", "amount", mode="before")
    @classmethod
    def _numbers_as_text(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class ReceiptRecorded(BaseModel):
    total: str
    partition: str
    row: int


class LedgerTotalResponse(BaseModel):
    total: str
    year: int
    state: str


class SkippedRowResponse(BaseModel):
    partition: str
    row: int
    value: str


class RecomputeResponse(BaseModel):
    total: str
    rows_counted: int
    skipped: list[SkippedRowResponse]
