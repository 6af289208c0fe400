"""Pydantic schemas for the analysis response contract."""
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .categories import Category
from .models import AnalysisResult, Transaction

DATE_FORMATS = [
    "%Y-%m-%d",
    "%d/%m/%Y",
    "%d/%m/%y",
    "%d-%m-%Y",
    "%d-%m-%y",
    "%d.%m.%Y",
    "%d.%m.%y",
    "%d %b %Y",
    "%d %b %y",
    "%d-%b-%Y",
    "%d-%b-%y",
    "%d %B %Y",
]


def normalize_date(value: Optional[str]) -> str:
    """Convert a statement date to ISO YYYY-MM-DD; unparseable dates become ""."""
    if not value or not isinstance(value, str):
        return ""

    value = value.strip()
    for fmt in DATE_FORMATS:
        try:
            dt = datetime.strptime(value, fmt)
        except ValueError:
            continue
        # %y maps 69-99 to the 1900s; statements are recent
        if fmt.endswith("%y") and dt.year < 2000:
            dt = dt.replace(year=dt.year + 100)
        return _iso(dt)

    # Heuristic: day, month, year separated by anything non-numeric
    parts = [p for p in re.split(r"[^0-9]+", value) if p]
    if len(parts) == 3:
        d, m, y = parts
        if len(d) == 4:
            y, d = d, y
        if len(y) not in (2, 4):
            return ""
        if len(y) == 2:
            y = "20" + y
        try:
            return _iso(datetime(int(y), int(m), int(d)))
        except ValueError:
            return ""

    return ""


def _iso(dt: datetime) -> str:
    return f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"


def _to_decimal(value) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        raise ValueError(f"amount must be a number, got {value!r}")
    try:
        amount = Decimal(str(value).replace(",", "").strip())
    except InvalidOperation:
        raise ValueError(f"amount must be a number, got {value!r}")
    if not amount.is_finite():
        raise ValueError(f"amount must be finite, got {value!r}")
    return amount


class TransactionSchema(BaseModel):
    """Pydantic schema for one extracted transaction."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1, description="Unique transaction identifier")
    date: str = Field(description="ISO 8601 format date (YYYY-MM-DD) if available")
    merchant: str = Field(description="Merchant or payee")
    amount: Decimal = Field(description="Positive for expenses, negative for refunds")
    category: Category = Field(description="One of the fixed categories")
    original_description: str = Field(alias="originalDescription", description="Statement line as printed")

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, value):
        return normalize_date(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _parse_amount(cls, value):
        return _to_decimal(value)

    def to_transaction(self) -> Transaction:
        return Transaction(
            id=self.id,
            date=self.date,
            merchant=self.merchant,
            amount=self.amount,
            category=self.category,
            original_description=self.original_description,
        )


class AnalysisResponse(BaseModel):
    """Pydantic schema for the full LLM response."""
    model_config = ConfigDict(populate_by_name=True)

    transactions: List[TransactionSchema]
    total_amount: Decimal = Field(alias="totalAmount")
    currency: str = Field(min_length=1)

    @field_validator("total_amount", mode="before")
    @classmethod
    def _parse_total(cls, value):
        return _to_decimal(value)

    def to_result(self) -> AnalysisResult:
        return AnalysisResult(
            transactions=tuple(txn.to_transaction() for txn in self.transactions),
            total_amount=self.total_amount,
            currency=self.currency,
        )
