# ledger/schemas/transaction.py
"""Transaction shapes shared by the API, the client and the terminal UI.

`TransactionInput` is the insert schema: the server accepts anything that
passes it. `TransactionFormInput` adds the form-only rule that the amount is
positive.
"""
from datetime import date as date_type, datetime, time, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

class TransactionType(str, Enum):
    income = "income"
    expense = "expense"

CATEGORY_SUGGESTIONS: List[str] = [
    "Food",
    "Transport",
    "Housing",
    "Utilities",
    "Entertainment",
    "Shopping",
    "Salary",
    "Freelance",
    "Other",
]

AMOUNT_MAX_LENGTH = 64


def numeric_string(value: Any) -> str:
    """Accept a decimal string (or a plain number) and return it as a string.

    The string is stored as given, so no precision is lost on the way to the
    database.
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be a numeric string")
    if isinstance(value, (int, float, Decimal)):
        value = str(value)
    if not isinstance(value, str):
        raise ValueError("Amount must be a numeric string")
    value = value.strip()
    if len(value) > AMOUNT_MAX_LENGTH:
        raise ValueError(f"Amount must be at most {AMOUNT_MAX_LENGTH} characters")
    try:
        parsed = Decimal(value)
    except InvalidOperation:
        raise ValueError("Amount must be a numeric string")
    if not parsed.is_finite():
        raise ValueError("Amount must be a numeric string")
    return value


def coerce_timestamp(value: Any) -> Any:
    # HTML date inputs send YYYY-MM-DD
    if isinstance(value, str) and len(value.strip()) == 10:
        try:
            return datetime.combine(date_type.fromisoformat(value.strip()), time.min)
        except ValueError:
            return value
    if isinstance(value, date_type) and not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    return value


def naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Timestamps are stored naive, in UTC."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class TransactionInput(BaseModel):
    amount: str
    category: str = Field(min_length=1)
    merchant: str = ""
    date: datetime
    description: str
    type: TransactionType

    @field_validator("amount", mode="before")
    @classmethod
    def check_amount(cls, v: Any) -> str:
        return numeric_string(v)

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        return coerce_timestamp(v)

    @field_validator("date")
    @classmethod
    def store_date_as_utc(cls, v: datetime) -> datetime:
        return naive_utc(v)


class TransactionFormInput(TransactionInput):
    @field_validator("amount")
    @classmethod
    def amount_positive(cls, v: str) -> str:
        if Decimal(v) <= 0:
            raise ValueError("Amount must be a positive number")
        return v


class TransactionUpdate(BaseModel):
    amount: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1)
    merchant: Optional[str] = None
    date: Optional[datetime] = None
    description: Optional[str] = None
    type: Optional[TransactionType] = None

    @field_validator("amount", mode="before")
    @classmethod
    def check_amount(cls, v: Any) -> Optional[str]:
        return None if v is None else numeric_string(v)

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        return coerce_timestamp(v)

    @field_validator("date")
    @classmethod
    def store_date_as_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return naive_utc(v)

    def changes(self) -> Dict[str, Any]:
        """Fields the caller actually sent; explicit nulls are ignored."""
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}


class TransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    user_id: int = Field(alias="userId")
    amount: str
    category: str
    merchant: str = ""
    date: datetime
    description: str
    type: TransactionType

    @field_validator("amount", mode="before")
    @classmethod
    def amount_as_string(cls, v: Any) -> Any:
        if isinstance(v, (Decimal, int, float)):
            return str(v)
        return v


class TransactionFilters(BaseModel):
    """Query-string filters of the transaction list (all optional)."""
    model_config = ConfigDict(populate_by_name=True)

    search: Optional[str] = None
    category: Optional[str] = None
    merchant: Optional[str] = None
    start_date: Optional[datetime] = Field(None, alias="startDate")
    end_date: Optional[datetime] = Field(None, alias="endDate")

    @field_validator("search", "category", "merchant", mode="before")
    @classmethod
    def blank_is_absent(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("start_date", mode="before")
    @classmethod
    def parse_start(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return coerce_timestamp(v)

    @field_validator("end_date", mode="before")
    @classmethod
    def parse_end(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        # a bare day includes everything that happened on it
        if isinstance(v, str) and len(v.strip()) == 10:
            try:
                return datetime.combine(date_type.fromisoformat(v.strip()), time.max)
            except ValueError:
                return v
        if isinstance(v, date_type) and not isinstance(v, datetime):
            return datetime.combine(v, time.max)
        return v

    @field_validator("start_date", "end_date")
    @classmethod
    def dates_as_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return naive_utc(v)

    def to_query_params(self) -> Dict[str, str]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
