# ledger/schemas/common.py
from pydantic import BaseModel
from typing import Optional, Sequence

class ErrorResponse(BaseModel):
    message: str
    field: Optional[str] = None

class MessageResponse(BaseModel):
    message: str

class Health(BaseModel):
    status: str


_LOCATION_PREFIXES = ("body", "query", "path", "cookie", "header")


def first_error(errors: Sequence[dict]) -> ErrorResponse:
    """Reduce a pydantic/FastAPI error list to the first offending field."""
    if not errors:
        return ErrorResponse(message="Invalid input")
    first = errors[0]
    message = str(first.get("msg") or "Invalid input")
    # pydantic prefixes messages raised from our own validators
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    parts = [str(p) for p in first.get("loc", ()) if p not in _LOCATION_PREFIXES]
    return ErrorResponse(message=message, field=".".join(parts) or None)
