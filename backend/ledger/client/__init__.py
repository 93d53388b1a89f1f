from .api import ApiError, LedgerClient
from .cache import QueryCache

__all__ = ["ApiError", "LedgerClient", "QueryCache"]
