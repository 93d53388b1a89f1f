# ledger/contract.py
"""Route contract registry shared by the API server and the client.

Every endpoint is declared once as a ``RouteSpec``: method, URL template,
input schema and one response schema per status code. The server binds its
FastAPI routes from these specs (see ``ledger.api.v1.routing``) and the
client builds and validates requests and responses with the same objects.
"""
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, TypeAdapter

from ledger.schemas.common import ErrorResponse, Health, MessageResponse
from ledger.schemas.dashboard import DashboardSummary
from ledger.schemas.transaction import (
    TransactionFilters,
    TransactionInput,
    TransactionOut,
    TransactionUpdate,
)
from ledger.schemas.user import LoginCredentials, UserCredentials, UserOut

API_PREFIX = "/api/v1"


@dataclass(frozen=True)
class RouteSpec:
    method: str
    path: str
    responses: Dict[int, Any]
    input: Optional[Type[BaseModel]] = None
    summary: str = ""
    requires_auth: bool = True
    _adapters: Dict[int, TypeAdapter] = field(default_factory=dict, init=False, repr=False, compare=False)

    @property
    def success_status(self) -> int:
        return min(code for code in self.responses if code < 300)

    @property
    def response_model(self) -> Any:
        return self.responses[self.success_status]

    @property
    def error_responses(self) -> Dict[int, Any]:
        return {code: schema for code, schema in self.responses.items() if code >= 400}

    def validate_input(self, data: Any) -> BaseModel:
        """Raises pydantic.ValidationError, exactly as the server would reject it."""
        if self.input is None:
            raise TypeError(f"{self.method} {self.path} takes no input")
        if isinstance(data, self.input):
            return data
        if isinstance(data, BaseModel):
            data = data.model_dump(by_alias=True, exclude_unset=True)
        return self.input.model_validate(data)

    def parse_response(self, status_code: int, data: Any) -> Any:
        if status_code not in self.responses:
            raise KeyError(f"{self.method} {self.path} does not declare status {status_code}")
        schema = self.responses[status_code]
        if schema is None:
            return None
        if status_code not in self._adapters:
            self._adapters[status_code] = TypeAdapter(schema)
        return self._adapters[status_code].validate_python(data)


def build_url(path: str, **params: Any) -> str:
    """Fill ``{name}`` placeholders of a URL template."""
    url = path
    for key, value in params.items():
        placeholder = "{" + key + "}"
        if placeholder not in url:
            raise KeyError(f"{path} has no parameter {key!r}")
        url = url.replace(placeholder, str(value))
    if "{" in url:
        raise ValueError(f"missing path parameters for {path}")
    return url


api = SimpleNamespace(
    health=RouteSpec(
        method="GET",
        path=f"{API_PREFIX}/health",
        responses={200: Health},
        requires_auth=False,
    ),
    auth=SimpleNamespace(
        register=RouteSpec(
            method="POST",
            path=f"{API_PREFIX}/auth/register",
            input=UserCredentials,
            responses={201: UserOut, 400: ErrorResponse, 409: ErrorResponse},
            summary="Create an account",
            requires_auth=False,
        ),
        login=RouteSpec(
            method="POST",
            path=f"{API_PREFIX}/auth/login",
            input=LoginCredentials,
            responses={200: UserOut, 400: ErrorResponse, 401: ErrorResponse},
            summary="Open a session",
            requires_auth=False,
        ),
        logout=RouteSpec(
            method="POST",
            path=f"{API_PREFIX}/auth/logout",
            responses={200: MessageResponse, 401: ErrorResponse},
            summary="Close the current session",
        ),
        user=RouteSpec(
            method="GET",
            path=f"{API_PREFIX}/auth/user",
            responses={200: UserOut, 401: ErrorResponse},
            summary="The logged-in user",
        ),
    ),
    transactions=SimpleNamespace(
        list=RouteSpec(
            method="GET",
            path=f"{API_PREFIX}/transactions",
            input=TransactionFilters,
            responses={200: List[TransactionOut], 400: ErrorResponse, 401: ErrorResponse},
            summary="List the caller's transactions",
        ),
        get=RouteSpec(
            method="GET",
            path=f"{API_PREFIX}/transactions/{{txn_id}}",
            responses={200: TransactionOut, 401: ErrorResponse, 404: ErrorResponse},
            summary="Fetch one transaction",
        ),
        create=RouteSpec(
            method="POST",
            path=f"{API_PREFIX}/transactions",
            input=TransactionInput,
            responses={201: TransactionOut, 400: ErrorResponse, 401: ErrorResponse},
            summary="Record a transaction",
        ),
        update=RouteSpec(
            method="PUT",
            path=f"{API_PREFIX}/transactions/{{txn_id}}",
            input=TransactionUpdate,
            responses={200: TransactionOut, 400: ErrorResponse, 401: ErrorResponse, 404: ErrorResponse},
            summary="Change some fields of a transaction",
        ),
        delete=RouteSpec(
            method="DELETE",
            path=f"{API_PREFIX}/transactions/{{txn_id}}",
            responses={204: None, 401: ErrorResponse, 404: ErrorResponse},
            summary="Delete a transaction",
        ),
    ),
    dashboard=SimpleNamespace(
        summary=RouteSpec(
            method="GET",
            path=f"{API_PREFIX}/dashboard",
            responses={200: DashboardSummary, 401: ErrorResponse},
            summary="Totals, expense breakdown and recent activity",
        ),
    ),
)


def all_routes() -> List[RouteSpec]:
    """Every RouteSpec in the registry, in declaration order."""
    found: List[RouteSpec] = []

    def walk(node: Any) -> None:
        for value in vars(node).values():
            if isinstance(value, RouteSpec):
                found.append(value)
            elif isinstance(value, SimpleNamespace):
                walk(value)

    walk(api)
    return found
