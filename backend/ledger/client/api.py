# ledger/client/api.py
"""HTTP client for the Ledger API.

Requests are built from the contract registry: inputs are validated with the
same schemas the server uses and responses are parsed with the declared
response schemas, so client and server cannot drift apart silently.
"""
import logging
from typing import Any, Dict, List, Optional, Union

import requests

from ledger.client.cache import QueryCache
from ledger.contract import RouteSpec, api, build_url
from ledger.schemas.dashboard import DashboardSummary
from ledger.schemas.transaction import (
    TransactionFilters,
    TransactionInput,
    TransactionOut,
    TransactionUpdate,
)
from ledger.schemas.user import UserOut

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:8000"


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.field = field


class LedgerClient:
    """
    Thin wrapper over a ``requests.Session`` (anything with the same
    ``request`` signature works, e.g. FastAPI's TestClient).
    The session keeps the login cookie between calls.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Any = None,
        cache: Optional[QueryCache] = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.cache = cache if cache is not None else QueryCache()
        self.timeout = timeout

    # plumbing

    def _send(
        self,
        spec: RouteSpec,
        path_params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        params: Optional[Dict[str, str]] = None,
    ):
        url = self.base_url + build_url(spec.path, **(path_params or {}))
        kwargs: Dict[str, Any] = {}
        if json is not None:
            kwargs["json"] = json
        if params:
            kwargs["params"] = params
        if isinstance(self.session, requests.Session):
            kwargs["timeout"] = self.timeout
        logger.debug("%s %s", spec.method, url)
        return self.session.request(spec.method, url, **kwargs)

    def _error(self, spec: RouteSpec, response) -> ApiError:
        message = f"{spec.method} {spec.path} failed with status {response.status_code}"
        field = None
        if response.status_code in spec.error_responses:
            try:
                body = spec.parse_response(response.status_code, response.json())
                message, field = body.message, body.field
            except ValueError:
                pass
        return ApiError(response.status_code, message, field)

    def _expect(self, spec: RouteSpec, response) -> Any:
        if response.status_code != spec.success_status:
            raise self._error(spec, response)
        if spec.response_model is None:
            return None
        return spec.parse_response(response.status_code, response.json())

    def _invalidate_transactions(self, txn_id: Optional[int] = None) -> None:
        self.cache.invalidate(api.transactions.list.path)
        self.cache.invalidate(api.dashboard.summary.path)
        if txn_id is not None:
            self.cache.invalidate(api.transactions.get.path, txn_id)

    # auth

    def current_user(self) -> Optional[UserOut]:
        def load() -> Optional[UserOut]:
            response = self._send(api.auth.user)
            if response.status_code == 401:
                return None
            return self._expect(api.auth.user, response)

        return self.cache.fetch((api.auth.user.path,), load)

    def register(self, username: str, password: str) -> UserOut:
        body = api.auth.register.validate_input({"username": username, "password": password})
        return self._expect(api.auth.register, self._send(api.auth.register, json=body.model_dump()))

    def login(self, username: str, password: str) -> UserOut:
        body = api.auth.login.validate_input({"username": username, "password": password})
        user = self._expect(api.auth.login, self._send(api.auth.login, json=body.model_dump()))
        self.cache.clear()
        self.cache.set((api.auth.user.path,), user)
        return user

    def logout(self) -> None:
        self._expect(api.auth.logout, self._send(api.auth.logout))
        self.cache.clear()
        self.cache.set((api.auth.user.path,), None)

    # transactions

    def list_transactions(
        self, filters: Union[TransactionFilters, Dict[str, Any], None] = None
    ) -> List[TransactionOut]:
        spec = api.transactions.list
        params = spec.validate_input(filters or {}).to_query_params()
        key = (spec.path, tuple(sorted(params.items())))
        return self.cache.fetch(key, lambda: self._expect(spec, self._send(spec, params=params)))

    def get_transaction(self, txn_id: int) -> Optional[TransactionOut]:
        spec = api.transactions.get

        def load() -> Optional[TransactionOut]:
            response = self._send(spec, path_params={"txn_id": txn_id})
            if response.status_code == 404:
                return None
            return self._expect(spec, response)

        return self.cache.fetch((spec.path, txn_id), load)

    def create_transaction(self, data: Union[TransactionInput, Dict[str, Any]]) -> TransactionOut:
        spec = api.transactions.create
        body = spec.validate_input(data)
        created = self._expect(spec, self._send(spec, json=body.model_dump(mode="json")))
        self._invalidate_transactions()
        return created

    def update_transaction(self, txn_id: int, changes: Union[TransactionUpdate, Dict[str, Any]]) -> TransactionOut:
        spec = api.transactions.update
        body = spec.validate_input(changes)
        response = self._send(spec, path_params={"txn_id": txn_id}, json=body.model_dump(mode="json", exclude_unset=True))
        updated = self._expect(spec, response)
        self._invalidate_transactions(txn_id)
        return updated

    def delete_transaction(self, txn_id: int) -> None:
        spec = api.transactions.delete
        self._expect(spec, self._send(spec, path_params={"txn_id": txn_id}))
        self._invalidate_transactions(txn_id)

    def dashboard(self) -> DashboardSummary:
        spec = api.dashboard.summary
        return self.cache.fetch((spec.path,), lambda: self._expect(spec, self._send(spec)))
