# ledger/api/v1/routing.py
from typing import Any
from fastapi import APIRouter

from ledger.contract import RouteSpec


def bind(router: APIRouter, spec: RouteSpec, **kwargs: Any):
    """Route decorator built from a registry entry (path, method, status, schemas)."""
    return router.api_route(
        spec.path,
        methods=[spec.method],
        status_code=spec.success_status,
        response_model=spec.response_model,
        responses={code: {"model": schema} for code, schema in spec.error_responses.items()},
        summary=spec.summary or None,
        **kwargs,
    )
