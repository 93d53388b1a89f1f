from fastapi import APIRouter
from ledger.api.v1.routing import bind
from ledger.contract import api

router = APIRouter(tags=["health"])

@bind(router, api.health)
def health():
    return {'status': 'ok'}
