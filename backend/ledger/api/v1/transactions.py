# ledger/api/v1/transactions.py
from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import Optional
from sqlalchemy.orm import Session

from ledger.api.v1.deps import get_current_user
from ledger.api.v1.routing import bind
from ledger.contract import api
from ledger.db import models, storage
from ledger.db.session import get_db
from ledger.schemas.transaction import TransactionFilters, TransactionInput, TransactionUpdate

router = APIRouter(tags=["transactions"])

def owned_transaction(db: Session, txn_id: int, user: models.User) -> models.Transaction:
    # someone else's transaction is reported exactly like a missing one
    txn = storage.get_transaction(db, txn_id)
    if txn is None or txn.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return txn

@bind(router, api.transactions.list)
def list_transactions(
    search: Optional[str] = Query(None, description="substring of description, category or merchant"),
    category: Optional[str] = Query(None, description="exact category"),
    merchant: Optional[str] = Query(None, description="substring of merchant"),
    start_date: Optional[str] = Query(None, alias="startDate", description="YYYY-MM-DD or ISO timestamp, inclusive"),
    end_date: Optional[str] = Query(None, alias="endDate", description="YYYY-MM-DD or ISO timestamp, inclusive"),
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    All transactions of the current user, newest first, filtered in memory.
    """
    filters = TransactionFilters.model_validate({
        "search": search,
        "category": category,
        "merchant": merchant,
        "startDate": start_date,
        "endDate": end_date,
    })
    return storage.get_transactions(db, current_user.id, filters)

@bind(router, api.transactions.get)
def get_transaction(txn_id: int, current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    return owned_transaction(db, txn_id, current_user)

@bind(router, api.transactions.create)
def create_transaction(payload: TransactionInput, current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    return storage.create_transaction(db, current_user.id, payload)

@bind(router, api.transactions.update)
def update_transaction(txn_id: int, payload: TransactionUpdate, current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    txn = owned_transaction(db, txn_id, current_user)
    return storage.update_transaction(db, txn.id, payload.changes())

@bind(router, api.transactions.delete)
def delete_transaction(txn_id: int, current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    txn = owned_transaction(db, txn_id, current_user)
    storage.delete_transaction(db, txn.id)
    return None
