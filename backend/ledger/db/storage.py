# ledger/db/storage.py
"""Typed queries for users, transactions and the session store.

Ownership is not checked here; routers compare ``transaction.user_id`` with
the caller before calling the per-id operations.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ledger.db import models
from ledger.schemas.transaction import TransactionFilters, TransactionInput


def get_user(db: Session, user_id: int) -> Optional[models.User]:
    return db.get(models.User, user_id)


def get_user_by_username(db: Session, username: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.username == username).first()


def create_user(db: Session, username: str, password_hash: str) -> models.User:
    user = models.User(username=username, password=password_hash)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _matches(txn: models.Transaction, filters: TransactionFilters) -> bool:
    if filters.search:
        needle = filters.search.lower()
        haystack = (txn.description or "", txn.category or "", txn.merchant or "")
        if not any(needle in field.lower() for field in haystack):
            return False
    if filters.category and txn.category != filters.category:
        return False
    if filters.merchant and filters.merchant.lower() not in (txn.merchant or "").lower():
        return False
    if filters.start_date and txn.date < filters.start_date:
        return False
    if filters.end_date and txn.date > filters.end_date:
        return False
    return True


def get_transactions(
    db: Session, user_id: int, filters: Optional[TransactionFilters] = None
) -> List[models.Transaction]:
    """All of a user's transactions, newest first, filtered in memory."""
    rows = (
        db.query(models.Transaction)
        .filter(models.Transaction.user_id == user_id)
        .order_by(models.Transaction.date.desc(), models.Transaction.id.desc())
        .all()
    )
    if filters is None:
        return rows
    return [t for t in rows if _matches(t, filters)]


def get_transaction(db: Session, txn_id: int) -> Optional[models.Transaction]:
    return db.get(models.Transaction, txn_id)


def _column_values(data: Dict[str, Any]) -> Dict[str, Any]:
    values = dict(data)
    if "type" in values:
        values["type"] = models.TransactionType(values["type"])
    return values


def create_transaction(db: Session, user_id: int, payload: TransactionInput) -> models.Transaction:
    txn = models.Transaction(user_id=user_id, **_column_values(payload.model_dump()))
    db.add(txn)
    db.commit()
    db.refresh(txn)
    return txn


def update_transaction(db: Session, txn_id: int, changes: Dict[str, Any]) -> Optional[models.Transaction]:
    txn = get_transaction(db, txn_id)
    if txn is None:
        return None
    for key, value in _column_values(changes).items():
        setattr(txn, key, value)
    db.add(txn)
    db.commit()
    db.refresh(txn)
    return txn


def delete_transaction(db: Session, txn_id: int) -> None:
    txn = get_transaction(db, txn_id)
    if txn is not None:
        db.delete(txn)
        db.commit()


# session store

def create_session(db: Session, session_id: str, user_id: int, expires_at: datetime) -> models.UserSession:
    row = models.UserSession(id=session_id, user_id=user_id, expires_at=expires_at)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def get_session(db: Session, session_id: str) -> Optional[models.UserSession]:
    return db.get(models.UserSession, session_id)


def delete_session(db: Session, session_id: str) -> None:
    db.query(models.UserSession).filter(models.UserSession.id == session_id).delete()
    db.commit()


def purge_expired_sessions(db: Session, now: datetime) -> int:
    count = db.query(models.UserSession).filter(models.UserSession.expires_at <= now).delete()
    db.commit()
    return count
