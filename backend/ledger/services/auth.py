# ledger/services/auth.py
import logging
from datetime import datetime
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ledger.db import models, storage
from ledger.services.security import (
    hash_password,
    new_session_id,
    read_session_id,
    session_expiry,
    sign_session_id,
    verify_password,
)

logger = logging.getLogger(__name__)


class UsernameTaken(Exception):
    pass


class InvalidCredentials(Exception):
    pass


def register(db: Session, username: str, password: str) -> models.User:
    if storage.get_user_by_username(db, username) is not None:
        raise UsernameTaken(username)
    try:
        user = storage.create_user(db, username, hash_password(password))
    except IntegrityError:
        # a concurrent registration won the unique index
        db.rollback()
        raise UsernameTaken(username)
    logger.info("Registered user %s (id=%s)", username, user.id)
    return user


def authenticate(db: Session, username: str, password: str) -> models.User:
    user = storage.get_user_by_username(db, username)
    # same error for unknown user and bad password
    if user is None or not verify_password(password, user.password):
        logger.info("Failed login for %s", username)
        raise InvalidCredentials(username)
    return user


def login(db: Session, username: str, password: str) -> Tuple[models.User, str]:
    """Check credentials and open a server-side session.

    Returns the user and the signed cookie value carrying the session id.
    """
    user = authenticate(db, username, password)
    purge_expired(db)
    row = storage.create_session(db, new_session_id(), user.id, session_expiry())
    logger.info("User %s logged in", user.id)
    return user, sign_session_id(row.id, row.expires_at)


def current_user(db: Session, cookie_value: Optional[str]) -> Optional[Tuple[models.User, str]]:
    """Resolve a cookie to ``(user, session_id)``; None means unauthenticated."""
    if not cookie_value:
        return None
    session_id = read_session_id(cookie_value)
    if session_id is None:
        return None
    row = storage.get_session(db, session_id)
    if row is None:
        return None
    if row.expires_at <= datetime.utcnow():
        logger.info("Session for user %s expired", row.user_id)
        storage.delete_session(db, session_id)
        return None
    user = storage.get_user(db, row.user_id)
    if user is None:
        return None
    return user, session_id


def logout(db: Session, session_id: str) -> None:
    storage.delete_session(db, session_id)
    logger.info("Session closed")


def purge_expired(db: Session) -> int:
    """Drop session rows whose owners never came back to log out."""
    count = storage.purge_expired_sessions(db, datetime.utcnow())
    if count:
        logger.info("Purged %s expired session(s)", count)
    return count
