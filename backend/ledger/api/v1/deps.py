# ledger/api/v1/deps.py
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyCookie
from sqlalchemy.orm import Session

from ledger.core.config import settings
from ledger.db import models
from ledger.db.session import get_db
from ledger.services import auth as auth_service

# documents the cookie in OpenAPI; missing cookie is handled below, not by FastAPI
cookie_scheme = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)


@dataclass
class AuthenticatedSession:
    """What handlers get once the session cookie has been resolved."""
    user: models.User
    session_id: str


def get_current_session(
    cookie_value: Optional[str] = Depends(cookie_scheme),
    db: Session = Depends(get_db),
) -> AuthenticatedSession:
    resolved = auth_service.current_user(db, cookie_value)
    if resolved is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    user, session_id = resolved
    return AuthenticatedSession(user=user, session_id=session_id)


def get_current_user(session: AuthenticatedSession = Depends(get_current_session)) -> models.User:
    return session.user
