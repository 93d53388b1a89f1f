# ledger/api/v1/auth.py
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from ledger.api.v1.deps import AuthenticatedSession, get_current_session, get_current_user
from ledger.api.v1.routing import bind
from ledger.contract import api
from ledger.core.config import settings
from ledger.db import models
from ledger.db.session import get_db
from ledger.schemas.user import LoginCredentials, UserCredentials
from ledger.services import auth as auth_service
from ledger.services.security import SESSION_TTL_MINUTES

router = APIRouter(tags=["auth"])

@bind(router, api.auth.register)
def register(payload: UserCredentials, db: Session = Depends(get_db)):
    try:
        return auth_service.register(db, payload.username, payload.password)
    except auth_service.UsernameTaken:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists")

@bind(router, api.auth.login)
def login(payload: LoginCredentials, response: Response, db: Session = Depends(get_db)):
    try:
        user, cookie_value = auth_service.login(db, payload.username, payload.password)
    except auth_service.InvalidCredentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=cookie_value,
        max_age=SESSION_TTL_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    return user

@bind(router, api.auth.logout)
def logout(
    response: Response,
    session: AuthenticatedSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    auth_service.logout(db, session.session_id)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out"}

@bind(router, api.auth.user)
def current_user(user: models.User = Depends(get_current_user)):
    return user
