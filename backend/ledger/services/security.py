# ledger/services/security.py
"""Password hashing + session cookie helpers.

Passwords are stored as ``<hexHash>.<hexSalt>`` where the hash is a 64 byte
scrypt key (N=16384, r=8, p=1) computed through passlib's scrypt backend.
The session cookie only carries the session id, signed with python-jose so a
forged id is rejected before the session table is queried.
"""
import secrets
from datetime import datetime, timedelta
from typing import Optional, Dict, Any
from passlib.crypto.scrypt import scrypt
from passlib.utils import consteq
from jose import jwt, JWTError
from ledger.core.config import settings

SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1
KEY_LENGTH = 64
SALT_BYTES = 16

ALGORITHM = "HS256"
SESSION_TTL_MINUTES = settings.SESSION_TTL_MINUTES
SECRET_KEY = settings.SECRET_KEY  # set SECRET_KEY in the environment in prod


def _derive(password: str, salt_hex: str) -> str:
    key = scrypt(password.encode("utf-8"), salt_hex.encode("ascii"), SCRYPT_N, SCRYPT_R, SCRYPT_P, KEY_LENGTH)
    return key.hex()


def hash_password(password: str) -> str:
    """Hash a plaintext password (never store plaintext)."""
    if password is None:
        raise ValueError("password cannot be None")
    salt = secrets.token_hex(SALT_BYTES)
    return f"{_derive(password, salt)}.{salt}"


def verify_password(plain: str, stored: str) -> bool:
    """Verify plain password against ``<hexHash>.<hexSalt>``. Returns False on malformed input."""
    if plain is None or not stored:
        return False
    hashed, sep, salt = stored.partition(".")
    if not sep or not hashed or not salt:
        return False
    return consteq(_derive(plain, salt), hashed)


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


def session_expiry(now: Optional[datetime] = None) -> datetime:
    return (now or datetime.utcnow()) + timedelta(minutes=SESSION_TTL_MINUTES)


def sign_session_id(session_id: str, expires_at: datetime) -> str:
    """
    Wrap a session id into a signed cookie value.
    - the id is stored under 'sid'
    - 'exp' mirrors the session row so stale cookies fail early
    """
    payload: Dict[str, Any] = {
        "sid": session_id,
        "exp": int((expires_at - datetime(1970, 1, 1)).total_seconds()),
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def read_session_id(cookie_value: str) -> Optional[str]:
    """Return the session id from a cookie value, or None if it is forged, expired or malformed."""
    try:
        payload = jwt.decode(cookie_value, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    sid = payload.get("sid")
    return sid if isinstance(sid, str) and sid else None
