# ledger/core/config.py
# Plain settings object populated from the environment (.env is honoured)
import os
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class SimpleSettings:
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./ledger.db")
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "ledger_session")
    SESSION_TTL_MINUTES = int(os.getenv("SESSION_TTL_MINUTES", str(60 * 24 * 7)))
    SESSION_COOKIE_SECURE = _as_bool(os.getenv("SESSION_COOKIE_SECURE", "false"))
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",") if o.strip()]
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    SEED_DEMO_DATA = _as_bool(os.getenv("SEED_DEMO_DATA", "false"))

settings = SimpleSettings()
