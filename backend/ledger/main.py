# ledger/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ledger import __version__
from ledger.api.errors import register_exception_handlers
from ledger.api.v1 import routers
from ledger.core.config import settings
from ledger.db.base import Base
from ledger.db.seed import seed_demo_data
from ledger.db.session import SessionLocal, engine
from ledger.services import auth as auth_service

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        auth_service.purge_expired(db)
        if settings.SEED_DEMO_DATA:
            seed_demo_data(db)
    finally:
        db.close()
    yield


app = FastAPI(title="Ledger API", version=__version__, lifespan=lifespan)

app.add_middleware(
  CORSMiddleware,
  allow_origins=settings.CORS_ORIGINS,
  allow_credentials=True,
  allow_methods=["*"],
  allow_headers=["*"],
)

register_exception_handlers(app)

for router in routers:
    app.include_router(router)

@app.get("/", include_in_schema=False)
def root():
    return {"message": "Ledger API - visit /api/v1/health"}
