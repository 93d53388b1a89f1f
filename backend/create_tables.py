# create_tables.py - create missing tables (development helper); --seed adds the demo account
import logging, sys
from ledger.db.session import engine, SessionLocal
from ledger.db.base import Base
from ledger.db import models  # noqa: F401  registers the tables on Base.metadata
from ledger.db.seed import seed_demo_data

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

logger.info("Creating tables in the database (if not exist)...")
try:
    Base.metadata.create_all(bind=engine)
    logger.info("Done.")
except Exception:
    logger.exception("Error creating tables:")
    sys.exit(1)

if "--seed" in sys.argv[1:]:
    db = SessionLocal()
    try:
        seed_demo_data(db)
    finally:
        db.close()
