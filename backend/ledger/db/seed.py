# ledger/db/seed.py
"""Demo account so a fresh install has something to show."""
import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from ledger.db import models, storage
from ledger.schemas.transaction import TransactionInput
from ledger.services.security import hash_password

logger = logging.getLogger(__name__)

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "password"


def seed_demo_data(db: Session) -> models.User:
    """Create the demo user and three transactions unless the user already exists."""
    existing = storage.get_user_by_username(db, DEMO_USERNAME)
    if existing is not None:
        return existing

    logger.info("Seeding database with demo user...")
    user = storage.create_user(db, DEMO_USERNAME, hash_password(DEMO_PASSWORD))
    now = datetime.utcnow()
    rows = [
        {"amount": "5000.00", "category": "Salary", "date": now, "description": "Monthly Salary", "type": "income"},
        {"amount": "150.00", "category": "Food", "date": now - timedelta(days=1), "description": "Groceries", "type": "expense"},
        {"amount": "50.00", "category": "Transport", "date": now - timedelta(days=2), "description": "Uber", "type": "expense"},
    ]
    for row in rows:
        storage.create_transaction(db, user.id, TransactionInput(**row))
    logger.info("Seeding complete!")
    return user
