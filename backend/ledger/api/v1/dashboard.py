# ledger/api/v1/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ledger.api.v1.deps import get_current_user
from ledger.api.v1.routing import bind
from ledger.contract import api
from ledger.db import models, storage
from ledger.db.session import get_db
from ledger.services.dashboard import summarize

router = APIRouter(tags=["dashboard"])

@bind(router, api.dashboard.summary)
def dashboard(current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    return summarize(storage.get_transactions(db, current_user.id))
