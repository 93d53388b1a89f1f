# ledger/schemas/dashboard.py
from pydantic import BaseModel
from typing import List

from ledger.schemas.transaction import TransactionOut

class CategoryTotal(BaseModel):
    name: str
    value: str

class DashboardSummary(BaseModel):
    income: str
    expense: str
    balance: str
    categories: List[CategoryTotal]
    recent: List[TransactionOut]
