# ledger/services/dashboard.py
"""Dashboard aggregation: totals, expense breakdown and recent activity.

Works on ORM rows (server side) and on ``TransactionOut`` (client side);
both expose ``amount``, ``type``, ``category`` and ``date``.
"""
from decimal import Decimal
from typing import Any, Dict, Iterable, List

from ledger.schemas.dashboard import CategoryTotal, DashboardSummary
from ledger.schemas.transaction import TransactionOut, TransactionType

RECENT_LIMIT = 5
CENTS = Decimal("0.01")


def _money(value: Decimal) -> str:
    return str(value.quantize(CENTS))


def totals(transactions: Iterable[Any]) -> Dict[str, Decimal]:
    income = Decimal("0")
    expense = Decimal("0")
    for t in transactions:
        amount = Decimal(str(t.amount))
        if TransactionType(t.type) == TransactionType.income:
            income += amount
        else:
            expense += amount
    return {"income": income, "expense": expense, "balance": income - expense}


def category_breakdown(transactions: Iterable[Any]) -> List[CategoryTotal]:
    """Expense total per category, in first-seen order."""
    grouped: Dict[str, Decimal] = {}
    for t in transactions:
        if TransactionType(t.type) != TransactionType.expense:
            continue
        grouped[t.category] = grouped.get(t.category, Decimal("0")) + Decimal(str(t.amount))
    return [CategoryTotal(name=name, value=_money(value)) for name, value in grouped.items()]


def summarize(transactions: Iterable[Any]) -> DashboardSummary:
    """Expects transactions newest first, the order the list endpoint returns."""
    rows = list(transactions)
    t = totals(rows)
    return DashboardSummary(
        income=_money(t["income"]),
        expense=_money(t["expense"]),
        balance=_money(t["balance"]),
        categories=category_breakdown(rows),
        recent=[TransactionOut.model_validate(r) for r in rows[:RECENT_LIMIT]],
    )
