# ledger/ui/pages.py
"""Terminal renditions of the dashboard, the transaction list and the form."""
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from ledger.schemas.dashboard import DashboardSummary
from ledger.schemas.transaction import (
    CATEGORY_SUGGESTIONS,
    TransactionFormInput,
    TransactionOut,
    TransactionType,
)

TYPE_FILTERS = ("all", "income", "expense")
BAR_WIDTH = 30


def signed_amount(txn: TransactionOut) -> str:
    sign = "+" if txn.type == TransactionType.income else "-"
    return f"{sign}${Decimal(txn.amount):.2f}"


def filter_transactions(
    transactions: Iterable[TransactionOut], search: str = "", type_filter: str = "all"
) -> List[TransactionOut]:
    """The list page's own filters: text over description/category, and type."""
    if type_filter not in TYPE_FILTERS:
        raise ValueError(f"type filter must be one of {', '.join(TYPE_FILTERS)}")
    needle = (search or "").lower()
    result = []
    for t in transactions:
        if needle and needle not in t.description.lower() and needle not in t.category.lower():
            continue
        if type_filter != "all" and t.type.value != type_filter:
            continue
        result.append(t)
    return result


def render_dashboard(summary: DashboardSummary) -> str:
    lines = [
        "Dashboard",
        "",
        f"  Total balance   ${summary.balance}",
        f"  Total income    ${summary.income}",
        f"  Total expenses  ${summary.expense}",
        "",
        "Recent transactions",
    ]
    if not summary.recent:
        lines.append("  No transactions yet.")
    for t in summary.recent:
        lines.append(f"  {t.date:%b %d, %Y}  {t.description:<24.24} {t.category:<14.14} {signed_amount(t):>12}")

    lines += ["", "Expense breakdown"]
    if not summary.categories:
        lines.append("  No expense data to display")
    else:
        largest = max(Decimal(c.value) for c in summary.categories)
        for c in summary.categories:
            width = int(BAR_WIDTH * Decimal(c.value) / largest) if largest > 0 else 0
            lines.append(f"  {c.name:<14.14} {'#' * width:<{BAR_WIDTH}} ${c.value}")
    return "\n".join(lines)


def render_transaction_list(transactions: List[TransactionOut]) -> str:
    if not transactions:
        return "No transactions found matching your filters."
    lines = [f"{'ID':>5}  {'Date':<12} {'Description':<24} {'Category':<14} {'Merchant':<14} {'Amount':>12}"]
    for t in transactions:
        lines.append(
            f"{t.id:>5}  {t.date:%Y-%m-%d}   {t.description:<24.24} {t.category:<14.14} "
            f"{t.merchant:<14.14} {signed_amount(t):>12}"
        )
    return "\n".join(lines)


def form_defaults(existing: Optional[TransactionOut] = None) -> Dict[str, Any]:
    """Initial values of the add/edit form."""
    if existing is None:
        return {
            "amount": "",
            "category": "",
            "merchant": "",
            "description": "",
            "type": TransactionType.expense.value,
            "date": date.today().isoformat(),
        }
    return {
        "amount": existing.amount,
        "category": existing.category,
        "merchant": existing.merchant,
        "description": existing.description,
        "type": existing.type.value,
        "date": existing.date.date().isoformat() if isinstance(existing.date, datetime) else str(existing.date),
    }


def submit_form(values: Dict[str, Any], existing: Optional[TransactionOut] = None) -> TransactionFormInput:
    """Validate form values (amount must be positive); raises pydantic.ValidationError."""
    merged = form_defaults(existing)
    merged.update({k: v for k, v in values.items() if v is not None})
    return TransactionFormInput.model_validate(merged)


def category_hint() -> str:
    return "Suggested categories: " + ", ".join(CATEGORY_SUGGESTIONS)
