from datetime import datetime

from ledger.schemas.transaction import TransactionOut
from ledger.services.dashboard import category_breakdown, summarize, totals

from .conftest import LUNCH, signup


def txn(id, amount, type="expense", category="Food", day=1):
    return TransactionOut(
        id=id, userId=1, amount=amount, category=category, merchant="",
        date=datetime(2024, 1, day), description=f"t{id}", type=type,
    )


def test_totals_and_balance():
    rows = [txn(1, "5000.00", "income", "Salary"), txn(2, "150.00"), txn(3, "50.25", category="Transport")]
    t = totals(rows)
    assert str(t["income"]) == "5000.00"
    assert str(t["expense"]) == "200.25"
    assert str(t["balance"]) == "4799.75"


def test_breakdown_only_counts_expenses():
    rows = [txn(1, "10", category="Food"), txn(2, "5.5", category="Food"), txn(3, "100", "income", "Food"), txn(4, "3", category="Fun")]
    assert [(c.name, c.value) for c in category_breakdown(rows)] == [("Food", "15.50"), ("Fun", "3.00")]


def test_summary_keeps_five_most_recent():
    rows = [txn(i, "1.00", day=10 - i) for i in range(1, 8)]
    summary = summarize(rows)
    assert [t.id for t in summary.recent] == [1, 2, 3, 4, 5]
    assert summary.expense == "7.00"
    assert summary.balance == "-7.00"


def test_empty_dashboard():
    summary = summarize([])
    assert (summary.income, summary.expense, summary.balance) == ("0.00", "0.00", "0.00")
    assert summary.categories == [] and summary.recent == []


def test_alice_scenario(client):
    client.post("/api/v1/auth/register", json={"username": "alice", "password": "secret1"})
    r = client.post("/api/v1/auth/login", json={"username": "alice", "password": "secret1"})
    assert r.status_code == 200
    r = client.post("/api/v1/transactions", json=LUNCH)
    assert r.status_code == 201
    assert isinstance(r.json()["id"], int)

    dash = client.get("/api/v1/dashboard").json()
    assert dash["expense"] == "20.00"
    assert dash["income"] == "0.00"
    assert dash["balance"] == "-20.00"
    assert dash["categories"] == [{"name": "Food", "value": "20.00"}]
    assert dash["recent"][0]["description"] == "Lunch"


def test_dashboard_is_per_user(make_client):
    a, b = make_client(), make_client()
    signup(a, "alice", "secret1")
    signup(b, "bob", "hunter22")
    a.post("/api/v1/transactions", json=LUNCH)
    assert b.get("/api/v1/dashboard").json()["expense"] == "0.00"
