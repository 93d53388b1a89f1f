from datetime import datetime, timedelta

import pytest

from ledger.db import models, storage
from ledger.schemas.transaction import TransactionFilters, TransactionInput


@pytest.fixture
def owner(db):
    return storage.create_user(db, "carol", "deadbeef.cafe")


def add(db, user, **fields):
    data = {
        "amount": "10.00",
        "category": "Food",
        "date": "2024-01-15",
        "description": "Something",
        "type": "expense",
    }
    data.update(fields)
    return storage.create_transaction(db, user.id, TransactionInput(**data))


def ids(rows):
    return [t.id for t in rows]


def test_users_by_id_and_name(db, owner):
    assert storage.get_user(db, owner.id).username == "carol"
    assert storage.get_user_by_username(db, "carol").id == owner.id
    assert storage.get_user_by_username(db, "nobody") is None
    assert storage.get_user(db, 999) is None


def test_create_transaction_defaults(db, owner):
    txn = add(db, owner)
    assert txn.id is not None
    assert txn.user_id == owner.id
    assert txn.merchant == ""
    assert txn.amount == "10.00"
    assert txn.type == models.TransactionType.expense
    assert txn.date == datetime(2024, 1, 15)


def test_list_is_scoped_to_owner_and_newest_first(db, owner):
    other = storage.create_user(db, "dave", "beef.cafe")
    older = add(db, owner, date="2024-01-01")
    newer = add(db, owner, date="2024-02-01")
    add(db, other)
    assert ids(storage.get_transactions(db, owner.id)) == [newer.id, older.id]


def test_search_covers_description_category_and_merchant(db, owner):
    a = add(db, owner, description="Team lunch")
    b = add(db, owner, category="Lunches")
    c = add(db, owner, merchant="Lunchbox Cafe")
    add(db, owner, description="Bus", category="Transport")
    found = storage.get_transactions(db, owner.id, TransactionFilters(search="LUNCH"))
    assert sorted(ids(found)) == sorted([a.id, b.id, c.id])


def test_category_is_exact_and_merchant_is_substring(db, owner):
    food = add(db, owner, category="Food", merchant="Corner Store")
    add(db, owner, category="Food & Dining", merchant="")
    assert ids(storage.get_transactions(db, owner.id, TransactionFilters(category="Food"))) == [food.id]
    assert ids(storage.get_transactions(db, owner.id, TransactionFilters(merchant="corner"))) == [food.id]


def test_blank_filters_are_ignored(db, owner):
    add(db, owner)
    add(db, owner, merchant="Shop")
    filters = TransactionFilters(search="", category=" ", merchant="", startDate="", endDate="")
    assert len(storage.get_transactions(db, owner.id, filters)) == 2


def test_date_range_is_inclusive(db, owner):
    add(db, owner, date="2023-12-31T23:59:59")
    first = add(db, owner, date="2024-01-01")
    last = add(db, owner, date="2024-01-31T18:30:00")
    add(db, owner, date="2024-02-01")
    found = storage.get_transactions(
        db, owner.id, TransactionFilters(startDate="2024-01-01", endDate="2024-01-31")
    )
    assert sorted(ids(found)) == sorted([first.id, last.id])
    for t in found:
        assert datetime(2024, 1, 1) <= t.date <= datetime(2024, 1, 31, 23, 59, 59, 999999)


def test_open_ended_ranges(db, owner):
    early = add(db, owner, date="2024-01-01")
    late = add(db, owner, date="2024-06-01")
    assert ids(storage.get_transactions(db, owner.id, TransactionFilters(startDate="2024-03-01"))) == [late.id]
    assert ids(storage.get_transactions(db, owner.id, TransactionFilters(endDate="2024-03-01"))) == [early.id]
    assert len(storage.get_transactions(db, owner.id, TransactionFilters())) == 2


def test_update_changes_only_given_fields(db, owner):
    txn = add(db, owner, merchant="Cafe")
    updated = storage.update_transaction(db, txn.id, {"amount": "12.50", "type": "income"})
    assert updated.amount == "12.50"
    assert updated.type == models.TransactionType.income
    assert updated.merchant == "Cafe"
    assert updated.category == "Food"
    assert storage.update_transaction(db, 999, {"amount": "1"}) is None


def test_delete_is_idempotent(db, owner):
    txn = add(db, owner)
    storage.delete_transaction(db, txn.id)
    assert storage.get_transaction(db, txn.id) is None
    storage.delete_transaction(db, txn.id)


def test_session_store(db, owner):
    now = datetime.utcnow()
    storage.create_session(db, "live", owner.id, now + timedelta(hours=1))
    storage.create_session(db, "stale", owner.id, now - timedelta(hours=1))
    assert storage.get_session(db, "live").user_id == owner.id
    assert storage.purge_expired_sessions(db, now) == 1
    assert storage.get_session(db, "stale") is None
    storage.delete_session(db, "live")
    assert storage.get_session(db, "live") is None


def test_seed_demo_data_runs_once(db):
    from ledger.db.seed import DEMO_PASSWORD, DEMO_USERNAME, seed_demo_data
    from ledger.services.security import verify_password

    user = seed_demo_data(db)
    assert user.username == DEMO_USERNAME
    assert verify_password(DEMO_PASSWORD, user.password)
    assert sorted(t.category for t in storage.get_transactions(db, user.id)) == ["Food", "Salary", "Transport"]
    assert seed_demo_data(db).id == user.id
    assert len(storage.get_transactions(db, user.id)) == 3
