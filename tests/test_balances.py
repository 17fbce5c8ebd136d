import pytest

from tripsplit.models import ExpenseRecord, ExpenseStatus
from tripsplit.services.balances import balances_from_expenses, compute_balances, count_pending, equal_share


def test_equal_share():
    assert equal_share(30, 3) == 10
    assert equal_share(30, 0) == 0.0


def test_compute_balances_equal_split():
    balances = compute_balances([("a", 10), ("b", 20), ("c", 0)])

    assert [b.identity for b in balances] == ["a", "b", "c"]
    assert [b.share for b in balances] == [10, 10, 10]
    assert [b.balance for b in balances] == [0, 10, -10]
    assert sum(b.balance for b in balances) == 0


def test_compute_balances_empty():
    assert compute_balances([]) == []


def test_compute_balances_rejects_bad_input():
    with pytest.raises(ValueError):
        compute_balances([("a", -1)])
    with pytest.raises(ValueError):
        compute_balances([("a", 1), ("a", 2)])


def test_balances_from_expenses_counts_only_approved():
    expenses = [
        ExpenseRecord(payer="a", amount=30, status=ExpenseStatus.APPROVED),
        ExpenseRecord(payer="b", amount=100, status=ExpenseStatus.PENDING),
        ExpenseRecord(payer="c", amount=50, status=ExpenseStatus.REJECTED),
        ExpenseRecord(payer="b", amount=15, status=ExpenseStatus.APPROVED),
    ]

    balances = balances_from_expenses(["a", "b", "c"], expenses)

    assert {b.identity: b.total_spent for b in balances} == {"a": 30, "b": 15, "c": 0}
    assert {b.identity: b.balance for b in balances} == {"a": 15, "b": 0, "c": -15}
    assert count_pending(expenses) == 1


def test_balances_from_expenses_outside_payer_counts_towards_total():
    expenses = [
        ExpenseRecord(payer="a", amount=20, status=ExpenseStatus.APPROVED),
        ExpenseRecord(payer="z", amount=10, status=ExpenseStatus.APPROVED),
    ]

    balances = balances_from_expenses(["a", "b"], expenses)

    assert [b.balance for b in balances] == [5, -15]


def test_balances_from_expenses_without_members():
    assert balances_from_expenses([], [ExpenseRecord(payer="a", amount=5, status=ExpenseStatus.APPROVED)]) == []
