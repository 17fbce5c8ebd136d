import pytest

from tripsplit.config import Settings
from tripsplit.models import ExpenseRecord, ExpenseStatus
from tripsplit.services.report import (
    anonymize_email,
    balance_label,
    build_report,
    build_report_from_expenses,
    render_report,
)
from tripsplit.services.settlement import UnbalancedBalancesError
from tripsplit.utils.currency import UnsupportedCurrencyError


def test_build_report_pending():
    report = build_report(
        [("A", 50), ("B", 0), ("C", 10)],
        currency="usd",
        settings=Settings(DEFAULT_CURRENCY="EUR"),
    )

    assert report.currency == "USD"
    assert report.status == "Pending"
    assert report.transactions == 2
    assert report.total_to_settle == 30
    assert report.total_credit == 30

    text = render_report(report)
    assert "Total to settle: $30.00" in text
    assert "B owes A: $20.00" in text
    assert "C owes A: $10.00" in text
    assert "A: +$30.00 (Should receive)" in text
    assert "B: -$20.00 (Owes to group)" in text


def test_build_report_settled_uses_default_currency():
    report = build_report([("A", 10), ("B", 10)], settings=Settings(DEFAULT_CURRENCY="gbp"))

    assert report.currency == "GBP"
    assert report.status == "Settled"
    assert "No settlements needed" in render_report(report)
    assert "A: £0.00 (Even)" in render_report(report)


def test_build_report_empty():
    report = build_report([], settings=Settings())
    assert report.settlements == []
    assert "Add some expenses" in render_report(report)


def test_build_report_from_expenses():
    expenses = [
        ExpenseRecord(payer="a", amount=20, status=ExpenseStatus.APPROVED),
        ExpenseRecord(payer="z", amount=10, status=ExpenseStatus.APPROVED),
        ExpenseRecord(payer="b", amount=99),
    ]

    report = build_report_from_expenses(["a", "b"], expenses, currency="EUR", settings=Settings())

    assert report.pending_count == 1
    assert report.stats is not None
    assert report.stats.total_spent == 30
    assert report.stats.by_member["z"].count == 1
    assert "Total spent: €30.00 over 0 day(s), €15.00 per person" in render_report(report)
    assert "1 pending expense not included" in render_report(report)

    with pytest.raises(UnbalancedBalancesError):
        build_report_from_expenses(["a", "b"], expenses, settings=Settings(STRICT_ZERO_SUM=True))


def test_balance_label():
    assert balance_label(1) == "Should receive"
    assert balance_label(-1) == "Owes to group"
    assert balance_label(0) == "Even"


def test_anonymize_email():
    assert anonymize_email("john@example.com") == "jo***@example.com"
    assert anonymize_email("jo@x.io") == "j***@x.io"
    assert anonymize_email("alias") == "alias"


def test_build_report_rejects_bad_currency():
    with pytest.raises(UnsupportedCurrencyError):
        build_report([("A", 10), ("B", 0)], currency="US", settings=Settings())
    with pytest.raises(UnsupportedCurrencyError):
        build_report([("A", 10)], settings=Settings(DEFAULT_CURRENCY="1X"))
