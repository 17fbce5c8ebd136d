from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from tripsplit.config import Settings, get_settings
from tripsplit.logging import get_logger
from tripsplit.models import ExpenseRecord, MemberBalance, Settlement
from tripsplit.services.balances import balances_from_expenses, compute_balances, count_pending
from tripsplit.services.settlement import calculate_settlements, ensure_zero_sum
from tripsplit.services.stats import TripStats, summarize_expenses
from tripsplit.utils.currency import currency_symbol, format_currency


SETTLED = "Settled"
PENDING = "Pending"


@dataclass(slots=True)
class SettlementReport:
    currency: str
    balances: list[MemberBalance]
    settlements: list[Settlement]
    total_to_settle: float = 0.0
    total_credit: float = 0.0
    pending_count: int = 0
    notes: list[str] = field(default_factory=list)
    stats: Optional[TripStats] = None

    @property
    def transactions(self) -> int:
        return len(self.settlements)

    @property
    def status(self) -> str:
        return SETTLED if not self.settlements else PENDING


def anonymize_email(email: str) -> str:
    username, sep, domain = email.partition("@")
    if not sep or not username:
        return email
    if len(username) <= 2:
        return f"{username[0]}***@{domain}"
    return f"{username[:2]}***@{domain}"


def balance_label(balance: float) -> str:
    if balance > 0:
        return "Should receive"
    if balance < 0:
        return "Owes to group"
    return "Even"


def format_settlement_line(settlement: Settlement, currency: str) -> str:
    return f"{settlement.from_member} owes {settlement.to_member}: {format_currency(settlement.amount, currency)}"


def format_balance_line(entry: MemberBalance, currency: str) -> str:
    sign = "+" if entry.balance > 0 else ""
    return f"{entry.identity}: {sign}{format_currency(entry.balance, currency)} ({balance_label(entry.balance)})"


def build_report(
    member_spend: Iterable[tuple[str, float]],
    currency: str | None = None,
    pending_count: int = 0,
    settings: Settings | None = None,
) -> SettlementReport:
    return _assemble(compute_balances(member_spend), currency, pending_count, settings or get_settings())


def build_report_from_expenses(
    members: Sequence[str],
    expenses: Sequence[ExpenseRecord],
    currency: str | None = None,
    settings: Settings | None = None,
) -> SettlementReport:
    balances = balances_from_expenses(members, expenses)
    report = _assemble(balances, currency, count_pending(expenses), settings or get_settings())
    report.stats = summarize_expenses(expenses, len(members))
    return report


def _assemble(
    balances: list[MemberBalance],
    currency: str | None,
    pending_count: int,
    settings: Settings,
) -> SettlementReport:
    currency = (currency or settings.default_currency).strip().upper()
    currency_symbol(currency)

    if settings.strict_zero_sum:
        ensure_zero_sum(balances, settings.zero_sum_tolerance)

    settlements = calculate_settlements(balances)
    report = SettlementReport(
        currency=currency,
        balances=balances,
        settlements=settlements,
        total_to_settle=sum(-entry.balance for entry in balances if entry.balance < 0),
        total_credit=sum(entry.balance for entry in balances if entry.balance > 0),
        pending_count=pending_count,
    )
    if pending_count > 0:
        plural = "" if pending_count == 1 else "s"
        report.notes.append(
            f"{pending_count} pending expense{plural} not included. Approve them to include in balances and settlements."
        )

    log = get_logger(__name__)
    log.info(
        "report.built",
        members=len(balances),
        transactions=report.transactions,
        status=report.status,
    )
    return report


def render_report(report: SettlementReport) -> str:
    currency = report.currency
    lines = [
        f"Total to settle: {format_currency(report.total_to_settle, currency)}",
        f"Transactions: {report.transactions}",
        f"Status: {report.status}",
    ]
    stats = report.stats
    if stats is not None and stats.expense_count:
        lines.append(
            f"Total spent: {format_currency(stats.total_spent, currency)} over {stats.trip_days} day(s), "
            f"{format_currency(stats.avg_per_person, currency)} per person"
        )
    lines.extend(report.notes)

    lines.append("")
    if report.settlements:
        lines.append("Recommended settlements:")
        lines.extend(f"- {format_settlement_line(item, currency)}" for item in report.settlements)
    elif report.balances:
        lines.append("All settled up! No settlements needed.")
    else:
        lines.append("All settled up! Add some expenses to see settlement calculations.")

    if report.balances:
        lines.append("")
        lines.append("Member balances:")
        lines.extend(f"- {format_balance_line(entry, currency)}" for entry in report.balances)
    return "\n".join(lines)
