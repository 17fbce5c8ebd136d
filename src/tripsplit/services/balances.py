from __future__ import annotations

from typing import Iterable, Sequence

from tripsplit.logging import get_logger
from tripsplit.models import ExpenseRecord, ExpenseStatus, MemberBalance


def equal_share(total: float, member_count: int) -> float:
    if member_count <= 0:
        return 0.0
    return total / member_count


def compute_balances(member_spend: Iterable[tuple[str, float]]) -> list[MemberBalance]:
    spend: dict[str, float] = {}
    for identity, amount in member_spend:
        if amount < 0:
            raise ValueError(f"spend for {identity!r} must be non-negative")
        if identity in spend:
            raise ValueError(f"duplicate member {identity!r}")
        spend[identity] = float(amount)

    share = equal_share(sum(spend.values()), len(spend))
    return [
        MemberBalance(identity=identity, total_spent=spent, share=share, balance=spent - share)
        for identity, spent in spend.items()
    ]


def balances_from_expenses(members: Sequence[str], expenses: Iterable[ExpenseRecord]) -> list[MemberBalance]:
    """Equal-split balances of ``members`` over their approved expenses.

    Approved expenses paid by someone outside ``members`` still raise the group
    total, so the result does not sum to zero in that case.
    """
    log = get_logger(__name__)
    spent: dict[str, float] = {member: 0.0 for member in members}
    if len(spent) != len(members):
        raise ValueError("members must be unique")

    total = 0.0
    for expense in expenses:
        if expense.status is not ExpenseStatus.APPROVED:
            continue
        if expense.amount < 0:
            raise ValueError("expense amount must be non-negative")
        total += expense.amount
        if expense.payer in spent:
            spent[expense.payer] += expense.amount
        else:
            log.warning("balances.payer_not_member", payer=expense.payer, amount=expense.amount)

    share = equal_share(total, len(spent))
    return [
        MemberBalance(identity=member, total_spent=amount, share=share, balance=amount - share)
        for member, amount in spent.items()
    ]


def count_pending(expenses: Iterable[ExpenseRecord]) -> int:
    return sum(1 for expense in expenses if expense.status is ExpenseStatus.PENDING)
