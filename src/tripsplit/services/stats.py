from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Iterable, Optional

from tripsplit.models import ExpenseRecord, ExpenseStatus
from tripsplit.services.balances import equal_share


OTHER = "Other"

# Checked in order; the first category with a matching keyword wins.
CATEGORY_KEYWORDS = [
    ("Food & Dining", ("food", "restaurant", "meal")),
    ("Transportation", ("transport", "taxi", "bus", "train")),
    ("Accommodation", ("hotel", "accommodation", "lodging")),
    ("Activities", ("activity", "tour", "ticket")),
]


@dataclass(slots=True)
class MemberSpending:
    total: float = 0.0
    count: int = 0


@dataclass(slots=True)
class TripStats:
    total_spent: float = 0.0
    expense_count: int = 0
    member_count: int = 0
    trip_days: int = 0
    by_member: dict[str, MemberSpending] = field(default_factory=dict)
    by_category: dict[str, float] = field(default_factory=dict)
    daily_totals: dict[date, float] = field(default_factory=dict)

    @property
    def avg_per_day(self) -> float:
        return equal_share(self.total_spent, self.trip_days)

    @property
    def avg_per_person(self) -> float:
        return equal_share(self.total_spent, self.member_count)

    @property
    def top_spending_day(self) -> Optional[tuple[date, float]]:
        top: Optional[tuple[date, float]] = None
        for day, amount in self.daily_totals.items():
            if top is None or amount > top[1]:
                top = (day, amount)
        return top

    def category_percent(self, category: str) -> float:
        if self.total_spent == 0:
            return 0.0
        return self.by_category.get(category, 0.0) / self.total_spent * 100


def detect_category(description: str) -> str:
    text = description.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category
    return OTHER


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _chronological(expense: ExpenseRecord) -> tuple[bool, datetime]:
    if expense.created_at is None:
        return True, datetime.min.replace(tzinfo=timezone.utc)
    return False, _as_utc(expense.created_at)


def summarize_expenses(expenses: Iterable[ExpenseRecord], member_count: int) -> TripStats:
    """Trip totals over approved expenses.

    Days are UTC calendar dates; naive timestamps are taken as UTC. Expenses
    without ``created_at`` count towards every total except the daily ones and
    the trip length.
    """
    approved = [expense for expense in expenses if expense.status is ExpenseStatus.APPROVED]
    approved.sort(key=_chronological)

    stats = TripStats(member_count=member_count, expense_count=len(approved))
    moments: list[datetime] = []

    for expense in approved:
        stats.total_spent += expense.amount

        spending = stats.by_member.setdefault(expense.payer, MemberSpending())
        spending.total += expense.amount
        spending.count += 1

        category = detect_category(expense.description)
        stats.by_category[category] = stats.by_category.get(category, 0.0) + expense.amount

        if expense.created_at is not None:
            moment = _as_utc(expense.created_at)
            moments.append(moment)
            day = moment.date()
            stats.daily_totals[day] = stats.daily_totals.get(day, 0.0) + expense.amount

    if moments:
        span = max(moments) - min(moments)
        stats.trip_days = math.ceil(span.total_seconds() / 86400) + 1
    return stats
