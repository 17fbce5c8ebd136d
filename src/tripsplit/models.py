from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class ExpenseStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(slots=True)
class ExpenseRecord:
    payer: str
    amount: float
    status: ExpenseStatus = ExpenseStatus.PENDING
    description: str = ""
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class MemberBalance:
    identity: str
    total_spent: float
    share: float
    balance: float


@dataclass(slots=True)
class Settlement:
    from_member: str
    to_member: str
    amount: float
