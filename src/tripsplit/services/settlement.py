from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Sequence

from tripsplit.logging import get_logger
from tripsplit.models import MemberBalance, Settlement

# Amounts at or below one cent are rounding noise.
SETTLEMENT_THRESHOLD = 0.01


class UnbalancedBalancesError(ValueError):
    pass


@dataclass(slots=True)
class _Party:
    identity: str
    amount: float


def round_amount(value: float) -> float:
    return float(Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def calculate_settlements(balances: Iterable[MemberBalance]) -> list[Settlement]:
    """Greedy largest-debtor/largest-creditor matching.

    Both sides are sorted by outstanding amount, largest first, and matched with
    two pointers. Payments that round to one cent or less are skipped, and a side
    counts as settled once its remainder drops to one cent or less. The result is
    not guaranteed to use the minimum possible number of transfers.

    Identities must be unique across ``balances``; a repeated identity can end
    up paying itself.
    """
    debtors: list[_Party] = []
    creditors: list[_Party] = []

    for entry in balances:
        if entry.balance < 0:
            debtors.append(_Party(entry.identity, -entry.balance))
        elif entry.balance > 0:
            creditors.append(_Party(entry.identity, entry.balance))

    debtors.sort(key=lambda party: party.amount, reverse=True)
    creditors.sort(key=lambda party: party.amount, reverse=True)

    settlements: list[Settlement] = []
    i, j = 0, 0

    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]

        payment = min(debtor.amount, creditor.amount)
        amount = round_amount(payment)
        if amount > SETTLEMENT_THRESHOLD:
            settlements.append(
                Settlement(
                    from_member=debtor.identity,
                    to_member=creditor.identity,
                    amount=amount,
                )
            )

        debtor.amount -= payment
        creditor.amount -= payment

        if debtor.amount <= SETTLEMENT_THRESHOLD:
            i += 1
        if creditor.amount <= SETTLEMENT_THRESHOLD:
            j += 1

    log = get_logger(__name__)
    log.debug(
        "settlement.calculated",
        debtors=len(debtors),
        creditors=len(creditors),
        transfers=len(settlements),
    )
    return settlements


def ensure_zero_sum(balances: Sequence[MemberBalance], tolerance: float = SETTLEMENT_THRESHOLD) -> None:
    total = sum(entry.balance for entry in balances)
    if abs(total) > tolerance:
        raise UnbalancedBalancesError(f"balances sum to {total:.4f}, expected 0")


def apply_settlements(balances: Iterable[MemberBalance], settlements: Iterable[Settlement]) -> dict[str, float]:
    residual = {entry.identity: entry.balance for entry in balances}
    for settlement in settlements:
        residual[settlement.from_member] = residual.get(settlement.from_member, 0.0) + settlement.amount
        residual[settlement.to_member] = residual.get(settlement.to_member, 0.0) - settlement.amount
    return residual
