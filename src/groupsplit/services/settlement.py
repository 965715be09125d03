from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Sequence

from groupsplit.logging import get_logger
from groupsplit.models import Expense, Participant, SettlementResult, Transaction
from groupsplit.services.split import calculate_raw_balances, consolidate

# Balances within this distance of zero count as settled.
SETTLED_TOLERANCE = 0.01
CURRENCY_PLACES = 2

log = get_logger(__name__)


@dataclass(slots=True)
class _Position:
    user_id: str
    amount: float


def round_currency(value: float) -> float:
    """Round to cents, halves towards positive infinity."""
    factor = 10**CURRENCY_PLACES
    return math.floor(value * factor + 0.5) / factor


def settle(balances: Mapping[str, float]) -> List[Transaction]:
    creditors: list[_Position] = []
    debtors: list[_Position] = []

    for user_id, balance in balances.items():
        rounded = round_currency(balance)
        if rounded < -SETTLED_TOLERANCE:
            debtors.append(_Position(user_id, rounded))
        elif rounded > SETTLED_TOLERANCE:
            creditors.append(_Position(user_id, rounded))

    # Largest obligations first; sort is stable so ties keep roster order.
    debtors.sort(key=lambda x: x.amount)
    creditors.sort(key=lambda x: x.amount, reverse=True)

    transactions: list[Transaction] = []
    i, j = 0, 0

    while i < len(creditors) and j < len(debtors):
        creditor = creditors[i]
        debtor = debtors[j]

        amount = min(creditor.amount, -debtor.amount)
        if amount > SETTLED_TOLERANCE:
            transactions.append(
                Transaction(
                    from_id=debtor.user_id,
                    to_id=creditor.user_id,
                    amount=round(amount, CURRENCY_PLACES),
                )
            )

        creditor.amount -= amount
        debtor.amount += amount

        if abs(creditor.amount) < SETTLED_TOLERANCE:
            i += 1
        if abs(debtor.amount) < SETTLED_TOLERANCE:
            j += 1

    return transactions


def calculate_settlement(
    participants: Sequence[Participant],
    expenses: Sequence[Expense],
) -> SettlementResult:
    """
    Net out a group's expenses and produce the transfers that settle them.

    Balances are consolidated first: a participant linked to another payer has
    their whole balance carried by that payer and ends at exactly zero. The
    returned balances keep full float precision; only the transfer plan works
    on cent-rounded values. Malformed references never raise: unknown payers
    void their expense and unknown consumers lose their share.
    """
    if not participants:
        return SettlementResult.empty()

    raw_balances = calculate_raw_balances(participants, expenses)
    balances = consolidate(participants, raw_balances)
    transactions = settle(balances)

    log.debug(
        "settlement.calculated",
        participants=len(participants),
        expenses=len(expenses),
        transactions=len(transactions),
    )
    return SettlementResult(
        transactions=tuple(transactions),
        balances=MappingProxyType(balances),
    )
