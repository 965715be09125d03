from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from groupsplit.models import Expense, Participant


def calculate_raw_balances(
    participants: Sequence[Participant],
    expenses: Iterable[Expense],
) -> dict[str, float]:
    balances: dict[str, float] = {p.id: 0.0 for p in participants}

    for expense in expenses:
        # Expenses paid by someone outside the group are ignored entirely.
        if expense.payer_id not in balances:
            continue

        balances[expense.payer_id] += expense.amount

        count = len(expense.involved_user_ids)
        if count == 0:
            continue
        share = expense.amount / count
        for user_id in expense.involved_user_ids:
            # Shares of unknown consumers are dropped, not redistributed.
            if user_id in balances:
                balances[user_id] -= share

    return balances


def _resolve_payer(participant_id: str, links: Mapping[str, str], order: Mapping[str, int]) -> str:
    """Follow links to the participant who finally pays.

    A cycle resolves to its member listed first in the roster.
    """
    seen: list[str] = []
    current = participant_id
    while current in links and current not in seen:
        seen.append(current)
        current = links[current]
    if current in seen:
        cycle = seen[seen.index(current):]
        return min(cycle, key=lambda user_id: order[user_id])
    return current


def consolidate(
    participants: Iterable[Participant],
    raw_balances: Mapping[str, float],
) -> dict[str, float]:
    """
    Move every dependent's raw balance onto the payer at the end of their links.

    Chains are flattened (C -> B -> A puts both B and C on A) and every
    dependent ends at exactly zero, except the member chosen to pay for a
    cycle. Transfers read from ``raw_balances``, so the total is conserved.
    """
    roster = list(participants)
    order = {p.id: index for index, p in enumerate(roster)}
    links = {p.id: p.linked_payer_id for p in roster if p.is_dependent}
    payers = {user_id: _resolve_payer(user_id, links, order) for user_id in links}  # type: ignore[arg-type]

    consolidated = dict(raw_balances)
    for user_id, payer_id in payers.items():
        if payer_id != user_id:
            consolidated[user_id] = 0.0

    for user_id, payer_id in payers.items():
        if payer_id == user_id:
            continue
        consolidated[payer_id] = consolidated.get(payer_id, 0.0) + raw_balances.get(user_id, 0.0)

    return consolidated
