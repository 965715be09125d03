from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from groupsplit.models import Expense, Participant, SettlementResult
from groupsplit.services.settlement import SETTLED_TOLERANCE


UNKNOWN_LABEL = "Unknown"


def _names(participants: Iterable[Participant]) -> Mapping[str, str]:
    return {p.id: p.name for p in participants}


def format_money(amount: float, symbol: str = "$") -> str:
    return f"{symbol}{amount:.2f}"


def total_spent(expenses: Iterable[Expense]) -> float:
    return sum(expense.amount for expense in expenses)


def format_participants(participants: Sequence[Participant]) -> str:
    if not participants:
        return "No participants yet. Add people with /add <name>."
    names = _names(participants)
    lines = [f"Participants ({len(participants)}):"]
    for participant in participants:
        line = f"• {participant.name}"
        if participant.is_birthday:
            line += " 🎂"
        if participant.is_dependent:
            line += f" (paid by {names.get(participant.linked_payer_id, UNKNOWN_LABEL)})"  # type: ignore[arg-type]
        lines.append(line)
    return "\n".join(lines)


def format_balances(result: SettlementResult, participants: Sequence[Participant], symbol: str = "$") -> str:
    names = _names(participants)
    lines = ["Net balance:"]
    rows = sorted(result.balances.items(), key=lambda item: item[1], reverse=True)
    for user_id, amount in rows:
        if user_id not in names or abs(amount) < SETTLED_TOLERANCE:
            continue
        sign = "+" if amount > 0 else "-"
        lines.append(f"• {names[user_id]}: {sign}{format_money(abs(amount), symbol)}")
    if len(lines) == 1:
        lines.append("• everyone is settled")
    return "\n".join(lines)


def format_transactions(result: SettlementResult, participants: Sequence[Participant], symbol: str = "$") -> str:
    if not result.transactions:
        return "🎉 No transfers needed, everyone is square!"
    names = _names(participants)
    lines = ["Who pays whom:"]
    for t in result.transactions:
        lines.append(
            f"• {names.get(t.from_id, UNKNOWN_LABEL)} → {names.get(t.to_id, UNKNOWN_LABEL)}: "
            f"{format_money(t.amount, symbol)}"
        )
    return "\n".join(lines)


def format_expenses(expenses: Sequence[Expense], participants: Sequence[Participant], symbol: str = "$") -> str:
    lines = [f"Expenses ({len(expenses)}):"]
    if not expenses:
        lines.append("• no expenses yet")
        return "\n".join(lines)

    names = _names(participants)
    for index, expense in enumerate(expenses, start=1):
        payer = names.get(expense.payer_id, UNKNOWN_LABEL)
        lines.append(
            f"{index}. {expense.title}: {format_money(expense.amount, symbol)} "
            f"(paid by {payer}, shared by {len(expense.involved_user_ids)})"
        )
    return "\n".join(lines)


def build_report(
    participants: Sequence[Participant],
    expenses: Sequence[Expense],
    result: SettlementResult,
    symbol: str = "$",
) -> str:
    header = (
        f"Total spent: {format_money(total_spent(expenses), symbol)} "
        f"({len(participants)} people, {len(expenses)} expenses)"
    )
    return "\n\n".join(
        [
            header,
            format_expenses(expenses, participants, symbol),
            format_balances(result, participants, symbol),
            format_transactions(result, participants, symbol),
        ]
    )
