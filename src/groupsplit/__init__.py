"""Split group expenses and settle them with as few transfers as possible."""

from groupsplit.models import Expense, LinkError, Participant, SettlementResult, Transaction
from groupsplit.services.settlement import calculate_settlement

__all__ = [
    "Expense",
    "LinkError",
    "Participant",
    "SettlementResult",
    "Transaction",
    "calculate_settlement",
]
