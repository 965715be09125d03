"""In-memory group sessions for the bot."""

from __future__ import annotations

import dataclasses
import time
from dataclasses import dataclass, field
from typing import Iterable, Optional

from groupsplit.models import (
    Expense,
    Participant,
    SettlementResult,
    new_id,
    validate_links,
)
from groupsplit.services.settlement import calculate_settlement


class GroupSession:
    """Participants and expenses of one chat.

    Every read hands out tuples of immutable records, so a settlement is always
    computed from a snapshot and later edits never leak into it.
    """

    def __init__(self) -> None:
        self._participants: list[Participant] = []
        self._expenses: list[Expense] = []

    @property
    def participants(self) -> tuple[Participant, ...]:
        return tuple(self._participants)

    @property
    def expenses(self) -> tuple[Expense, ...]:
        return tuple(self._expenses)

    def get_participant(self, participant_id: str) -> Optional[Participant]:
        for participant in self._participants:
            if participant.id == participant_id:
                return participant
        return None

    def find_participant_by_name(self, name: str) -> Optional[Participant]:
        needle = name.strip().casefold()
        for participant in self._participants:
            if participant.name.casefold() == needle:
                return participant
        return None

    def add_participant(self, name: str) -> Participant:
        name = name.strip()
        if not name:
            raise ValueError("Name must not be empty")
        if self.find_participant_by_name(name):
            raise ValueError(f"{name} is already in the group")
        participant = Participant(id=new_id(), name=name)
        self._participants.append(participant)
        return participant

    def remove_participant(self, participant_id: str) -> Participant:
        removed = self._require(participant_id)
        remaining = []
        for participant in self._participants:
            if participant.id == participant_id:
                continue
            if participant.linked_payer_id == participant_id:
                participant = dataclasses.replace(participant, linked_payer_id=None)
            remaining.append(participant)
        self._participants = remaining
        return removed

    def toggle_birthday(self, participant_id: str) -> Participant:
        participant = self._require(participant_id)
        return self._replace(dataclasses.replace(participant, is_birthday=not participant.is_birthday))

    def set_linked_payer(self, participant_id: str, payer_id: Optional[str]) -> Participant:
        participant = self._require(participant_id)
        updated = dataclasses.replace(participant, linked_payer_id=payer_id or None)
        candidate = [updated if p.id == participant_id else p for p in self._participants]
        validate_links(candidate)
        return self._replace(updated)

    def dependents_of(self, payer_id: str) -> list[Participant]:
        return [p for p in self._participants if p.is_dependent and p.linked_payer_id == payer_id]

    def default_involved_ids(self) -> list[str]:
        return [p.id for p in self._participants if not p.is_birthday]

    def add_expense(
        self,
        title: str,
        amount: float,
        payer_id: str,
        involved_ids: Optional[Iterable[str]] = None,
    ) -> Expense:
        title = title.strip()
        if not title:
            raise ValueError("Expense title must not be empty")
        if amount < 0:
            raise ValueError("Amount must not be negative")
        self._require(payer_id)

        involved = list(dict.fromkeys(involved_ids)) if involved_ids is not None else self.default_involved_ids()
        if not involved:
            raise ValueError("Pick at least one person who shares this expense")
        for user_id in involved:
            self._require(user_id)

        expense = Expense(
            id=new_id(),
            title=title,
            amount=float(amount),
            payer_id=payer_id,
            involved_user_ids=tuple(involved),
            timestamp=time.time(),
        )
        self._expenses.append(expense)
        return expense

    def remove_expense(self, expense_id: str) -> Expense:
        for index, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return self._expenses.pop(index)
        raise KeyError(expense_id)

    def settlement(self) -> SettlementResult:
        return calculate_settlement(self.participants, self.expenses)

    def reset(self) -> None:
        self._participants.clear()
        self._expenses.clear()

    def _require(self, participant_id: str) -> Participant:
        participant = self.get_participant(participant_id)
        if participant is None:
            raise KeyError(participant_id)
        return participant

    def _replace(self, updated: Participant) -> Participant:
        self._participants = [updated if p.id == updated.id else p for p in self._participants]
        return updated


@dataclass(slots=True)
class ExpenseDraft:
    title: str
    amount: float
    payer_id: str
    involved_ids: list[str] = field(default_factory=list)

    def toggle(self, participant_id: str) -> None:
        if participant_id in self.involved_ids:
            self.involved_ids.remove(participant_id)
        else:
            self.involved_ids.append(participant_id)


class SessionStore:
    def __init__(self) -> None:
        self._sessions: dict[int, GroupSession] = {}
        self._drafts: dict[tuple[int, int], ExpenseDraft] = {}

    def get(self, chat_id: int) -> GroupSession:
        session = self._sessions.get(chat_id)
        if session is None:
            session = self._sessions[chat_id] = GroupSession()
        return session

    def drop(self, chat_id: int) -> None:
        self._sessions.pop(chat_id, None)
        for key in [key for key in self._drafts if key[0] == chat_id]:
            del self._drafts[key]

    def set_draft(self, chat_id: int, user_id: int, draft: ExpenseDraft) -> None:
        self._drafts[(chat_id, user_id)] = draft

    def get_draft(self, chat_id: int, user_id: int) -> Optional[ExpenseDraft]:
        return self._drafts.get((chat_id, user_id))

    def pop_draft(self, chat_id: int, user_id: int) -> Optional[ExpenseDraft]:
        return self._drafts.pop((chat_id, user_id), None)


store = SessionStore()
