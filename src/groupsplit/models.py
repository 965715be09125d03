from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional


class LinkError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class Participant:
    id: str
    name: str
    linked_payer_id: Optional[str] = None
    is_birthday: bool = False

    @property
    def is_dependent(self) -> bool:
        return bool(self.linked_payer_id) and self.linked_payer_id != self.id


@dataclass(frozen=True, slots=True)
class Expense:
    id: str
    title: str
    amount: float
    payer_id: str
    involved_user_ids: tuple[str, ...]
    timestamp: float = 0.0


@dataclass(frozen=True, slots=True)
class Transaction:
    from_id: str
    to_id: str
    amount: float


@dataclass(frozen=True, slots=True)
class SettlementResult:
    transactions: tuple[Transaction, ...] = ()
    balances: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def empty(cls) -> "SettlementResult":
        return cls()


def new_id() -> str:
    return secrets.token_hex(6)


def validate_links(participants: Iterable[Participant]) -> None:
    """
    Check that linked payers form a forest of depth one.

    A dependent may only point at an existing participant who is not a
    dependent itself, so chains (C -> B -> A) and cycles (A <-> B) are
    rejected. A link to oneself means "no link" and is accepted.
    """
    by_id = {p.id: p for p in participants}
    for participant in by_id.values():
        if not participant.is_dependent:
            continue
        target = by_id.get(participant.linked_payer_id)  # type: ignore[arg-type]
        if target is None:
            raise LinkError(f"{participant.name}: linked payer {participant.linked_payer_id!r} does not exist")
        if target.is_dependent:
            raise LinkError(
                f"{participant.name} cannot be linked to {target.name}, "
                f"who is already paid for by someone else"
            )
