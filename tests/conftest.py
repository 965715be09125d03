import pytest

from groupsplit.models import Expense, Participant


@pytest.fixture
def abc() -> list[Participant]:
    return [
        Participant(id="a", name="Amy"),
        Participant(id="b", name="Ben"),
        Participant(id="c", name="Cat"),
    ]


def make_expense(amount: float, payer: str, involved: list[str], title: str = "Dinner") -> Expense:
    return Expense(
        id=f"{title}-{payer}-{amount}",
        title=title,
        amount=amount,
        payer_id=payer,
        involved_user_ids=tuple(involved),
    )
