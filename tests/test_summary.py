from types import SimpleNamespace

import openai
import pytest

from groupsplit.config import Settings
from groupsplit.models import Participant, Transaction
from groupsplit.services.summary import (
    EMPTY_REPLY_MESSAGE,
    MISSING_KEY_MESSAGE,
    SERVICE_ERROR_MESSAGE,
    build_prompt,
    generate_summary_message,
)

from conftest import make_expense


class StubCompletions:
    def __init__(self, reply: str | None = None, error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class StubClient:
    def __init__(self, completions: StubCompletions) -> None:
        self.chat = SimpleNamespace(completions=completions)


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key=None, openai_model="test-model", summary_language="English", currency_symbol="$")


@pytest.fixture
def group():
    people = [
        Participant(id="a", name="Amy"),
        Participant(id="b", name="Ben", is_birthday=True),
    ]
    expenses = [make_expense(30, "a", ["a"], title="Cake")]
    transactions = [Transaction(from_id="b", to_id="a", amount=15.0)]
    return people, expenses, transactions


def test_build_prompt(group):
    people, expenses, transactions = group
    prompt = build_prompt(people, expenses, transactions, language="English")

    assert "- Cake: $30.00 (Paid by: Amy)" in prompt
    assert "- Ben needs to pay Amy: $15.00" in prompt
    assert "Birthday people (treated by the group): Ben" in prompt
    assert "in English" in prompt


def test_build_prompt_without_transfers():
    prompt = build_prompt([Participant(id="a", name="Amy")], [], [])
    assert "Nobody needs to pay anyone." in prompt
    assert "(no expenses)" in prompt


@pytest.mark.asyncio
async def test_missing_key_returns_fallback(group, settings):
    people, expenses, transactions = group
    result = await generate_summary_message(people, expenses, transactions, settings=settings)
    assert result == MISSING_KEY_MESSAGE


@pytest.mark.asyncio
async def test_summary_uses_model_reply(group, settings):
    people, expenses, transactions = group
    completions = StubCompletions(reply="  Hi all! 👉 Ben pays Amy $15  ")

    result = await generate_summary_message(
        people, expenses, transactions, settings=settings, client=StubClient(completions)
    )

    assert result == "Hi all! 👉 Ben pays Amy $15"
    assert completions.calls[0]["model"] == "test-model"
    assert "Ben needs to pay Amy" in completions.calls[0]["messages"][-1]["content"]


@pytest.mark.asyncio
async def test_empty_reply_returns_fallback(group, settings):
    people, expenses, transactions = group
    client = StubClient(StubCompletions(reply=""))
    result = await generate_summary_message(people, expenses, transactions, settings=settings, client=client)
    assert result == EMPTY_REPLY_MESSAGE


@pytest.mark.asyncio
async def test_service_error_returns_fallback(group, settings):
    people, expenses, transactions = group
    client = StubClient(StubCompletions(error=openai.OpenAIError("boom")))
    result = await generate_summary_message(people, expenses, transactions, settings=settings, client=client)
    assert result == SERVICE_ERROR_MESSAGE


@pytest.mark.asyncio
async def test_summary_does_not_touch_inputs(group, settings):
    people, expenses, transactions = group
    before = (list(people), list(expenses), list(transactions))
    client = StubClient(StubCompletions(reply="ok"))
    await generate_summary_message(people, expenses, transactions, settings=settings, client=client)
    assert (people, expenses, transactions) == before
