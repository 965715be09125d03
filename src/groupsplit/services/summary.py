"""Shareable settlement message written by an LLM."""

from __future__ import annotations

from typing import Any, Optional, Sequence

import openai

from groupsplit.config import Settings, get_settings
from groupsplit.logging import get_logger
from groupsplit.models import Expense, Participant, Transaction
from groupsplit.services.report import UNKNOWN_LABEL, format_money, total_spent

MISSING_KEY_MESSAGE = "Error: OPENAI_API_KEY is not configured, the summary message is unavailable."
EMPTY_REPLY_MESSAGE = "Could not generate a message, please try again later."
SERVICE_ERROR_MESSAGE = "Something went wrong while generating the message. Check the network or the API key."

SYSTEM_PROMPT = "You write short, friendly messages for group chats about splitting a bill."

log = get_logger(__name__)


def build_prompt(
    participants: Sequence[Participant],
    expenses: Sequence[Expense],
    transactions: Sequence[Transaction],
    *,
    language: str = "English",
    symbol: str = "$",
) -> str:
    names = {p.id: p.name for p in participants}

    expense_lines = "\n".join(
        f"- {e.title}: {format_money(e.amount, symbol)} (Paid by: {names.get(e.payer_id, UNKNOWN_LABEL)})"
        for e in expenses
    ) or "- (no expenses)"
    transaction_lines = "\n".join(
        f"- {names.get(t.from_id, UNKNOWN_LABEL)} needs to pay {names.get(t.to_id, UNKNOWN_LABEL)}: "
        f"{format_money(t.amount, symbol)}"
        for t in transactions
    ) or "- Nobody needs to pay anyone."
    birthday = ", ".join(p.name for p in participants if p.is_birthday) or "nobody"

    return (
        "A group of friends just had a meal or a gathering together.\n"
        f"Write a friendly, colloquial message in {language}.\n\n"
        "Here is the list of expenses:\n"
        f"{expense_lines}\n\n"
        f"Total spent: {format_money(total_spent(expenses), symbol)}\n"
        f"Birthday people (treated by the group): {birthday}\n\n"
        "Here is the calculated settlement (who pays whom):\n"
        f"{transaction_lines}\n\n"
        "Instructions:\n"
        "1. Start with a fun greeting.\n"
        "2. Briefly summarize the total spending.\n"
        '3. Clearly list the final "give & take" instructions. Use "👉" for each line.\n'
        "4. If there were birthday treats, mention them warmly.\n"
        "5. End with a polite reminder to transfer the money.\n"
        "6. Keep it concise enough for a chat message.\n"
    )


def _make_client(settings: Settings) -> Optional[Any]:
    if not settings.openai_api_key:
        return None
    return openai.AsyncOpenAI(api_key=settings.openai_api_key, timeout=settings.summary_timeout)


async def generate_summary_message(
    participants: Sequence[Participant],
    expenses: Sequence[Expense],
    transactions: Sequence[Transaction],
    *,
    settings: Optional[Settings] = None,
    client: Optional[Any] = None,
) -> str:
    """
    Ask the model for a shareable summary of the settlement.

    Only reads its arguments. Service failures are logged and turned into
    one of the fallback strings, never raised.
    """
    settings = settings or get_settings()
    client = client or _make_client(settings)
    if client is None:
        log.info("summary.no_api_key")
        return MISSING_KEY_MESSAGE

    prompt = build_prompt(
        participants,
        expenses,
        transactions,
        language=settings.summary_language,
        symbol=settings.currency_symbol,
    )

    try:
        response = await client.chat.completions.create(
            model=settings.openai_model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        )
    except openai.OpenAIError as exc:
        log.warning("summary.failed", error=str(exc), error_type=type(exc).__name__)
        return SERVICE_ERROR_MESSAGE

    text = response.choices[0].message.content if response.choices else None
    if not text or not text.strip():
        log.info("summary.empty_reply")
        return EMPTY_REPLY_MESSAGE
    return text.strip()
