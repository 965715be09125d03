from __future__ import annotations

from aiogram import F, Router, html
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from groupsplit.config import get_settings
from groupsplit.keyboards import settlement_keyboard
from groupsplit.logging import get_logger
from groupsplit.services.report import build_report
from groupsplit.services.summary import generate_summary_message
from groupsplit.state import store

settlement_router = Router()
log = get_logger(__name__)


def build_settlement_text(chat_id: int) -> str:
    session = store.get(chat_id)
    participants = session.participants
    if not participants:
        return "No participants yet. Add people with /add Name."

    expenses = session.expenses
    result = session.settlement()
    log.info("settlement.shown", chat_id=chat_id, transactions=len(result.transactions))
    return html.quote(build_report(participants, expenses, result, get_settings().currency_symbol))


async def build_summary_text(chat_id: int) -> str:
    session = store.get(chat_id)
    participants = session.participants
    expenses = session.expenses
    result = session.settlement()
    text = await generate_summary_message(participants, expenses, result.transactions)
    return html.quote(text)


@settlement_router.message(Command("settle"))
async def cmd_settle(message: Message) -> None:
    await message.answer(build_settlement_text(message.chat.id), reply_markup=settlement_keyboard())


@settlement_router.callback_query(F.data == "menu:settle")
async def cb_settle(callback: CallbackQuery) -> None:
    if isinstance(callback.message, Message):
        await callback.message.edit_text(
            build_settlement_text(callback.message.chat.id),
            reply_markup=settlement_keyboard(),
        )
    await callback.answer()


@settlement_router.message(Command("summary"))
async def cmd_summary(message: Message) -> None:
    await message.answer("✨ Writing a message…")
    await message.answer(await build_summary_text(message.chat.id))


@settlement_router.callback_query(F.data == "summary")
async def cb_summary(callback: CallbackQuery) -> None:
    await callback.answer("✨ Writing a message…")
    if isinstance(callback.message, Message):
        await callback.message.answer(await build_summary_text(callback.message.chat.id))
