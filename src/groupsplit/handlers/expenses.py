from __future__ import annotations

from aiogram import F, Router, html
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from groupsplit.config import get_settings
from groupsplit.keyboards import back_keyboard, involved_keyboard
from groupsplit.logging import get_logger
from groupsplit.services.report import format_expenses, format_money
from groupsplit.state import ExpenseDraft, GroupSession, store
from groupsplit.utils.parse import parse_amount, parse_names, split_args

expenses_router = Router()
log = get_logger(__name__)

USAGE = "Usage: /addexpense Title | Amount | Payer [| Name, Name...]"


def _draft_text(session: GroupSession, draft: ExpenseDraft) -> str:
    payer = session.get_participant(draft.payer_id)
    symbol = get_settings().currency_symbol
    return html.quote(
        f"🧾 {draft.title}: {format_money(draft.amount, symbol)}, paid by {payer.name if payer else '?'}\n"
        f"Who shares it? ({len(draft.involved_ids)} selected)"
    )


@expenses_router.message(Command("addexpense"))
async def cmd_addexpense(message: Message) -> None:
    parts = split_args(message.text or "", "addexpense")
    if len(parts) < 3:
        await message.answer(USAGE)
        return

    title = parts[0]
    if not title:
        await message.answer(USAGE)
        return

    try:
        amount = parse_amount(parts[1])
    except ValueError:
        await message.answer("That doesn't look like an amount.")
        return

    session = store.get(message.chat.id)
    payer = session.find_participant_by_name(parts[2])
    if payer is None:
        await message.answer(html.quote(f"No one called {parts[2]} in this group."))
        return

    if len(parts) > 3:
        involved_ids = []
        for name in parse_names(parts[3]):
            participant = session.find_participant_by_name(name)
            if participant is None:
                await message.answer(html.quote(f"No one called {name} in this group."))
                return
            involved_ids.append(participant.id)

        try:
            expense = session.add_expense(title, amount, payer.id, involved_ids)
        except ValueError as exc:
            await message.answer(html.quote(f"⚠️ {exc}"))
            return

        log.info("expense.added", chat_id=message.chat.id, expense_id=expense.id)
        await message.answer(html.quote(f"🧾 Added {expense.title}, shared by {len(expense.involved_user_ids)}."))
        return

    user_id = message.from_user.id if message.from_user else 0
    draft = ExpenseDraft(
        title=title,
        amount=amount,
        payer_id=payer.id,
        involved_ids=session.default_involved_ids(),
    )
    store.set_draft(message.chat.id, user_id, draft)
    await message.answer(
        _draft_text(session, draft),
        reply_markup=involved_keyboard(session.participants, draft.involved_ids),
    )


async def _edit_draft(callback: CallbackQuery, action: str) -> None:
    if not isinstance(callback.message, Message):
        await callback.answer()
        return

    chat_id = callback.message.chat.id
    draft = store.get_draft(chat_id, callback.from_user.id)
    if draft is None:
        await callback.answer("This expense form has expired, start again with /addexpense.", show_alert=True)
        return

    session = store.get(chat_id)
    if action == "all":
        draft.involved_ids = [p.id for p in session.participants]
    elif action == "none":
        draft.involved_ids = []
    else:
        draft.toggle(action)

    await callback.message.edit_text(
        _draft_text(session, draft),
        reply_markup=involved_keyboard(session.participants, draft.involved_ids),
    )
    await callback.answer()


@expenses_router.callback_query(F.data.startswith("involve:"))
async def cb_toggle_involved(callback: CallbackQuery) -> None:
    await _edit_draft(callback, (callback.data or "").split(":", 1)[1])


@expenses_router.callback_query(F.data == "involve_all")
async def cb_involve_all(callback: CallbackQuery) -> None:
    await _edit_draft(callback, "all")


@expenses_router.callback_query(F.data == "involve_none")
async def cb_involve_none(callback: CallbackQuery) -> None:
    await _edit_draft(callback, "none")


@expenses_router.callback_query(F.data == "expense_save")
async def cb_expense_save(callback: CallbackQuery) -> None:
    if not isinstance(callback.message, Message):
        await callback.answer()
        return

    chat_id = callback.message.chat.id
    draft = store.get_draft(chat_id, callback.from_user.id)
    if draft is None:
        await callback.answer("This expense form has expired, start again with /addexpense.", show_alert=True)
        return

    session = store.get(chat_id)
    try:
        expense = session.add_expense(draft.title, draft.amount, draft.payer_id, draft.involved_ids)
    except (KeyError, ValueError) as exc:
        await callback.answer(str(exc), show_alert=True)
        return

    store.pop_draft(chat_id, callback.from_user.id)
    log.info("expense.added", chat_id=chat_id, expense_id=expense.id)
    await callback.message.edit_text(
        html.quote(f"🧾 Added {expense.title}, shared by {len(expense.involved_user_ids)}.")
    )
    await callback.answer()


@expenses_router.callback_query(F.data == "expense_cancel")
async def cb_expense_cancel(callback: CallbackQuery) -> None:
    if isinstance(callback.message, Message):
        store.pop_draft(callback.message.chat.id, callback.from_user.id)
        await callback.message.edit_text("Expense discarded.")
    await callback.answer()


@expenses_router.message(Command("expenses"))
async def cmd_expenses(message: Message) -> None:
    session = store.get(message.chat.id)
    symbol = get_settings().currency_symbol
    await message.answer(html.quote(format_expenses(session.expenses, session.participants, symbol)))


@expenses_router.callback_query(F.data == "menu:expenses")
async def cb_expenses(callback: CallbackQuery) -> None:
    if isinstance(callback.message, Message):
        session = store.get(callback.message.chat.id)
        symbol = get_settings().currency_symbol
        await callback.message.edit_text(
            html.quote(format_expenses(session.expenses, session.participants, symbol))
            + "\n\nAdd one with /addexpense Title | Amount | Payer",
            reply_markup=back_keyboard(),
        )
    await callback.answer()


@expenses_router.message(Command("delexpense"))
async def cmd_delexpense(message: Message) -> None:
    args = split_args(message.text or "", "delexpense")
    session = store.get(message.chat.id)
    expenses = session.expenses
    try:
        index = int(args[0]) - 1 if args else -1
    except ValueError:
        index = -1
    if not 0 <= index < len(expenses):
        await message.answer("Usage: /delexpense N (the number from /expenses)")
        return

    removed = session.remove_expense(expenses[index].id)
    await message.answer(html.quote(f"🗑 Removed {removed.title}."))
