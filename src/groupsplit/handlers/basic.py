from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command, CommandStart
from aiogram.types import CallbackQuery, Message

from groupsplit.keyboards import back_keyboard, main_menu_keyboard
from groupsplit.state import store

basic_router = Router()


HELP_TEXT = (
    "<b>📖 Commands</b>\n\n"
    "<b>Participants:</b>\n"
    "/add Name[, Name...] - add people\n"
    "/remove Name - remove a person\n"
    "/birthday Name - toggle birthday (left out of new expenses by default)\n"
    "/link Name | Payer - Payer covers Name's share (couples)\n"
    "/unlink Name - Name pays for themself again\n"
    "/people - list participants\n\n"
    "<b>Expenses:</b>\n"
    "/addexpense Title | Amount | Payer [| Name, Name...] - add an expense\n"
    "/expenses - list expenses\n"
    "/delexpense N - delete expense number N\n\n"
    "<b>Settling up:</b>\n"
    "/settle - balances and who pays whom\n"
    "/summary - a friendly message to share with the group\n"
    "/reset - start over\n"
)


def greeting(name: str) -> str:
    return (
        f"👋 Hi, {name}!\n\n"
        "I'm <b>GroupSplit</b>. Add everyone, log what was paid, "
        "and I'll tell you the fewest transfers to settle up.\n\n"
        "Pick an action:"
    )


@basic_router.message(CommandStart())
async def cmd_start(message: Message) -> None:
    user = message.from_user
    user_name = user.first_name if user else "there"
    await message.answer(greeting(user_name), reply_markup=main_menu_keyboard())


@basic_router.message(Command("help"))
async def cmd_help(message: Message) -> None:
    await message.answer(HELP_TEXT)


@basic_router.message(Command("reset"))
async def cmd_reset(message: Message) -> None:
    store.drop(message.chat.id)
    await message.answer("🧹 Cleared all participants and expenses.", reply_markup=main_menu_keyboard())


@basic_router.callback_query(F.data == "menu:main")
async def cb_main_menu(callback: CallbackQuery) -> None:
    user_name = callback.from_user.first_name if callback.from_user else "there"
    if isinstance(callback.message, Message):
        await callback.message.edit_text(greeting(user_name), reply_markup=main_menu_keyboard())
    await callback.answer()


@basic_router.callback_query(F.data == "menu:help")
async def cb_help_menu(callback: CallbackQuery) -> None:
    if isinstance(callback.message, Message):
        await callback.message.edit_text(HELP_TEXT, reply_markup=back_keyboard())
    await callback.answer()
