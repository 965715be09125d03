from __future__ import annotations

from aiogram import F, Router, html
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from groupsplit.keyboards import link_keyboard, participants_keyboard
from groupsplit.logging import get_logger
from groupsplit.models import LinkError
from groupsplit.services.report import format_participants
from groupsplit.state import GroupSession, store
from groupsplit.utils.parse import parse_names, split_args

participants_router = Router()
log = get_logger(__name__)


def _people_text(session: GroupSession) -> str:
    return (
        html.quote(format_participants(session.participants))
        + "\n\nTap a name to toggle 🎂, or pick who pays for them."
    )


async def _show_people(message: Message, session: GroupSession, *, edit: bool = False) -> None:
    text = _people_text(session)
    keyboard = participants_keyboard(session.participants)
    if edit:
        await message.edit_text(text, reply_markup=keyboard)
    else:
        await message.answer(text, reply_markup=keyboard)


@participants_router.message(Command("add"))
async def cmd_add(message: Message) -> None:
    args = split_args(message.text or "", "add")
    names = parse_names(args[0]) if args else []
    if not names:
        await message.answer("Usage: /add Name[, Name...]")
        return

    session = store.get(message.chat.id)
    added, errors = [], []
    for name in names:
        try:
            added.append(session.add_participant(name))
        except ValueError as exc:
            errors.append(str(exc))

    log.info("participants.added", chat_id=message.chat.id, count=len(added))
    lines = [f"➕ Added: {', '.join(p.name for p in added)}"] if added else []
    lines.extend(f"⚠️ {error}" for error in errors)
    await message.answer(html.quote("\n".join(lines)))


@participants_router.message(Command("remove"))
async def cmd_remove(message: Message) -> None:
    args = split_args(message.text or "", "remove")
    if not args:
        await message.answer("Usage: /remove Name")
        return

    session = store.get(message.chat.id)
    participant = session.find_participant_by_name(args[0])
    if participant is None:
        await message.answer(html.quote(f"No one called {args[0]} in this group."))
        return

    session.remove_participant(participant.id)
    await message.answer(html.quote(f"🗑 Removed {participant.name}."))


@participants_router.message(Command("birthday"))
async def cmd_birthday(message: Message) -> None:
    args = split_args(message.text or "", "birthday")
    if not args:
        await message.answer("Usage: /birthday Name")
        return

    session = store.get(message.chat.id)
    participant = session.find_participant_by_name(args[0])
    if participant is None:
        await message.answer(html.quote(f"No one called {args[0]} in this group."))
        return

    updated = session.toggle_birthday(participant.id)
    if updated.is_birthday:
        text = f"🎂 {updated.name} is the birthday star and is left out of new expenses by default."
    else:
        text = f"{updated.name} is no longer marked as a birthday."
    await message.answer(html.quote(text))


@participants_router.message(Command("link"))
async def cmd_link(message: Message) -> None:
    args = split_args(message.text or "", "link")
    if len(args) < 2:
        await message.answer("Usage: /link Name | Payer")
        return

    session = store.get(message.chat.id)
    dependent = session.find_participant_by_name(args[0])
    payer = session.find_participant_by_name(args[1])
    if dependent is None or payer is None:
        await message.answer("Both people need to be in the group first (/add).")
        return

    try:
        session.set_linked_payer(dependent.id, payer.id)
    except LinkError as exc:
        await message.answer(html.quote(f"⚠️ {exc}"))
        return

    await message.answer(html.quote(f"💑 {payer.name} now covers {dependent.name}'s share."))


@participants_router.message(Command("unlink"))
async def cmd_unlink(message: Message) -> None:
    args = split_args(message.text or "", "unlink")
    if not args:
        await message.answer("Usage: /unlink Name")
        return

    session = store.get(message.chat.id)
    participant = session.find_participant_by_name(args[0])
    if participant is None:
        await message.answer(html.quote(f"No one called {args[0]} in this group."))
        return

    session.set_linked_payer(participant.id, None)
    await message.answer(html.quote(f"{participant.name} pays for themself again."))


@participants_router.message(Command("people"))
async def cmd_people(message: Message) -> None:
    await _show_people(message, store.get(message.chat.id))


@participants_router.callback_query(F.data == "menu:people")
async def cb_people(callback: CallbackQuery) -> None:
    if isinstance(callback.message, Message):
        await _show_people(callback.message, store.get(callback.message.chat.id), edit=True)
    await callback.answer()


@participants_router.callback_query(F.data.startswith("bday:"))
async def cb_toggle_birthday(callback: CallbackQuery) -> None:
    if not isinstance(callback.message, Message) or not callback.data:
        await callback.answer()
        return

    session = store.get(callback.message.chat.id)
    participant_id = callback.data.split(":", 1)[1]
    try:
        session.toggle_birthday(participant_id)
    except KeyError:
        await callback.answer("This person was removed.", show_alert=True)
        return

    await _show_people(callback.message, session, edit=True)
    await callback.answer()


@participants_router.callback_query(F.data.startswith("linkpick:"))
async def cb_pick_payer(callback: CallbackQuery) -> None:
    if not isinstance(callback.message, Message) or not callback.data:
        await callback.answer()
        return

    session = store.get(callback.message.chat.id)
    dependent = session.get_participant(callback.data.split(":", 1)[1])
    if dependent is None:
        await callback.answer("This person was removed.", show_alert=True)
        return

    candidates = [p for p in session.participants if not p.is_dependent]
    await callback.message.edit_text(
        html.quote(f"Who pays for {dependent.name}?"),
        reply_markup=link_keyboard(dependent, candidates),
    )
    await callback.answer()


@participants_router.callback_query(F.data.startswith("link:"))
async def cb_set_payer(callback: CallbackQuery) -> None:
    if not isinstance(callback.message, Message) or not callback.data:
        await callback.answer()
        return

    _, dependent_id, payer_id = callback.data.split(":", 2)
    session = store.get(callback.message.chat.id)
    try:
        session.set_linked_payer(dependent_id, None if payer_id == "-" else payer_id)
    except KeyError:
        await callback.answer("This person was removed.", show_alert=True)
        return
    except LinkError as exc:
        await callback.answer(str(exc), show_alert=True)
        return

    await _show_people(callback.message, session, edit=True)
    await callback.answer()
