from __future__ import annotations

from typing import Iterable, Sequence

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from groupsplit.models import Participant


def main_menu_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [InlineKeyboardButton(text="👥 Participants", callback_data="menu:people")],
            [InlineKeyboardButton(text="🧾 Expenses", callback_data="menu:expenses")],
            [InlineKeyboardButton(text="✅ Settle up", callback_data="menu:settle")],
            [InlineKeyboardButton(text="ℹ️ Help", callback_data="menu:help")],
        ]
    )


def back_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[[InlineKeyboardButton(text="◀️ Back to menu", callback_data="menu:main")]]
    )


def participants_keyboard(participants: Sequence[Participant]) -> InlineKeyboardMarkup:
    rows: list[list[InlineKeyboardButton]] = []
    for participant in participants:
        rows.append(
            [
                InlineKeyboardButton(
                    text=f"{participant.name} {'🎂' if participant.is_birthday else '🎈'}",
                    callback_data=f"bday:{participant.id}",
                ),
                InlineKeyboardButton(
                    text="💑 Paid by…",
                    callback_data=f"linkpick:{participant.id}",
                ),
            ]
        )
    rows.append([InlineKeyboardButton(text="◀️ Back to menu", callback_data="menu:main")])
    return InlineKeyboardMarkup(inline_keyboard=rows)


def link_keyboard(dependent: Participant, candidates: Iterable[Participant]) -> InlineKeyboardMarkup:
    rows = [[InlineKeyboardButton(text="Pays for themself", callback_data=f"link:{dependent.id}:-")]]
    for payer in candidates:
        if payer.id == dependent.id:
            continue
        mark = "· " if dependent.linked_payer_id == payer.id else ""
        rows.append(
            [
                InlineKeyboardButton(
                    text=f"{mark}Paid by {payer.name}",
                    callback_data=f"link:{dependent.id}:{payer.id}",
                )
            ]
        )
    rows.append([InlineKeyboardButton(text="◀️ Back", callback_data="menu:people")])
    return InlineKeyboardMarkup(inline_keyboard=rows)


def involved_keyboard(participants: Sequence[Participant], involved_ids: Sequence[str]) -> InlineKeyboardMarkup:
    rows: list[list[InlineKeyboardButton]] = []
    for participant in participants:
        checked = "✅" if participant.id in involved_ids else "▫️"
        cake = " 🎂" if participant.is_birthday else ""
        rows.append(
            [
                InlineKeyboardButton(
                    text=f"{checked} {participant.name}{cake}",
                    callback_data=f"involve:{participant.id}",
                )
            ]
        )
    rows.append(
        [
            InlineKeyboardButton(text="All", callback_data="involve_all"),
            InlineKeyboardButton(text="None", callback_data="involve_none"),
        ]
    )
    rows.append(
        [
            InlineKeyboardButton(text="💾 Save", callback_data="expense_save"),
            InlineKeyboardButton(text="✖️ Cancel", callback_data="expense_cancel"),
        ]
    )
    return InlineKeyboardMarkup(inline_keyboard=rows)


def settlement_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [InlineKeyboardButton(text="✨ Write a summary message", callback_data="summary")],
            [InlineKeyboardButton(text="◀️ Back to menu", callback_data="menu:main")],
        ]
    )
