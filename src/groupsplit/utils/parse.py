from __future__ import annotations

import re

_AMOUNT_RE = re.compile(r"^\$?\s*(\d+(?:[.,]\d+)?)\s*\$?$")


def parse_amount(text: str) -> float:
    """
    Parse a money amount typed by a user.

    Accepted forms:
    - 120
    - 120.5
    - $120.50
    - 120,50
    """
    value = text.strip().replace(" ", "")
    match = _AMOUNT_RE.match(value)
    if not match:
        raise ValueError(f"Not an amount: {text!r}")
    return float(match.group(1).replace(",", "."))


def split_args(text: str, command: str) -> list[str]:
    """Arguments of a ``/command a | b | c`` message, with the bot mention stripped."""
    head, _, rest = text.strip().partition(" ")
    if not head.lstrip("/").split("@", 1)[0] == command.lstrip("/"):
        rest = text
    if not rest.strip():
        return []
    return [part.strip() for part in rest.split("|")]


def parse_names(text: str) -> list[str]:
    if "," in text:
        parts = text.split(",")
    else:
        parts = text.split()
    return [part.strip() for part in parts if part.strip()]
