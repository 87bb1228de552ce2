"""Chat text helpers: tag stripping, name sanitising and response building.

Responses use colour tokens instead of literal colours so the chatbox can
apply the user's theme when it renders them:

    MessageBuilder().append(NORMAL).append("Quest points: ").append(HIGHLIGHT).append("150").build()
    → "<colNORMAL>Quest points: <colHIGHLIGHT>150"
"""

from __future__ import annotations

import re
from enum import Enum

_TAG = re.compile(r"<[^>]*>")

HIGH_ALCHEMY_MULTIPLIER = 0.6


class ChatColorType(str, Enum):
    NORMAL = "NORMAL"
    HIGHLIGHT = "HIGHLIGHT"


NORMAL = ChatColorType.NORMAL
HIGHLIGHT = ChatColorType.HIGHLIGHT


def remove_tags(text: str) -> str:
    return _TAG.sub("", text)


def sanitize(name: str) -> str:
    """Strip icon/colour tags and non-breaking spaces from a player name."""
    return remove_tags(name).replace("\u00a0", " ")


def format_number(value: int) -> str:
    """Group thousands: 1234567 → "1,234,567"."""
    return f"{value:,}"


def format_duration(seconds: int) -> str:
    """150 → "2:30"."""
    return f"{seconds // 60}:{seconds % 60:02d}"


class MessageBuilder:
    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, part: str | ChatColorType) -> MessageBuilder:
        if isinstance(part, ChatColorType):
            self._parts.append(f"<col{part.value}>")
        else:
            self._parts.append(part)
        return self

    def build(self) -> str:
        return "".join(self._parts)
