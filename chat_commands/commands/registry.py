"""Chat command registry and dispatch.

A command is registered under its prefix ("!kc") with a lookup and an
optional submit:

  lookup(chat_message, text)   awaited for every chat message whose first
                               word is the prefix; may rewrite the message.
  submit(chat_input, text)     called when the local player sends the
                               command; returns True when it started a
                               submission, which then resumes chat_input.

Prefixes are matched case-insensitively against the first word only, so
"!KC zulrah" runs !kc and "!kcx" runs nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from chat_commands.formatting import remove_tags
from chat_commands.models import ChatMessage, ChatMessageType

from .submission import ChatInput

logger = logging.getLogger(__name__)

Lookup = Callable[[ChatMessage, str], Awaitable[None]]
Submit = Callable[[ChatInput, str], bool]

COMMAND_CHAT_TYPES = frozenset({
    ChatMessageType.PUBLICCHAT,
    ChatMessageType.MODCHAT,
    ChatMessageType.FRIENDSCHAT,
    ChatMessageType.CLANCHAT,
    ChatMessageType.PRIVATECHAT,
    ChatMessageType.MODPRIVATECHAT,
    ChatMessageType.PRIVATECHATOUT,
})


@dataclass(frozen=True)
class ChatCommand:
    name: str
    lookup: Lookup
    submit: Submit | None = None


def extract_command(text: str) -> str:
    """First word of a message, lower-cased."""
    return text.strip().split(" ", 1)[0].lower()


class ChatCommandManager:
    def __init__(self) -> None:
        self._commands: dict[str, ChatCommand] = {}

    def register(self, prefix: str, lookup: Lookup, submit: Submit | None = None) -> None:
        self._commands[prefix.lower()] = ChatCommand(prefix.lower(), lookup, submit)

    def unregister(self, prefix: str) -> None:
        self._commands.pop(prefix.lower(), None)

    def get(self, text: str) -> ChatCommand | None:
        return self._commands.get(extract_command(text))

    @property
    def prefixes(self) -> list[str]:
        return list(self._commands)

    async def on_chat_message(self, chat_message: ChatMessage) -> bool:
        """Run the lookup for a command message. Returns True if one ran."""
        if chat_message.type not in COMMAND_CHAT_TYPES:
            return False

        text = remove_tags(chat_message.message)
        command = self.get(text)
        if command is None:
            return False

        logger.debug("running %s lookup for %r", command.name, text)
        await command.lookup(chat_message, text)
        return True

    def on_chatbox_input(self, chat_input: ChatInput) -> bool:
        """Offer an outgoing message to its command's submit.

        Returns True when a submission was started; the pipeline resumes the
        input once it ends. In every other case the input is resumed here
        before returning, so each input is resumed exactly once.
        """
        command = self.get(chat_input.value)
        if command is None or command.submit is None:
            chat_input.resume()
            return False

        try:
            started = command.submit(chat_input, chat_input.value)
        except Exception:
            logger.warning("%s submit failed", command.name, exc_info=True)
            chat_input.resume()
            return False

        if not started:
            chat_input.resume()
        return started
