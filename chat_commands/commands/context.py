"""Shared state and helpers for command lookups and submits."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chat_commands.chat_client import ChatClient
from chat_commands.config import ChatCommandsConfig
from chat_commands.formatting import sanitize
from chat_commands.hiscore import HiscoreClient, HiscoreEndpoint
from chat_commands.items import ItemClient
from chat_commands.models import AccountType, ChatMessage, ChatMessageType, WorldType
from chat_commands.session import Session
from chat_commands.store import StatStore

from .submission import SubmissionPipeline

logger = logging.getLogger(__name__)

# Account icons as they appear in a sender's name
IRONMAN_ICON = "<img=2>"
ULTIMATE_IRONMAN_ICON = "<img=3>"
HARDCORE_IRONMAN_ICON = "<img=10>"

_ACCOUNT_ENDPOINTS = {
    AccountType.IRONMAN: HiscoreEndpoint.IRONMAN,
    AccountType.ULTIMATE_IRONMAN: HiscoreEndpoint.ULTIMATE_IRONMAN,
    AccountType.HARDCORE_IRONMAN: HiscoreEndpoint.HARDCORE_IRONMAN,
}


def to_endpoint(account_type: AccountType) -> HiscoreEndpoint:
    return _ACCOUNT_ENDPOINTS.get(account_type, HiscoreEndpoint.NORMAL)


def endpoint_by_name(name: str) -> HiscoreEndpoint:
    """Hiscore endpoint from the account icon in a chat sender name."""
    if IRONMAN_ICON in name:
        return to_endpoint(AccountType.IRONMAN)
    if ULTIMATE_IRONMAN_ICON in name:
        return to_endpoint(AccountType.ULTIMATE_IRONMAN)
    if HARDCORE_IRONMAN_ICON in name:
        return to_endpoint(AccountType.HARDCORE_IRONMAN)
    return to_endpoint(AccountType.NORMAL)


@dataclass(frozen=True)
class HiscoreLookup:
    name: str
    endpoint: HiscoreEndpoint


@dataclass
class CommandContext:
    session: Session
    store: StatStore
    config: ChatCommandsConfig
    chat_client: ChatClient
    hiscore_client: HiscoreClient
    item_client: ItemClient
    pipeline: SubmissionPipeline
    hiscore_endpoint: HiscoreEndpoint = HiscoreEndpoint.NORMAL

    @property
    def local_name(self) -> str:
        return self.session.local_player_name

    @property
    def username(self) -> str:
        """Key for the local player's stats in the store."""
        return self.session.username

    def player_for(self, chat_message: ChatMessage) -> str:
        """Whose stats a lookup should show: ours for outgoing PMs, else the sender's."""
        if chat_message.type == ChatMessageType.PRIVATECHATOUT:
            return self.local_name
        return sanitize(chat_message.name)

    def local_hiscore_endpoint(self) -> HiscoreEndpoint:
        """Endpoint for the local player, from live account state.

        Chat icons are not reliable for the local player, so they are never
        consulted here.
        """
        if WorldType.LEAGUE in self.session.world_types:
            return HiscoreEndpoint.LEAGUE
        return to_endpoint(self.session.account_type)

    def refresh_hiscore_endpoint(self) -> None:
        self.hiscore_endpoint = self.local_hiscore_endpoint()

    def hiscore_lookup_for(self, chat_message: ChatMessage) -> HiscoreLookup:
        player = sanitize(chat_message.name)

        if chat_message.type == ChatMessageType.PRIVATECHATOUT or player == self.local_name:
            return HiscoreLookup(self.local_name, self.hiscore_endpoint)

        # Public chat on a league world always means league hiscores.
        if chat_message.type in (ChatMessageType.PUBLICCHAT, ChatMessageType.MODCHAT):
            if WorldType.LEAGUE in self.session.world_types:
                return HiscoreLookup(player, HiscoreEndpoint.LEAGUE)

        return HiscoreLookup(player, endpoint_by_name(chat_message.name))

    def respond(self, chat_message: ChatMessage, response: str) -> None:
        """Replace the displayed text of a command message with its answer."""
        logger.debug("Setting response %s", response)
        chat_message.message_node.runelite_format_message = response
        self.session.refresh_chat()
