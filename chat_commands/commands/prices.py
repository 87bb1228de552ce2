"""!price: grand exchange price and high alchemy value of an item."""

from __future__ import annotations

import logging

from chat_commands.formatting import (
    HIGH_ALCHEMY_MULTIPLIER,
    HIGHLIGHT,
    NORMAL,
    MessageBuilder,
    format_number,
)
from chat_commands.items import ItemClientError, best_match
from chat_commands.models import ChatMessage

from .context import CommandContext
from .stats import command_argument

logger = logging.getLogger(__name__)

PRICE_COMMAND = "!price"


class PriceCommands:
    def __init__(self, ctx: CommandContext) -> None:
        self.ctx = ctx

    async def item_price_lookup(self, chat_message: ChatMessage, message: str) -> None:
        if not self.ctx.config.price:
            return

        search = command_argument(message, PRICE_COMMAND)
        if not search:
            return

        try:
            results = await self.ctx.item_client.search(search)
        except ItemClientError:
            logger.debug("unable to look up price of %r", search, exc_info=True)
            return

        item = best_match(results, search)
        if item is None:
            return

        alch_price = round(item.store_price * HIGH_ALCHEMY_MULTIPLIER)
        response = (
            MessageBuilder()
            .append(NORMAL).append("Price of ")
            .append(HIGHLIGHT).append(item.name)
            .append(NORMAL).append(": GE average ")
            .append(HIGHLIGHT).append(format_number(item.price))
            .append(NORMAL).append(" HA value ")
            .append(HIGHLIGHT).append(format_number(alch_price))
            .build()
        )
        self.ctx.respond(chat_message, response)
