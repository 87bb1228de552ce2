"""Stat commands backed by the chat service: !kc, !pb, !qp, !gc, !duels, !pks.

Lookups answer from the chat service. Kill count and personal best lookups
for the local player answer from the stat store when it has a value, since
that is what the submit would have pushed anyway. Submits push the local
player's stored (or varbit) values and start a background submission.
"""

from __future__ import annotations

import logging

from chat_commands import aliases
from chat_commands.chat_client import ChatClientError
from chat_commands.extraction.correlation import (
    DUEL_LOSE_STREAK,
    DUEL_LOSSES,
    DUEL_WIN_STREAK,
    DUEL_WINS,
)
from chat_commands.extraction.tracker import PLAYER_DEATHS, PLAYER_KILLS
from chat_commands.formatting import HIGHLIGHT, NORMAL, MessageBuilder, format_duration
from chat_commands.models import ChatMessage, Duels, PlayerKills, WorldType
from chat_commands.session import BA_GC, QUEST_POINTS

from .context import CommandContext
from .submission import ChatInput

logger = logging.getLogger(__name__)

KILLCOUNT_COMMAND = "!kc"
PB_COMMAND = "!pb"
QP_COMMAND = "!qp"
GC_COMMAND = "!gc"
DUEL_ARENA_COMMAND = "!duels"
PLAYER_KILLS_COMMAND = "!pks"


def command_argument(message: str, command: str) -> str:
    """Text after "<command> ", or "" when the command has no argument."""
    if len(message) <= len(command):
        return ""
    return message[len(command) + 1:].strip()


def submit_argument(value: str) -> str:
    _, _, arg = value.partition(" ")
    return arg.strip()


def kd_ratio(kills: int, deaths: int) -> str:
    """Kills per death with up to two decimals; "N/A" without deaths."""
    if deaths == 0:
        return "N/A"
    return f"{kills / deaths:.2f}".rstrip("0").rstrip(".")


class StatCommands:
    def __init__(self, ctx: CommandContext) -> None:
        self.ctx = ctx

    def _is_local(self, player: str) -> bool:
        return player.lower() == self.ctx.local_name.lower()

    # ------------------------------------------------------------------
    # !kc
    # ------------------------------------------------------------------

    async def kill_count_lookup(self, chat_message: ChatMessage, message: str) -> None:
        if not self.ctx.config.killcount:
            return

        search = command_argument(message, KILLCOUNT_COMMAND)
        if not search:
            return

        player = self.ctx.player_for(chat_message)
        boss = aliases.resolve(search)

        kc = self.ctx.store.get_kc(self.ctx.username, boss) if self._is_local(player) else 0
        if kc <= 0:
            try:
                kc = await self.ctx.chat_client.get_kc(player, boss)
            except ChatClientError:
                logger.debug("unable to lookup killcount", exc_info=True)
                return

        response = (
            MessageBuilder()
            .append(HIGHLIGHT).append(boss)
            .append(NORMAL).append(" kill count: ")
            .append(HIGHLIGHT).append(str(kc))
            .build()
        )
        self.ctx.respond(chat_message, response)

    def kill_count_submit(self, chat_input: ChatInput, value: str) -> bool:
        search = submit_argument(value)
        if not search:
            return False
        boss = aliases.resolve(search)

        kc = self.ctx.store.get_kc(self.ctx.username, boss)
        if kc <= 0:
            return False

        name = self.ctx.local_name
        self.ctx.pipeline.submit(
            chat_input, lambda: self.ctx.chat_client.submit_kc(name, boss, kc), "killcount",
        )
        return True

    # ------------------------------------------------------------------
    # !pb
    # ------------------------------------------------------------------

    async def personal_best_lookup(self, chat_message: ChatMessage, message: str) -> None:
        if not self.ctx.config.pb:
            return

        search = command_argument(message, PB_COMMAND)
        if not search:
            return

        player = self.ctx.player_for(chat_message)
        boss = aliases.resolve(search)

        pb = self.ctx.store.get_pb(self.ctx.username, boss) if self._is_local(player) else 0
        if pb <= 0:
            try:
                pb = await self.ctx.chat_client.get_pb(player, boss)
            except ChatClientError:
                logger.debug("unable to lookup personal best", exc_info=True)
                return

        response = (
            MessageBuilder()
            .append(HIGHLIGHT).append(boss)
            .append(NORMAL).append(" personal best: ")
            .append(HIGHLIGHT).append(format_duration(pb))
            .build()
        )
        self.ctx.respond(chat_message, response)

    def personal_best_submit(self, chat_input: ChatInput, value: str) -> bool:
        search = submit_argument(value)
        if not search:
            return False
        boss = aliases.resolve(search)

        pb = self.ctx.store.get_pb(self.ctx.username, boss)
        if pb <= 0:
            return False

        name = self.ctx.local_name
        self.ctx.pipeline.submit(
            chat_input, lambda: self.ctx.chat_client.submit_pb(name, boss, pb), "personal best",
        )
        return True

    # ------------------------------------------------------------------
    # !qp / !gc
    # ------------------------------------------------------------------

    async def quest_points_lookup(self, chat_message: ChatMessage, message: str) -> None:
        if not self.ctx.config.qp:
            return

        player = self.ctx.player_for(chat_message)
        try:
            qp = await self.ctx.chat_client.get_qp(player)
        except ChatClientError:
            logger.debug("unable to lookup quest points", exc_info=True)
            return

        response = (
            MessageBuilder()
            .append(NORMAL).append("Quest points: ")
            .append(HIGHLIGHT).append(str(qp))
            .build()
        )
        self.ctx.respond(chat_message, response)

    def quest_points_submit(self, chat_input: ChatInput, value: str) -> bool:
        qp = self.ctx.session.get_var(QUEST_POINTS)
        if qp <= 0:
            return False

        name = self.ctx.local_name
        self.ctx.pipeline.submit(
            chat_input, lambda: self.ctx.chat_client.submit_qp(name, qp), "quest points",
        )
        return True

    async def gamble_count_lookup(self, chat_message: ChatMessage, message: str) -> None:
        if not self.ctx.config.gc:
            return

        player = self.ctx.player_for(chat_message)
        try:
            gc = await self.ctx.chat_client.get_gc(player)
        except ChatClientError:
            logger.debug("unable to lookup gamble count", exc_info=True)
            return

        response = (
            MessageBuilder()
            .append(NORMAL).append("Barbarian Assault High-level gambles: ")
            .append(HIGHLIGHT).append(str(gc))
            .build()
        )
        self.ctx.respond(chat_message, response)

    def gamble_count_submit(self, chat_input: ChatInput, value: str) -> bool:
        gc = self.ctx.session.get_var(BA_GC)
        if gc <= 0:
            return False

        name = self.ctx.local_name
        self.ctx.pipeline.submit(
            chat_input, lambda: self.ctx.chat_client.submit_gc(name, gc), "gamble count",
        )
        return True

    # ------------------------------------------------------------------
    # !duels
    # ------------------------------------------------------------------

    async def duel_arena_lookup(self, chat_message: ChatMessage, message: str) -> None:
        if not self.ctx.config.duels:
            return

        player = self.ctx.player_for(chat_message)
        try:
            duels = await self.ctx.chat_client.get_duels(player)
        except ChatClientError:
            logger.debug("unable to lookup duels", exc_info=True)
            return

        streak = duels.winning_streak if duels.winning_streak != 0 else -duels.losing_streak
        response = (
            MessageBuilder()
            .append(NORMAL).append("Duel Arena wins: ")
            .append(HIGHLIGHT).append(str(duels.wins))
            .append(NORMAL).append("   losses: ")
            .append(HIGHLIGHT).append(str(duels.losses))
            .append(NORMAL).append("   streak: ")
            .append(HIGHLIGHT).append(str(streak))
            .build()
        )
        self.ctx.respond(chat_message, response)

    def duel_arena_submit(self, chat_input: ChatInput, value: str) -> bool:
        store, player = self.ctx.store, self.ctx.username
        duels = Duels(
            wins=store.get_kc(player, DUEL_WINS),
            losses=store.get_kc(player, DUEL_LOSSES),
            winning_streak=store.get_kc(player, DUEL_WIN_STREAK),
            losing_streak=store.get_kc(player, DUEL_LOSE_STREAK),
        )
        if max(duels.wins, duels.losses, duels.winning_streak, duels.losing_streak) <= 0:
            return False

        name = self.ctx.local_name
        self.ctx.pipeline.submit(
            chat_input, lambda: self.ctx.chat_client.submit_duels(name, duels), "duels",
        )
        return True

    # ------------------------------------------------------------------
    # !pks
    # ------------------------------------------------------------------

    async def player_kills_lookup(self, chat_message: ChatMessage, message: str) -> None:
        if not self.ctx.config.pks:
            return

        player = self.ctx.player_for(chat_message)
        try:
            pks = await self.ctx.chat_client.get_pvp_kills(player)
        except ChatClientError:
            logger.debug("unable to lookup player kills", exc_info=True)
            return

        kills, deaths, world = pks.kills, pks.deaths, ""
        world_types = self.ctx.session.world_types
        if WorldType.PVP in world_types:
            kills, deaths, world = pks.kills_pvp, pks.deaths_pvp, " (Pvp)"
        elif WorldType.BOUNTY in world_types:
            kills, deaths, world = pks.kills_bounty, pks.deaths_bounty, " (Bounty)"

        response = (
            MessageBuilder()
            .append(NORMAL).append(f"Player kills{world}: ")
            .append(HIGHLIGHT).append(str(kills))
            .append(NORMAL).append(f"   deaths{world}: ")
            .append(HIGHLIGHT).append(str(deaths))
            .append(NORMAL).append("   ratio: ")
            .append(HIGHLIGHT).append(kd_ratio(kills, deaths))
            .build()
        )
        self.ctx.respond(chat_message, response)

    def player_kills_submit(self, chat_input: ChatInput, value: str) -> bool:
        store, player = self.ctx.store, self.ctx.username
        pks = PlayerKills(
            kills=store.get_kc(player, PLAYER_KILLS),
            deaths=store.get_kc(player, PLAYER_DEATHS),
            kills_bounty=store.get_kc(player, PLAYER_KILLS + " Bounty"),
            deaths_bounty=store.get_kc(player, PLAYER_DEATHS + " Bounty"),
            kills_pvp=store.get_kc(player, PLAYER_KILLS + " Pvp"),
            deaths_pvp=store.get_kc(player, PLAYER_DEATHS + " Pvp"),
        )
        if max(pks.model_dump().values()) <= 0:
            return False

        name = self.ctx.local_name
        self.ctx.pipeline.submit(
            chat_input, lambda: self.ctx.chat_client.submit_pvp_kills(name, pks), "player kills",
        )
        return True
