"""Hiscore commands: !lvl, !total, !cmb, !clues. Lookup only."""

from __future__ import annotations

import logging

from chat_commands import aliases
from chat_commands.formatting import HIGHLIGHT, NORMAL, MessageBuilder, format_number
from chat_commands.hiscore import HiscoreError, HiscoreSkill, combat_level
from chat_commands.models import ChatMessage

from .context import CommandContext
from .registry import extract_command
from .stats import command_argument

logger = logging.getLogger(__name__)

TOTAL_LEVEL_COMMAND = "!total"
LEVEL_COMMAND = "!lvl"
CMB_COMMAND = "!cmb"
CLUES_COMMAND = "!clues"

CLUE_TIERS = {
    "beginner": HiscoreSkill.CLUE_SCROLL_BEGINNER,
    "easy": HiscoreSkill.CLUE_SCROLL_EASY,
    "medium": HiscoreSkill.CLUE_SCROLL_MEDIUM,
    "hard": HiscoreSkill.CLUE_SCROLL_HARD,
    "elite": HiscoreSkill.CLUE_SCROLL_ELITE,
    "master": HiscoreSkill.CLUE_SCROLL_MASTER,
    "total": HiscoreSkill.CLUE_SCROLL_ALL,
}


class HiscoreCommands:
    def __init__(self, ctx: CommandContext) -> None:
        self.ctx = ctx

    async def player_skill_lookup(self, chat_message: ChatMessage, message: str) -> None:
        """!lvl <skill> and !total."""
        if not self.ctx.config.lvl:
            return

        if extract_command(message) == TOTAL_LEVEL_COMMAND:
            search = "total"
        else:
            search = command_argument(message, LEVEL_COMMAND)
            if not search:
                return

        skill = HiscoreSkill.by_name(aliases.skill_full_name(search))
        if skill is None:
            return

        lookup = self.ctx.hiscore_lookup_for(chat_message)
        try:
            result = await self.ctx.hiscore_client.lookup_skill(lookup.name, skill, lookup.endpoint)
        except HiscoreError:
            logger.warning("unable to look up skill %s for %s", skill.value, lookup.name, exc_info=True)
            return

        if result is None:
            logger.warning("unable to look up skill %s for %s: not found", skill.value, lookup.name)
            return

        response = (
            MessageBuilder()
            .append(NORMAL).append("Level ")
            .append(HIGHLIGHT).append(f"{skill.value}: {result.level}")
            .append(NORMAL).append(" Experience: ")
            .append(HIGHLIGHT).append(format_number(result.experience))
            .append(NORMAL).append(" Rank: ")
            .append(HIGHLIGHT).append(format_number(result.rank))
            .build()
        )
        self.ctx.respond(chat_message, response)

    async def combat_level_lookup(self, chat_message: ChatMessage, message: str) -> None:
        if not self.ctx.config.lvl:
            return

        lookup = self.ctx.hiscore_lookup_for(chat_message)
        try:
            stats = await self.ctx.hiscore_client.lookup(lookup.name, lookup.endpoint)
        except HiscoreError:
            logger.warning("Error fetching hiscore data", exc_info=True)
            return

        if stats is None:
            logger.warning("Error fetching hiscore data: not found")
            return

        attack = stats.level(HiscoreSkill.ATTACK)
        strength = stats.level(HiscoreSkill.STRENGTH)
        defence = stats.level(HiscoreSkill.DEFENCE)
        hitpoints = stats.level(HiscoreSkill.HITPOINTS)
        ranged = stats.level(HiscoreSkill.RANGED)
        prayer = stats.level(HiscoreSkill.PRAYER)
        magic = stats.level(HiscoreSkill.MAGIC)
        combat = combat_level(attack, strength, defence, hitpoints, magic, ranged, prayer)

        builder = MessageBuilder().append(NORMAL).append("Combat Level: ").append(HIGHLIGHT).append(str(combat))
        for label, level in (
            ("A", attack), ("S", strength), ("D", defence), ("H", hitpoints),
            ("R", ranged), ("P", prayer), ("M", magic),
        ):
            builder.append(NORMAL).append(f" {label}: ").append(HIGHLIGHT).append(str(level))
        self.ctx.respond(chat_message, builder.build())

    async def clue_lookup(self, chat_message: ChatMessage, message: str) -> None:
        if not self.ctx.config.clue:
            return

        if message.strip().lower() == CLUES_COMMAND:
            level = "total"
        else:
            level = command_argument(message, CLUES_COMMAND).lower()

        tier = CLUE_TIERS.get(level)
        if tier is None:
            return

        lookup = self.ctx.hiscore_lookup_for(chat_message)
        try:
            result = await self.ctx.hiscore_client.lookup(lookup.name, lookup.endpoint)
        except HiscoreError:
            logger.warning("error looking up clues", exc_info=True)
            return

        if result is None:
            logger.warning("error looking up clues: not found")
            return

        entry = result.get(tier)
        if entry is None or entry.level == -1:
            return

        builder = (
            MessageBuilder()
            .append(NORMAL).append(f"Clue scroll ({level}): ")
            .append(HIGHLIGHT).append(str(entry.level))
        )
        if entry.rank != -1:
            builder.append(NORMAL).append(" Rank: ").append(HIGHLIGHT).append(format_number(entry.rank))
        self.ctx.respond(chat_message, builder.build())
