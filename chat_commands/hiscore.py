"""Hiscore lookups and combat level math.

The hiscore service answers one CSV line per entry, in a fixed order:

    rank,level,experience   one line per skill, starting with Overall
    rank,score              one line per activity (clue scrolls, ...)

Unranked entries are reported as -1. Each account type has its own
leaderboard, selected by HiscoreEndpoint.
"""

from __future__ import annotations

import logging
import math
from enum import Enum

import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_HISCORE_URL = "https://secure.runescape.com"


class HiscoreError(RuntimeError):
    """Raised when the hiscore service cannot be reached or returns an error."""


class HiscoreEndpoint(str, Enum):
    NORMAL = "hiscore_oldschool"
    IRONMAN = "hiscore_oldschool_ironman"
    ULTIMATE_IRONMAN = "hiscore_oldschool_ultimate"
    HARDCORE_IRONMAN = "hiscore_oldschool_hardcore_ironman"
    LEAGUE = "hiscore_oldschool_seasonal"


class HiscoreSkill(str, Enum):
    OVERALL = "Overall"
    ATTACK = "Attack"
    DEFENCE = "Defence"
    STRENGTH = "Strength"
    HITPOINTS = "Hitpoints"
    RANGED = "Ranged"
    PRAYER = "Prayer"
    MAGIC = "Magic"
    COOKING = "Cooking"
    WOODCUTTING = "Woodcutting"
    FLETCHING = "Fletching"
    FISHING = "Fishing"
    FIREMAKING = "Firemaking"
    CRAFTING = "Crafting"
    SMITHING = "Smithing"
    MINING = "Mining"
    HERBLORE = "Herblore"
    AGILITY = "Agility"
    THIEVING = "Thieving"
    SLAYER = "Slayer"
    FARMING = "Farming"
    RUNECRAFT = "Runecraft"
    HUNTER = "Hunter"
    CONSTRUCTION = "Construction"
    LEAGUE_POINTS = "League Points"
    BOUNTY_HUNTER_HUNTER = "Bounty Hunter - Hunter"
    BOUNTY_HUNTER_ROGUE = "Bounty Hunter - Rogue"
    CLUE_SCROLL_ALL = "Clue Scrolls (all)"
    CLUE_SCROLL_BEGINNER = "Clue Scrolls (beginner)"
    CLUE_SCROLL_EASY = "Clue Scrolls (easy)"
    CLUE_SCROLL_MEDIUM = "Clue Scrolls (medium)"
    CLUE_SCROLL_HARD = "Clue Scrolls (hard)"
    CLUE_SCROLL_ELITE = "Clue Scrolls (elite)"
    CLUE_SCROLL_MASTER = "Clue Scrolls (master)"
    LAST_MAN_STANDING = "LMS - Rank"

    @classmethod
    def by_name(cls, name: str) -> HiscoreSkill | None:
        """Look up a member from user input ("woodcutting", "Overall")."""
        try:
            return cls[name.strip().upper().replace(" ", "_")]
        except KeyError:
            return None


# Line order of the index_lite response; member definition order above.
HISCORE_ORDER: tuple[HiscoreSkill, ...] = tuple(HiscoreSkill)
SKILL_COUNT = 24


class Skill(BaseModel):
    rank: int
    level: int  # score for activities
    experience: int = -1


class HiscoreResult(BaseModel):
    player: str
    skills: dict[HiscoreSkill, Skill]

    def get(self, skill: HiscoreSkill) -> Skill | None:
        return self.skills.get(skill)

    def level(self, skill: HiscoreSkill) -> int:
        entry = self.skills.get(skill)
        return entry.level if entry else 1


def parse_index_lite(player: str, text: str) -> HiscoreResult:
    """Parse the CSV body of an index_lite response."""
    skills: dict[HiscoreSkill, Skill] = {}
    lines = [line for line in text.strip().splitlines() if line.strip()]
    for i, (hs, line) in enumerate(zip(HISCORE_ORDER, lines)):
        fields = line.strip().split(",")
        try:
            values = [int(f) for f in fields]
        except ValueError as e:
            raise HiscoreError(f"Malformed hiscore line {i}: {line!r}") from e
        if i < SKILL_COUNT:
            if len(values) != 3:
                raise HiscoreError(f"Malformed hiscore skill line {i}: {line!r}")
            skills[hs] = Skill(rank=values[0], level=values[1], experience=values[2])
        else:
            if len(values) != 2:
                raise HiscoreError(f"Malformed hiscore activity line {i}: {line!r}")
            skills[hs] = Skill(rank=values[0], level=values[1])
    return HiscoreResult(player=player, skills=skills)


def combat_level(
    attack: int, strength: int, defence: int, hitpoints: int,
    magic: int, ranged: int, prayer: int,
) -> int:
    base = 0.25 * (defence + hitpoints + math.floor(prayer / 2))
    melee = 0.325 * (attack + strength)
    range_ = 0.325 * (math.floor(ranged / 2) + ranged)
    mage = 0.325 * (math.floor(magic / 2) + magic)
    return int(base + max(melee, range_, mage))


class HiscoreClient:
    """Async HTTP client for the hiscore service.

    Args:
        base_url: Service root, e.g. "https://secure.runescape.com".
        timeout:  HTTP timeout in seconds. Defaults to 10.
    """

    def __init__(self, base_url: str = DEFAULT_HISCORE_URL, timeout: float = 10.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def lookup(
        self, player: str, endpoint: HiscoreEndpoint = HiscoreEndpoint.NORMAL
    ) -> HiscoreResult | None:
        """Fetch every entry for a player. Returns None if the player is unranked."""
        url = f"{self._base_url}/m={endpoint.value}/index_lite.ws"
        logger.debug("hiscore lookup player=%s url=%s", player, url)
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.get(url, params={"player": player})
                if resp.status_code == 404:
                    return None
                resp.raise_for_status()
        except httpx.ConnectError as e:
            raise HiscoreError(f"Cannot connect to hiscore service at {self._base_url}") from e
        except httpx.HTTPStatusError as e:
            raise HiscoreError(f"Hiscore service returned HTTP {e.response.status_code}") from e
        except httpx.TimeoutException as e:
            raise HiscoreError(f"Hiscore service timed out after {self._timeout}s") from e
        except httpx.TransportError as e:
            raise HiscoreError(f"Hiscore service connection failed: {e}") from e

        return parse_index_lite(player, resp.text)

    async def lookup_skill(
        self, player: str, skill: HiscoreSkill, endpoint: HiscoreEndpoint = HiscoreEndpoint.NORMAL
    ) -> Skill | None:
        result = await self.lookup(player, endpoint)
        if result is None:
            return None
        return result.get(skill)
