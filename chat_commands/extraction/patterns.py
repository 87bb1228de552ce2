"""Recognizers for game messages that report statistics.

Each rule pairs a compiled pattern with an extractor that turns the match into
one ExtractionResult. RULES is tried in order and the first rule whose
extractor returns a result wins, so a line yields at most one result.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Literal, Optional, Union

from pydantic import BaseModel


class KillCount(BaseModel):
    kind: Literal["kill_count"] = "kill_count"
    subject: str
    count: int


class FixedCount(BaseModel):
    """A count whose subject is implied by the message wording."""

    kind: Literal["fixed_count"] = "fixed_count"
    subject: str
    count: int


class Duration(BaseModel):
    kind: Literal["duration"] = "duration"
    seconds: int
    is_new_best: bool


class DuelWin(BaseModel):
    kind: Literal["duel_win"] = "duel_win"
    outcome: Literal["won", "were defeated"]
    count: int


class DuelLoss(BaseModel):
    kind: Literal["duel_loss"] = "duel_loss"
    count: int


class NoMatch(BaseModel):
    kind: Literal["no_match"] = "no_match"


ExtractionResult = Union[KillCount, FixedCount, Duration, DuelWin, DuelLoss, NoMatch]

NO_MATCH = NoMatch()

_DURATION_PREFIX = r"(?:Fight |Lap |Challenge |Corrupted challenge )?"

KILLCOUNT_PATTERN = re.compile(
    r"Your (.+) (?:kill|harvest|lap|completion) count is: <col=ff0000>(\d+)</col>"
)
RAIDS_PATTERN = re.compile(r"Your completed (.+) count is: <col=ff0000>(\d+)</col>")
WINTERTODT_PATTERN = re.compile(r"Your subdued Wintertodt count is: <col=ff0000>(\d+)</col>")
BARROWS_PATTERN = re.compile(r"Your Barrows chest count is: <col=ff0000>(\d+)</col>")
DUEL_ARENA_WINS_PATTERN = re.compile(r"You (were defeated|won)! You have(?: now)? won (\d+) duels?")
DUEL_ARENA_LOSSES_PATTERN = re.compile(r"You have(?: now)? lost (\d+) duels?")
KILL_DURATION_PATTERN = re.compile(
    rf"^{_DURATION_PREFIX}duration: <col=ff0000>[0-9:]+</col>\. Personal best: ([0-9:]+)",
    re.IGNORECASE,
)
NEW_PB_PATTERN = re.compile(
    rf"^{_DURATION_PREFIX}duration: <col=ff0000>([0-9:]+)</col> \(new personal best\)",
    re.IGNORECASE,
)


def parse_duration(text: str) -> int | None:
    """Convert strict "M:S" text to seconds.

    "2:30" → 150. Anything else, including "1:02:03", returns None.
    """
    parts = text.split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        return None
    return int(parts[0]) * 60 + int(parts[1])


# ---------------------------------------------------------------------------
# Extractors: each returns None when the match cannot be used
# ---------------------------------------------------------------------------

def _kill_count(m: re.Match) -> ExtractionResult:
    return KillCount(subject=m.group(1), count=int(m.group(2)))


def _wintertodt(m: re.Match) -> ExtractionResult:
    return FixedCount(subject="Wintertodt", count=int(m.group(1)))


def _barrows(m: re.Match) -> ExtractionResult:
    return FixedCount(subject="Barrows Chests", count=int(m.group(1)))


def _duel_win(m: re.Match) -> ExtractionResult:
    return DuelWin(outcome=m.group(1), count=int(m.group(2)))


def _duel_loss(m: re.Match) -> ExtractionResult:
    return DuelLoss(count=int(m.group(1)))


def _personal_best(m: re.Match) -> ExtractionResult | None:
    seconds = parse_duration(m.group(1))
    if seconds is None:
        return None
    return Duration(seconds=seconds, is_new_best=False)


def _new_personal_best(m: re.Match) -> ExtractionResult | None:
    seconds = parse_duration(m.group(1))
    if seconds is None:
        return None
    return Duration(seconds=seconds, is_new_best=True)


Extractor = Callable[[re.Match], Optional[ExtractionResult]]

RULES: tuple[tuple[str, re.Pattern, Extractor], ...] = (
    ("killcount", KILLCOUNT_PATTERN, _kill_count),
    ("raids", RAIDS_PATTERN, _kill_count),
    ("wintertodt", WINTERTODT_PATTERN, _wintertodt),
    ("barrows", BARROWS_PATTERN, _barrows),
    ("duel_wins", DUEL_ARENA_WINS_PATTERN, _duel_win),
    ("duel_losses", DUEL_ARENA_LOSSES_PATTERN, _duel_loss),
    ("kill_duration", KILL_DURATION_PATTERN, _personal_best),
    ("new_pb", NEW_PB_PATTERN, _new_personal_best),
)


def extract(line: str) -> ExtractionResult:
    """Classify one chat line. Returns NO_MATCH when no rule applies."""
    for _name, pattern, extractor in RULES:
        match = pattern.search(line)
        if match is None:
            continue
        result = extractor(match)
        if result is not None:
            return result
    return NO_MATCH
