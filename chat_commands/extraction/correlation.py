"""Kill count / personal best correlation.

A kill count line and a personal best line describe the same kill, but they
arrive as two separate messages and the order depends on the activity:

  count first     "Your Zulrah kill count is: 42" then "duration: 2:30 (new personal best)"
  duration first  "Challenge duration: 5:12. Personal best: 4:58" then "Your completed ... count is: 7"

CorrelationState remembers whichever half arrived first. It is an immutable
value; consume() takes the current state and returns the next one.

The two directions have different windows. A remembered subject is dropped by
the very next line that is neither a count nor a duration, so a duration must
follow its count immediately. A remembered duration waits for the next count
however many lines later it comes.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from chat_commands.store import StatStore

from .patterns import (
    DuelLoss,
    DuelWin,
    Duration,
    ExtractionResult,
    FixedCount,
    KillCount,
)

logger = logging.getLogger(__name__)

DUEL_WINS = "Duel Arena Wins"
DUEL_LOSSES = "Duel Arena Losses"
DUEL_WIN_STREAK = "Duel Arena Win Streak"
DUEL_LOSE_STREAK = "Duel Arena Lose Streak"


class CorrelationState(BaseModel):
    model_config = ConfigDict(frozen=True)

    pending_subject: str | None = None  # boss waiting for its duration
    pending_value: int | None = None  # seconds waiting for their boss


EMPTY_STATE = CorrelationState()


def consume(
    state: CorrelationState,
    result: ExtractionResult,
    store: StatStore,
    player: str,
) -> CorrelationState:
    """Apply one extraction result to the store and return the next state."""
    if isinstance(result, KillCount):
        store.set_kc(player, result.subject, result.count)
        if state.pending_value is not None:
            logger.debug(
                "Got out-of-order personal best for %s: %d",
                result.subject, state.pending_value,
            )
            store.set_pb(player, result.subject, state.pending_value)
            return EMPTY_STATE
        return CorrelationState(pending_subject=result.subject)

    if isinstance(result, Duration):
        if state.pending_subject is not None:
            logger.debug("Got personal best for %s: %d", state.pending_subject, result.seconds)
            store.set_pb(player, state.pending_subject, result.seconds)
            return EMPTY_STATE
        return CorrelationState(pending_value=result.seconds)

    if isinstance(result, FixedCount):
        store.set_kc(player, result.subject, result.count)
    elif isinstance(result, DuelWin):
        _record_duel_win(result, store, player)
    elif isinstance(result, DuelLoss):
        store.set_kc(player, DUEL_LOSSES, result.count)

    return state.model_copy(update={"pending_subject": None})


def _record_duel_win(result: DuelWin, store: StatStore, player: str) -> None:
    old_wins = store.get_kc(player, DUEL_WINS)
    winning_streak = store.get_kc(player, DUEL_WIN_STREAK)
    losing_streak = store.get_kc(player, DUEL_LOSE_STREAK)

    if result.outcome == "won" and result.count > old_wins:
        losing_streak = 0
        winning_streak += 1
    elif result.outcome == "were defeated":
        losing_streak += 1
        winning_streak = 0
    else:
        logger.warning("unrecognized duel streak chat message: %s wins=%d", result.outcome, result.count)

    store.set_kc(player, DUEL_WINS, result.count)
    store.set_kc(player, DUEL_WIN_STREAK, winning_streak)
    store.set_kc(player, DUEL_LOSE_STREAK, losing_streak)
