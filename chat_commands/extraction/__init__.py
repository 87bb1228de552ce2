"""Stat extraction from game messages.

Flow for one chat line:
  1. extract() tries RULES in priority order and returns one result
     (KillCount, FixedCount, Duration, DuelWin, DuelLoss or NoMatch).
  2. consume() writes the result to the stat store and returns the next
     CorrelationState, pairing kill counts with personal best durations.
  3. ChatTracker owns the state for the session and also reads the boss
     kill log and PvP counters from widgets.
"""

from .correlation import (  # noqa: F401
    EMPTY_STATE,
    CorrelationState,
    consume,
)
from .patterns import (  # noqa: F401
    NO_MATCH,
    RULES,
    DuelLoss,
    DuelWin,
    Duration,
    ExtractionResult,
    FixedCount,
    KillCount,
    NoMatch,
    extract,
    parse_duration,
)
from .tracker import ChatTracker  # noqa: F401
