"""Game event consumer that keeps the local player's stats up to date.

Chat lines go through extract() and consume(); the correlation state lives
here for the whole session. The boss kill log and the PvP kill/death
counters are read from widgets one tick after they load, since their text is
only populated by then.
"""

from __future__ import annotations

import logging
import re

from chat_commands.formatting import remove_tags
from chat_commands.models import ChatMessage, ChatMessageType, WorldType
from chat_commands.session import (
    KILL_LOG_KILLS,
    KILL_LOG_MONSTER,
    KILL_LOG_TITLE,
    KILL_LOGS_GROUP,
    PVP_DEATHS,
    PVP_GROUP,
    PVP_KILLDEATH_COUNTER,
    PVP_KILLS,
    WILDERNESS_STATISTICS_GROUP,
    WILDERNESS_STATISTICS_KILLS,
    Session,
)
from chat_commands.store import StatStore

from .correlation import EMPTY_STATE, CorrelationState, consume
from .patterns import ExtractionResult, extract

logger = logging.getLogger(__name__)

TRACKED_TYPES = frozenset({
    ChatMessageType.TRADE,
    ChatMessageType.GAMEMESSAGE,
    ChatMessageType.SPAM,
})

PLAYER_KILLS = "Player Kills"
PLAYER_DEATHS = "Player Deaths"

_WILDY_KILLS = re.compile(r"Kills:\s*([\d,]+)")
_WILDY_DEATHS = re.compile(r"Deaths:\s*([\d,]+)")


def world_suffix(world_types: set[WorldType]) -> str:
    """Category suffix for PvP stats on the current world."""
    if WorldType.PVP in world_types:
        return " Pvp"
    if WorldType.BOUNTY in world_types:
        return " Bounty"
    return ""


class ChatTracker:
    def __init__(self, session: Session, store: StatStore) -> None:
        self._session = session
        self._store = store
        self.state: CorrelationState = EMPTY_STATE
        self._log_kills = False
        self._log_pvp_kills = False

    @property
    def player(self) -> str:
        return self._session.username

    def reset(self) -> None:
        self.state = EMPTY_STATE
        self._log_kills = False
        self._log_pvp_kills = False

    # ------------------------------------------------------------------
    # Chat
    # ------------------------------------------------------------------

    def on_chat_message(self, chat_message: ChatMessage) -> ExtractionResult | None:
        """Parse a game message. Returns the extraction, or None if the type is ignored."""
        if chat_message.type not in TRACKED_TYPES:
            return None
        return self.process_line(chat_message.message)

    def process_line(self, line: str) -> ExtractionResult:
        result = extract(line)
        self.state = consume(self.state, result, self._store, self.player)
        return result

    # ------------------------------------------------------------------
    # Widgets
    # ------------------------------------------------------------------

    def on_widget_loaded(self, group_id: str) -> None:
        if group_id == PVP_GROUP:
            counter = self._session.get_widget(PVP_KILLDEATH_COUNTER)
            child = counter.get_child(0) if counter else None
            if child is not None and child.text:
                logger.debug("PVP KD interface is visible")
                self._log_pvp_kills = True
        elif group_id == WILDERNESS_STATISTICS_GROUP:
            logger.debug("Wilderness statistics board is visible")
            self._log_pvp_kills = True
        else:
            self._log_pvp_kills = False

        # Reading the log inside an instance would pick up another player's
        # house board.
        if group_id == KILL_LOGS_GROUP and not self._session.is_in_instanced_region():
            self._log_kills = True

    def on_game_tick(self) -> None:
        if self._log_pvp_kills:
            self._log_pvp_kills = False
            self._read_pvp_kills()

        if self._log_kills:
            self._log_kills = False
            self._read_kill_log()

    def _read_pvp_kills(self) -> None:
        suffix = world_suffix(self._session.world_types)
        kills_key = PLAYER_KILLS + suffix
        deaths_key = PLAYER_DEATHS + suffix
        kills = self._store.get_kc(self.player, kills_key)
        deaths = self._store.get_kc(self.player, deaths_key)

        counter = self._session.get_widget(PVP_KILLDEATH_COUNTER)
        child = counter.get_child(0) if counter else None
        if child is not None and child.text:
            kills = self._session.get_var(PVP_KILLS)
            deaths = self._session.get_var(PVP_DEATHS)

        board = self._session.get_widget(WILDERNESS_STATISTICS_KILLS)
        if board is not None and board.text:
            text = remove_tags(board.text)
            kills_match = _WILDY_KILLS.search(text)
            deaths_match = _WILDY_DEATHS.search(text)
            if kills_match and deaths_match:
                kills = int(kills_match.group(1).replace(",", ""))
                deaths = int(deaths_match.group(1).replace(",", ""))
            else:
                logger.debug("unreadable wilderness statistics text: %r", board.text)

        logger.debug("Pvp kills: %d deaths: %d%s", kills, deaths, suffix)
        if kills != self._store.get_kc(self.player, kills_key):
            self._store.set_kc(self.player, kills_key, kills)
        if deaths != self._store.get_kc(self.player, deaths_key):
            self._store.set_kc(self.player, deaths_key, deaths)

    def _read_kill_log(self) -> None:
        title = self._session.get_widget(KILL_LOG_TITLE)
        monsters = self._session.get_widget(KILL_LOG_MONSTER)
        kills = self._session.get_widget(KILL_LOG_KILLS)
        if title is None or monsters is None or kills is None or title.text != "Boss Kill Log":
            return

        for boss_widget, kill_widget in zip(monsters.children, kills.children):
            boss = boss_widget.text.replace(":", "")
            try:
                kc = int(kill_widget.text.replace(",", ""))
            except ValueError:
                logger.debug("skipping kill log row %r: %r", boss, kill_widget.text)
                continue
            if kc != self._store.get_kc(self.player, boss):
                self._store.set_kc(self.player, boss, kc)
