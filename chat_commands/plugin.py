"""Chat commands plugin: wires extraction, storage and commands to a session.

The host delivers events in arrival order on one event loop:

    on_chat_message     game messages update stats; command messages run lookups
    on_chatbox_input    outgoing command messages run submits
    on_widget_loaded    kill log / PvP widgets are queued for reading
    on_game_tick        queued widgets are read
    on_varbit_changed   local hiscore endpoint is recomputed

start_up() registers every command; shut_down() unregisters them and drops
the correlation state. Submissions already in flight are left to finish.
"""

from __future__ import annotations

import logging
from pathlib import Path

from chat_commands.chat_client import ChatClient
from chat_commands.commands import (
    ChatCommandManager,
    ChatInput,
    CommandContext,
    HiscoreCommands,
    PriceCommands,
    StatCommands,
    SubmissionPipeline,
)
from chat_commands.commands.hiscores import (
    CLUES_COMMAND,
    CMB_COMMAND,
    LEVEL_COMMAND,
    TOTAL_LEVEL_COMMAND,
)
from chat_commands.commands.prices import PRICE_COMMAND
from chat_commands.commands.stats import (
    DUEL_ARENA_COMMAND,
    GC_COMMAND,
    KILLCOUNT_COMMAND,
    PB_COMMAND,
    PLAYER_KILLS_COMMAND,
    QP_COMMAND,
)
from chat_commands.config import ChatCommandsConfig, load_config
from chat_commands.extraction import ChatTracker
from chat_commands.hiscore import HiscoreClient
from chat_commands.items import ItemClient
from chat_commands.models import ChatMessage
from chat_commands.session import Session
from chat_commands.store import ConfigStore, StatStore

logger = logging.getLogger(__name__)


class ChatCommandsPlugin:
    def __init__(
        self,
        session: Session,
        store: StatStore,
        config: ChatCommandsConfig,
        chat_client: ChatClient | None = None,
        hiscore_client: HiscoreClient | None = None,
        item_client: ItemClient | None = None,
    ) -> None:
        self.session = session
        self.ctx = CommandContext(
            session=session,
            store=store,
            config=config,
            chat_client=chat_client or ChatClient(config.chat_service_url),
            hiscore_client=hiscore_client or HiscoreClient(config.hiscore_url),
            item_client=item_client or ItemClient(config.price_service_url),
            pipeline=SubmissionPipeline(),
        )
        self.tracker = ChatTracker(session, store)
        self.commands = ChatCommandManager()
        self.stats = StatCommands(self.ctx)
        self.hiscores = HiscoreCommands(self.ctx)
        self.prices = PriceCommands(self.ctx)

    @classmethod
    def from_data_dir(cls, session: Session, data_dir: Path) -> ChatCommandsPlugin:
        """Build a plugin with a file store and config under data_dir."""
        store = StatStore(ConfigStore(data_dir))
        return cls(session, store, load_config(data_dir))

    @property
    def pipeline(self) -> SubmissionPipeline:
        return self.ctx.pipeline

    def start_up(self) -> None:
        register = self.commands.register
        register(TOTAL_LEVEL_COMMAND, self.hiscores.player_skill_lookup)
        register(CMB_COMMAND, self.hiscores.combat_level_lookup)
        register(PRICE_COMMAND, self.prices.item_price_lookup)
        register(LEVEL_COMMAND, self.hiscores.player_skill_lookup)
        register(CLUES_COMMAND, self.hiscores.clue_lookup)
        register(KILLCOUNT_COMMAND, self.stats.kill_count_lookup, self.stats.kill_count_submit)
        register(QP_COMMAND, self.stats.quest_points_lookup, self.stats.quest_points_submit)
        register(PB_COMMAND, self.stats.personal_best_lookup, self.stats.personal_best_submit)
        register(GC_COMMAND, self.stats.gamble_count_lookup, self.stats.gamble_count_submit)
        register(DUEL_ARENA_COMMAND, self.stats.duel_arena_lookup, self.stats.duel_arena_submit)
        register(PLAYER_KILLS_COMMAND, self.stats.player_kills_lookup, self.stats.player_kills_submit)
        self.ctx.refresh_hiscore_endpoint()
        logger.debug("registered commands: %s", ", ".join(self.commands.prefixes))

    def shut_down(self) -> None:
        self.tracker.reset()
        for prefix in self.commands.prefixes:
            self.commands.unregister(prefix)

    # ------------------------------------------------------------------
    # Host events
    # ------------------------------------------------------------------

    async def on_chat_message(self, chat_message: ChatMessage) -> None:
        if self.tracker.on_chat_message(chat_message) is None:
            await self.commands.on_chat_message(chat_message)

    def on_chatbox_input(self, chat_input: ChatInput) -> bool:
        return self.commands.on_chatbox_input(chat_input)

    def on_widget_loaded(self, group_id: str) -> None:
        self.tracker.on_widget_loaded(group_id)

    def on_game_tick(self) -> None:
        self.tracker.on_game_tick()

    def on_varbit_changed(self) -> None:
        self.ctx.refresh_hiscore_endpoint()
