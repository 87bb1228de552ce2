"""Host session contract.

The game client that produces chat lines also owns the state the plugin
reads back: the logged-in account, world flags, varbits and on-screen widget
text. Plugin code only talks to it through this protocol:

    username            login name, used as the stat store player key
    local_player_name   in-game display name of the local player
    account_type        live account type (ironman status) of the local player
    world_types         flags of the current world (pvp, bounty, league, ...)
    is_in_instanced_region()
    get_var(name)       varbit / varplayer value, e.g. "QUEST_POINTS"
    get_widget(id)      widget tree for a widget id, or None when not loaded
    refresh_chat()      redraw the chatbox after a message was rewritten

LocalSession is an in-memory implementation used by the CLI and tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from pydantic import BaseModel, Field

from chat_commands.models import AccountType, WorldType

# Widget group ids reported by widget-loaded events
KILL_LOGS_GROUP = "kill_logs"
PVP_GROUP = "pvp"
WILDERNESS_STATISTICS_GROUP = "wilderness_statistics"

# Widget ids
KILL_LOG_TITLE = "kill_log.title"
KILL_LOG_MONSTER = "kill_log.monster"
KILL_LOG_KILLS = "kill_log.kills"
PVP_KILLDEATH_COUNTER = "pvp.killdeath_counter"
WILDERNESS_STATISTICS_KILLS = "wilderness_statistics.kills"

# Var names
QUEST_POINTS = "QUEST_POINTS"
BA_GC = "BA_GC"
PVP_KILLS = "PVP_KILLS"
PVP_DEATHS = "PVP_DEATHS"


class Widget(BaseModel):
    text: str = ""
    children: list[Widget] = Field(default_factory=list)

    def get_child(self, index: int) -> Widget | None:
        if 0 <= index < len(self.children):
            return self.children[index]
        return None


class Session(Protocol):
    @property
    def username(self) -> str: ...

    @property
    def local_player_name(self) -> str: ...

    @property
    def account_type(self) -> AccountType: ...

    @property
    def world_types(self) -> set[WorldType]: ...

    def is_in_instanced_region(self) -> bool: ...

    def get_var(self, name: str) -> int: ...

    def get_widget(self, widget_id: str) -> Widget | None: ...

    def refresh_chat(self) -> None: ...


@dataclass
class LocalSession:
    """Session backed by plain attributes; nothing is read from a live client."""

    username: str
    local_player_name: str = ""
    account_type: AccountType = AccountType.NORMAL
    world_types: set[WorldType] = field(default_factory=set)
    instanced: bool = False
    vars: dict[str, int] = field(default_factory=dict)
    widgets: dict[str, Widget] = field(default_factory=dict)
    chat_refreshes: int = 0

    def __post_init__(self) -> None:
        if not self.local_player_name:
            self.local_player_name = self.username

    def is_in_instanced_region(self) -> bool:
        return self.instanced

    def get_var(self, name: str) -> int:
        return self.vars.get(name, 0)

    def get_widget(self, widget_id: str) -> Widget | None:
        return self.widgets.get(widget_id)

    def refresh_chat(self) -> None:
        self.chat_refreshes += 1
