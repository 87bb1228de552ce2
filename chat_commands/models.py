"""Core domain models.

Chat events, remote service records and hiscore data all pass through these
types. Pydantic is used for validation and serialisation at every data
boundary (service responses, stored config).
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ChatMessageType(str, Enum):
    """Chat channel a message arrived on."""

    GAMEMESSAGE = "gamemessage"
    SPAM = "spam"
    TRADE = "trade"
    PUBLICCHAT = "publicchat"
    MODCHAT = "modchat"
    PRIVATECHAT = "privatechat"
    MODPRIVATECHAT = "modprivatechat"
    PRIVATECHATOUT = "privatechatout"
    FRIENDSCHAT = "friendschat"
    CLANCHAT = "clanchat"


class AccountType(str, Enum):
    NORMAL = "normal"
    IRONMAN = "ironman"
    ULTIMATE_IRONMAN = "ultimate_ironman"
    HARDCORE_IRONMAN = "hardcore_ironman"


class WorldType(str, Enum):
    MEMBERS = "members"
    PVP = "pvp"
    BOUNTY = "bounty"
    LEAGUE = "league"


class MessageNode(BaseModel):
    """Displayed form of a chat line. Lookups rewrite it in place."""

    value: str
    runelite_format_message: str | None = None

    @property
    def displayed(self) -> str:
        if self.runelite_format_message is not None:
            return self.runelite_format_message
        return self.value


class ChatMessage(BaseModel):
    """A single chat line delivered by the host session."""

    type: ChatMessageType
    name: str = ""  # sender, may carry <img=N> account icons
    message: str
    message_node: MessageNode | None = None

    def model_post_init(self, __context: object) -> None:
        if self.message_node is None:
            self.message_node = MessageNode(value=self.message)


# ---------------------------------------------------------------------------
# Chat service records
# ---------------------------------------------------------------------------

class Duels(BaseModel):
    """Duel arena record as stored by the chat service."""

    model_config = ConfigDict(populate_by_name=True)

    wins: int = 0
    losses: int = 0
    winning_streak: int = Field(0, alias="winningStreak")
    losing_streak: int = Field(0, alias="losingStreak")


class PlayerKills(BaseModel):
    """Player kill/death record, with bounty and pvp world variants."""

    model_config = ConfigDict(populate_by_name=True)

    kills: int = 0
    deaths: int = 0
    kills_bounty: int = Field(0, alias="killsBounty")
    deaths_bounty: int = Field(0, alias="deathsBounty")
    kills_pvp: int = Field(0, alias="killsPvp")
    deaths_pvp: int = Field(0, alias="deathsPvp")


class ItemPrice(BaseModel):
    """Item search hit from the price service."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    price: int  # grand exchange average
    store_price: int = Field(0, alias="storePrice")
