"""End-to-end scenarios through ChatCommandsPlugin with mocked services.

Each test feeds host events in arrival order and checks the stat store, the
rewritten chat lines and the submissions that reached the chat service.
"""

import asyncio

from chat_commands.chat_client import ChatClientError
from chat_commands.commands import ChatInput
from chat_commands.extraction.correlation import DUEL_LOSE_STREAK, DUEL_WIN_STREAK, DUEL_WINS
from chat_commands.models import ChatMessage, ChatMessageType
from chat_commands.session import KILL_LOG_KILLS, KILL_LOG_MONSTER, KILL_LOG_TITLE, KILL_LOGS_GROUP, Widget
from chat_commands.store import KILLCOUNT, PERSONALBEST


# ── Helpers ──────────────────────────────────────────────


def game(text: str) -> ChatMessage:
    return ChatMessage(type=ChatMessageType.GAMEMESSAGE, message=text)


def said_by(name: str, text: str) -> ChatMessage:
    return ChatMessage(type=ChatMessageType.PUBLICCHAT, name=name, message=text)


# ── Scenarios ────────────────────────────────────────────


async def test_kill_then_lookup_then_submit(plugin, store, chat_client):
    await plugin.on_chat_message(game("Your Zulrah kill count is: <col=ff0000>42</col>"))
    assert store.get("zezima", "zulrah", KILLCOUNT) == 42

    await plugin.on_chat_message(game("duration: <col=ff0000>2:30</col> (new personal best)"))
    assert store.get("zezima", "zulrah", PERSONALBEST) == 150

    msg = said_by("Zezima", "!kc zulrah")
    await plugin.on_chat_message(msg)
    chat_client.get_kc.assert_not_awaited()
    assert "42" in msg.message_node.displayed

    resumed = []
    chat_input = ChatInput("!kc zulrah", on_resume=lambda: resumed.append(True))
    assert plugin.on_chatbox_input(chat_input) is True
    assert resumed == []
    await plugin.pipeline.drain()
    chat_client.submit_kc.assert_awaited_once_with("Zezima", "Zulrah", 42)
    assert resumed == [True]


async def test_submit_resumes_when_service_fails(plugin, store, chat_client):
    store.set_kc("Zezima", "Zulrah", 42)
    chat_client.submit_kc.side_effect = ChatClientError("down")
    chat_input = ChatInput("!kc zulrah")
    assert plugin.on_chatbox_input(chat_input) is True
    await plugin.pipeline.drain()
    assert chat_input.resumed


async def test_alias_resolves_before_store_lookup(plugin, store, chat_client):
    store.set_kc("Zezima", "TzTok-Jad", 3)
    msg = said_by("Zezima", "!kc jad")
    await plugin.on_chat_message(msg)
    assert msg.message_node.displayed == (
        "<colHIGHLIGHT>TzTok-Jad<colNORMAL> kill count: <colHIGHLIGHT>3"
    )

    chat_client.get_kc.return_value = 7
    msg = said_by("Lynx Titan", "!kc JAD")
    await plugin.on_chat_message(msg)
    chat_client.get_kc.assert_awaited_once_with("Lynx Titan", "TzTok-Jad")


async def test_duel_win_extends_streak(plugin, store):
    store.set_kc("Zezima", DUEL_WINS, 3)
    store.set_kc("Zezima", DUEL_LOSE_STREAK, 2)
    await plugin.on_chat_message(game("You won! You have now won 5 duels"))
    assert store.get_kc("Zezima", DUEL_WINS) == 5
    assert store.get_kc("Zezima", DUEL_WIN_STREAK) == 1
    assert store.get_kc("Zezima", DUEL_LOSE_STREAK) == 0


async def test_players_cannot_forge_stats(plugin, store):
    await plugin.on_chat_message(said_by("Troll", "Your Zulrah kill count is: <col=ff0000>9999</col>"))
    assert store.get_kc("Zezima", "Zulrah") == 0


async def test_game_messages_do_not_run_commands(plugin, chat_client):
    await plugin.on_chat_message(game("!qp"))
    chat_client.get_qp.assert_not_awaited()


async def test_raid_duration_before_count(plugin, store):
    await plugin.on_chat_message(game("Challenge duration: <col=ff0000>18:20</col>. Personal best: 17:55"))
    await plugin.on_chat_message(game("Congratulations - your raid is complete!"))
    await plugin.on_chat_message(game("Your completed Chambers of Xeric count is: <col=ff0000>11</col>."))
    assert store.get_kc("Zezima", "Chambers of Xeric") == 11
    assert store.get_pb("Zezima", "Chambers of Xeric") == 1075


async def test_kill_log_is_read_next_tick(plugin, session, store):
    session.widgets.update({
        KILL_LOG_TITLE: Widget(text="Boss Kill Log"),
        KILL_LOG_MONSTER: Widget(children=[Widget(text="Vorkath:")]),
        KILL_LOG_KILLS: Widget(children=[Widget(text="250")]),
    })
    plugin.on_widget_loaded(KILL_LOGS_GROUP)
    plugin.on_game_tick()
    assert store.get_kc("Zezima", "Vorkath") == 250


async def test_chat_keeps_flowing_during_submission(plugin, store, chat_client):
    release = asyncio.Event()

    async def slow_submit(*args):
        await release.wait()

    chat_client.submit_kc.side_effect = slow_submit
    store.set_kc("Zezima", "Zulrah", 42)
    chat_input = ChatInput("!kc zulrah")
    plugin.on_chatbox_input(chat_input)

    await plugin.on_chat_message(game("Your Zulrah kill count is: <col=ff0000>43</col>"))
    assert store.get_kc("Zezima", "Zulrah") == 43
    assert not chat_input.resumed

    release.set()
    await plugin.pipeline.drain()
    assert chat_input.resumed


async def test_shut_down_unregisters_commands(plugin, chat_client):
    plugin.shut_down()
    assert plugin.commands.prefixes == []
    await plugin.on_chat_message(said_by("Lynx Titan", "!qp"))
    chat_client.get_qp.assert_not_awaited()
    chat_input = ChatInput("!qp")
    assert plugin.on_chatbox_input(chat_input) is False
    assert chat_input.resumed
