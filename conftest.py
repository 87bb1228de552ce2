from unittest.mock import AsyncMock, MagicMock

import pytest

from chat_commands.chat_client import ChatClient
from chat_commands.commands import CommandContext, SubmissionPipeline
from chat_commands.config import ChatCommandsConfig
from chat_commands.hiscore import HiscoreClient
from chat_commands.items import ItemClient
from chat_commands.plugin import ChatCommandsPlugin
from chat_commands.session import LocalSession
from chat_commands.store import ConfigStore, StatStore


@pytest.fixture
def store(tmp_path):
    """Fresh file-backed stat store under tmp_path for every test."""
    return StatStore(ConfigStore(tmp_path))


@pytest.fixture
def session():
    return LocalSession(username="Zezima")


@pytest.fixture
def chat_client():
    return MagicMock(spec=ChatClient, **{
        name: AsyncMock() for name in (
            "get_kc", "submit_kc", "get_pb", "submit_pb", "get_qp", "submit_qp",
            "get_gc", "submit_gc", "get_duels", "submit_duels",
            "get_pvp_kills", "submit_pvp_kills",
        )
    })


@pytest.fixture
def hiscore_client():
    return MagicMock(spec=HiscoreClient, lookup=AsyncMock(), lookup_skill=AsyncMock())


@pytest.fixture
def item_client():
    return MagicMock(spec=ItemClient, search=AsyncMock())


@pytest.fixture
def ctx(session, store, chat_client, hiscore_client, item_client):
    """Command context wired to the mocked clients, with every command enabled."""
    return CommandContext(
        session=session,
        store=store,
        config=ChatCommandsConfig(),
        chat_client=chat_client,
        hiscore_client=hiscore_client,
        item_client=item_client,
        pipeline=SubmissionPipeline(),
    )


@pytest.fixture
def plugin(session, store, chat_client, hiscore_client, item_client):
    p = ChatCommandsPlugin(
        session, store, ChatCommandsConfig(),
        chat_client=chat_client,
        hiscore_client=hiscore_client,
        item_client=item_client,
    )
    p.start_up()
    yield p
    p.shut_down()
