"""Chat commands: offline launcher. Replays chat logs and runs commands locally."""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from chat_commands.commands import ChatInput
from chat_commands.models import ChatMessage, ChatMessageType
from chat_commands.plugin import ChatCommandsPlugin
from chat_commands.session import LocalSession
from chat_commands.store import KILLCOUNT, PERSONALBEST

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

DEFAULT_DATA_DIR = Path(os.getenv("DATA_DIR", str(ROOT / "data")))


def _print_stats(plugin: ChatCommandsPlugin, player: str) -> None:
    store = plugin.ctx.store
    for namespace in (KILLCOUNT, PERSONALBEST):
        values = store.all(player, namespace)
        print(f"{namespace}.{player.lower()}:")
        for key, value in sorted(values.items()):
            print(f"  {key} = {value}")


async def _replay(plugin: ChatCommandsPlugin, path: Path) -> None:
    with open(path) as f:
        for line in f:
            line = line.rstrip("\n")
            if not line:
                continue
            await plugin.on_chat_message(
                ChatMessage(type=ChatMessageType.GAMEMESSAGE, message=line)
            )


async def _command(plugin: ChatCommandsPlugin, text: str) -> None:
    msg = ChatMessage(type=ChatMessageType.PRIVATECHATOUT, message=text)
    await plugin.on_chat_message(msg)
    print(msg.message_node.displayed)


async def _submit(plugin: ChatCommandsPlugin, text: str) -> None:
    chat_input = ChatInput(text, on_resume=lambda: print(f"sent: {text}"))
    started = plugin.on_chatbox_input(chat_input)
    if started:
        await plugin.pipeline.drain()
    else:
        print("nothing to submit")


def main():
    parser = argparse.ArgumentParser(description="Chat commands offline launcher")
    parser.add_argument("--data-dir", type=Path, default=DEFAULT_DATA_DIR,
                        help="Stat and config storage directory (default: ./data)")
    parser.add_argument("--player", required=True,
                        help="Login name of the local player")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Debug logging")
    sub = parser.add_subparsers(dest="action", required=True)

    replay = sub.add_parser("replay", help="Feed a chat log (one game message per line)")
    replay.add_argument("file", type=Path)

    command = sub.add_parser("command", help="Run a command lookup as the local player")
    command.add_argument("text")

    submit = sub.add_parser("submit", help="Submit local stats for a command")
    submit.add_argument("text")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    session = LocalSession(username=args.player)
    plugin = ChatCommandsPlugin.from_data_dir(session, args.data_dir)
    plugin.start_up()

    try:
        if args.action == "replay":
            asyncio.run(_replay(plugin, args.file))
            _print_stats(plugin, args.player)
        elif args.action == "command":
            asyncio.run(_command(plugin, args.text))
        elif args.action == "submit":
            asyncio.run(_submit(plugin, args.text))
    except FileNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        plugin.shut_down()


if __name__ == "__main__":
    main()
