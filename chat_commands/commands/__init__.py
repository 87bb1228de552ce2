"""Chat commands: registry, submission pipeline and command operations.

Dispatch for one chat line:
  1. ChatCommandManager.on_chat_message() matches the first word against the
     registered prefixes and awaits the command's lookup.
  2. The lookup resolves whose stats to show (CommandContext.player_for /
     hiscore_lookup_for), asks the store or a remote service, and rewrites
     the message node with the answer.

When the local player sends a command, ChatCommandManager.on_chatbox_input()
calls the command's submit. A submit returning True has handed the held
ChatInput to SubmissionPipeline, which resumes it when the push finishes.

Commands:
  !kc !pb !qp !gc !duels !pks   StatCommands      (lookup + submit)
  !lvl !total !cmb !clues       HiscoreCommands   (lookup)
  !price                        PriceCommands     (lookup)
"""

from .context import CommandContext, HiscoreLookup  # noqa: F401
from .hiscores import HiscoreCommands  # noqa: F401
from .prices import PriceCommands  # noqa: F401
from .registry import ChatCommand, ChatCommandManager, extract_command  # noqa: F401
from .stats import StatCommands  # noqa: F401
from .submission import ChatInput, SubmissionPipeline  # noqa: F401
