"""Asynchronous submission of local stats to the chat service.

Submitting happens when the local player sends a command ("!kc zulrah"): the
outgoing message is held while the stat is pushed, so other players' lookups
already see the new value when the message arrives. The held message is a
ChatInput; resuming it lets the send continue.

SubmissionPipeline.submit() schedules the network call as an asyncio task and
returns immediately, so the event loop keeps processing chat while the
request is in flight. The task resumes the ChatInput when the call finishes,
whatever the outcome. Failed submissions are logged and dropped; there are no
retries and shutdown does not cancel tasks that are already running.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class ChatInput:
    """An outgoing chat message held until resume() is called."""

    def __init__(self, value: str, on_resume: Callable[[], None] | None = None) -> None:
        self.value = value
        self._on_resume = on_resume
        self.resumed = False

    def resume(self) -> None:
        if self.resumed:
            logger.warning("chat input %r resumed more than once", self.value)
            return
        self.resumed = True
        if self._on_resume is not None:
            self._on_resume()


class SubmissionPipeline:
    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def submit(
        self,
        chat_input: ChatInput,
        call: Callable[[], Awaitable[None]],
        description: str,
    ) -> asyncio.Task:
        """Run call() in the background and resume chat_input when it ends."""
        task = asyncio.get_running_loop().create_task(self._run(chat_input, call, description))
        self._tasks.add(task)

        def _done(t: asyncio.Task) -> None:
            self._tasks.discard(t)
            # A task cancelled before its first step never reaches the finally.
            if t.cancelled() and not chat_input.resumed:
                chat_input.resume()

        task.add_done_callback(_done)
        return task

    async def _run(
        self,
        chat_input: ChatInput,
        call: Callable[[], Awaitable[None]],
        description: str,
    ) -> None:
        try:
            await call()
            logger.debug("submitted %s", description)
        except Exception:
            logger.warning("unable to submit %s", description, exc_info=True)
        finally:
            chat_input.resume()

    async def drain(self) -> None:
        """Wait for every in-flight submission to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
