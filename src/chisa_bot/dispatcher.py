"""Inbound message dispatch.

Every inbound message goes through the same pipeline: rate limiting,
command parsing, then either the command registry or the free-text answer
handler. :meth:`Dispatcher.submit` runs each message on its own task so a
slow or failing handler never blocks or breaks the others.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Literal

from chisa_bot.messaging import InboundMessage, ReplySink
from chisa_bot.metrics import Metrics
from chisa_bot.parser import CommandParser
from chisa_bot.ratelimit import RateLimiter
from chisa_bot.registry import CommandContext, CommandRegistry

logger = logging.getLogger(__name__)

AnswerHandler = Callable[[InboundMessage], Awaitable[None]]


class Dispatcher:
    """Routes inbound messages to commands or to the answer handler."""

    def __init__(
        self,
        parser: CommandParser,
        registry: CommandRegistry,
        sink: ReplySink,
        limiter: RateLimiter | None = None,
        answer_handler: AnswerHandler | None = None,
        metrics: Metrics | None = None,
        rate_limit_scope: Literal["all", "commands"] = "all",
        groups_only: bool = False,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            parser: Command parser.
            registry: Registered commands.
            sink: Reply channel handed to command handlers.
            limiter: Optional rate limiter; None disables limiting.
            answer_handler: Receives non-command text (game answers).
            metrics: Optional metrics recorder.
            rate_limit_scope: "all" limits every message, "commands" only commands.
            groups_only: Ignore messages from private chats.
        """
        self.parser = parser
        self.registry = registry
        self.sink = sink
        self.limiter = limiter
        self.answer_handler = answer_handler
        self.metrics = metrics
        self.rate_limit_scope = rate_limit_scope
        self.groups_only = groups_only

        self._tasks: set[asyncio.Task[None]] = set()

    async def handle(self, message: InboundMessage) -> None:
        """Process one inbound message.

        Args:
            message: The message to route.
        """
        text = message.text
        if not text or not text.strip():
            return
        if self.groups_only and not message.is_group:
            return

        if self.metrics is not None:
            self.metrics.record_message()

        command = self.parser.parse(text)

        if not message.from_me and self._should_limit(command is not None):
            result = self.limiter.check(message.sender_id, message.chat_id)  # type: ignore[union-attr]
            if not result.allowed:
                logger.debug(
                    "Message rate limited",
                    extra={
                        "chat_id": message.chat_id,
                        "sender_id": message.sender_id,
                        "reason": result.value,
                    },
                )
                if self.metrics is not None:
                    self.metrics.record_rate_limited(result.value)
                return

        if command is not None:
            ctx = CommandContext(message=message, command=command, sink=self.sink)
            found = await self.registry.execute(command.name, ctx)
            if not found:
                logger.debug(
                    "Unknown command",
                    extra={"chat_id": message.chat_id, "command": command.name},
                )
            return

        if not message.from_me and self.answer_handler is not None:
            await self.answer_handler(message)

    def submit(self, message: InboundMessage) -> asyncio.Task[None]:
        """Handle a message on its own task.

        Faults inside the task are logged and swallowed.

        Returns:
            The created task.
        """
        task = asyncio.get_running_loop().create_task(self._handle_guarded(message))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def in_flight(self) -> int:
        """Number of messages still being handled."""
        return len(self._tasks)

    async def drain(self, timeout: float | None = None) -> None:
        """Wait for in-flight messages to finish.

        Args:
            timeout: Seconds to wait before cancelling what is left.
        """
        if not self._tasks:
            return
        tasks = list(self._tasks)
        _, pending = await asyncio.wait(tasks, timeout=timeout)
        for task in pending:
            task.cancel()
        if pending:
            logger.warning("Cancelled unfinished message handlers", extra={"count": len(pending)})
            await asyncio.gather(*pending, return_exceptions=True)

    def _should_limit(self, is_command: bool) -> bool:
        if self.limiter is None:
            return False
        return self.rate_limit_scope == "all" or is_command

    async def _handle_guarded(self, message: InboundMessage) -> None:
        try:
            await self.handle(message)
        except Exception as e:
            logger.exception(
                "Unhandled error while dispatching message",
                extra={"chat_id": message.chat_id, "error": str(e)},
            )
