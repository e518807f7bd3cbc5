"""Command registry with per-invocation failure containment."""

from __future__ import annotations

import logging
import threading
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from chisa_bot.exceptions import UserInputError
from chisa_bot.messages import MSG_ERROR
from chisa_bot.messaging import InboundMessage, Mention, ReplySink
from chisa_bot.metrics import Metrics
from chisa_bot.parser import ParsedCommand

logger = logging.getLogger(__name__)


@dataclass
class CommandContext:
    """Everything a command handler needs for one invocation.

    Attributes:
        message: The inbound message that carried the command.
        command: The parsed command.
        sink: Where replies are sent.
    """

    message: InboundMessage
    command: ParsedCommand
    sink: ReplySink

    @property
    def chat_id(self) -> str:
        return self.message.chat_id

    @property
    def args(self) -> tuple[str, ...]:
        return self.command.args

    @property
    def raw_args(self) -> str:
        return self.command.raw_args

    async def reply(self, text: str, mentions: Sequence[Mention] = ()) -> None:
        """Reply to the command message in its chat."""
        await self.sink.send_text(
            self.message.chat_id,
            text,
            mentions=mentions,
            reply_to=self.message.message_id,
        )

    async def send(self, text: str, mentions: Sequence[Mention] = ()) -> None:
        """Send a message to the chat without quoting the command."""
        await self.sink.send_text(self.message.chat_id, text, mentions=mentions)


CommandHandler = Callable[[CommandContext], Awaitable[None]]


class CommandRegistry:
    """Maps case-insensitive command names to async handlers.

    Aliases are simply additional names for the same handler. Registration
    is expected at startup; lookups are safe from any thread.
    """

    def __init__(self, metrics: Metrics | None = None) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._lock = threading.Lock()
        self._metrics = metrics

    def register(self, handler: CommandHandler, *names: str) -> None:
        """Register a handler under one or more names.

        Args:
            handler: Async callable taking a CommandContext.
            *names: Command name followed by its aliases.

        Raises:
            ValueError: If no name is given or a name is already taken.
        """
        if not names:
            raise ValueError("At least one command name is required")
        with self._lock:
            for name in names:
                key = name.lower()
                if key in self._handlers:
                    raise ValueError(f"Command already registered: {key}")
                self._handlers[key] = handler

    def get(self, name: str) -> CommandHandler | None:
        with self._lock:
            return self._handlers.get(name.lower())

    def names(self) -> list[str]:
        """Get all registered names, sorted."""
        with self._lock:
            return sorted(self._handlers)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    async def execute(self, name: str, ctx: CommandContext) -> bool:
        """Run the handler registered under ``name``.

        User-input errors are replied to the chat; any other handler failure
        is logged, counted and answered with a generic notice. Nothing
        propagates to the caller.

        Args:
            name: Command name (case-insensitive).
            ctx: Invocation context.

        Returns:
            True if a handler was found, False for unknown commands.
        """
        handler = self.get(name)
        if handler is None:
            return False

        key = name.lower()
        if self._metrics is not None:
            self._metrics.record_command(key)

        try:
            await handler(ctx)
        except UserInputError as e:
            logger.info(
                "Command rejected",
                extra={"command": key, "chat_id": ctx.chat_id, "reason": e.message},
            )
            await self._safe_reply(ctx, e.message)
        except Exception as e:
            logger.exception(
                "Command handler failed",
                extra={"command": key, "chat_id": ctx.chat_id, "error": str(e)},
            )
            if self._metrics is not None:
                self._metrics.record_error(key)
            await self._safe_reply(ctx, MSG_ERROR)
        return True

    async def _safe_reply(self, ctx: CommandContext, text: str) -> None:
        try:
            await ctx.reply(text)
        except Exception as e:
            logger.warning(
                "Failed to send error notice",
                extra={"chat_id": ctx.chat_id, "error": str(e)},
            )
