"""Telegram adapter using aiogram 3.x.

This module connects the transport-neutral core to Telegram:
- Converts incoming messages into InboundMessage and submits them to the dispatcher
- Implements ReplySink (with retry and Markdown fallback) and GroupAdmin
- Greets members on join/leave
- Starts and stops background maintenance with the polling lifecycle
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from functools import partial
from typing import Any

from aiogram import Bot, Dispatcher, F, types
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ChatMemberStatus, ChatType, MessageEntityType, ParseMode
from aiogram.exceptions import (
    TelegramAPIError,
    TelegramBadRequest,
    TelegramNetworkError,
    TelegramRetryAfter,
)
from aiogram.types import BotCommand, BufferedInputFile, ReplyParameters

from chisa_bot.app import Services, create_services
from chisa_bot.config import Settings
from chisa_bot.exceptions import ExternalServiceError
from chisa_bot.messaging import InboundMessage, Mention, OutboundMedia

logger = logging.getLogger(__name__)

GROUP_CHAT_TYPES = (ChatType.GROUP, ChatType.SUPERGROUP)
ADMIN_STATUSES = (ChatMemberStatus.ADMINISTRATOR, ChatMemberStatus.CREATOR)

BOT_COMMANDS = (
    BotCommand(command="menu", description="Daftar perintah"),
    BotCommand(command="tebakkata", description="Game tebak kata"),
    BotCommand(command="kuis", description="Kuis pengetahuan"),
    BotCommand(command="leaderboard", description="Papan skor"),
    BotCommand(command="stats", description="Statistik bot"),
)


async def send_with_retry(
    send_func: Callable[[], Awaitable[types.Message | bool | None]],
    max_retries: int = 3,
    base_delay: float = 1.0,
) -> types.Message | bool | None:
    """Execute a send function with retry logic for Telegram API errors.

    Handles:
    - TelegramRetryAfter: Wait specified time and retry
    - TelegramNetworkError: Exponential backoff retry
    - TelegramBadRequest: Re-raise Markdown errors, log and return None otherwise

    Args:
        send_func: Async function that sends a message.
        max_retries: Maximum number of retry attempts.
        base_delay: Base delay for exponential backoff.

    Returns:
        Result of send_func or None if all retries failed.
    """
    last_error: Exception | None = None

    for attempt in range(max_retries + 1):
        try:
            return await send_func()
        except TelegramRetryAfter as e:
            wait_time = e.retry_after
            logger.warning(
                "Rate limited by Telegram, waiting",
                extra={"retry_after": wait_time, "attempt": attempt},
            )
            await asyncio.sleep(wait_time)
            last_error = e
        except TelegramNetworkError as e:
            if attempt < max_retries:
                delay = base_delay * (2**attempt)
                logger.warning(
                    "Network error, retrying",
                    extra={"error": str(e), "delay": delay, "attempt": attempt},
                )
                await asyncio.sleep(delay)
            last_error = e
        except TelegramBadRequest as e:
            if "can't parse entities" in str(e).lower():
                # Markdown error, caller falls back to plain text
                raise
            logger.error("Telegram bad request", extra={"error": str(e)})
            return None

    if last_error:
        logger.error(
            "All retries failed",
            extra={"max_retries": max_retries, "error": str(last_error)},
        )
    return None


def _display_name(user: types.User) -> str:
    return user.username or user.full_name


def to_inbound(message: types.Message, bot_id: int | None = None) -> InboundMessage | None:
    """Convert a Telegram message into an InboundMessage.

    Only ``text_mention`` entities carry a user id; plain ``@username``
    mentions cannot be resolved through the Bot API and are not reported.

    Args:
        message: The Telegram message.
        bot_id: The bot's own user id, used to flag its own messages.

    Returns:
        The converted message, or None if it carries no text.
    """
    text = message.text or message.caption
    if not text:
        return None

    user = message.from_user
    if user is not None:
        sender_id = str(user.id)
        sender_name = _display_name(user)
        from_me = bot_id is not None and user.id == bot_id
    else:
        # Anonymous admins and channels post as a chat
        sender_chat = message.sender_chat or message.chat
        sender_id = str(sender_chat.id)
        sender_name = sender_chat.title or sender_chat.username or ""
        from_me = False

    quoted_id = quoted_name = None
    replied = message.reply_to_message
    if replied is not None and replied.from_user is not None:
        quoted_id = str(replied.from_user.id)
        quoted_name = _display_name(replied.from_user)

    mentioned: list[types.User] = [
        entity.user
        for entity in (message.entities or message.caption_entities or [])
        if entity.type == MessageEntityType.TEXT_MENTION and entity.user is not None
    ]

    return InboundMessage(
        message_id=str(message.message_id),
        chat_id=str(message.chat.id),
        sender_id=sender_id,
        sender_name=sender_name,
        text=text,
        is_group=message.chat.type in GROUP_CHAT_TYPES,
        from_me=from_me,
        quoted_sender_id=quoted_id,
        quoted_sender_name=quoted_name,
        mentioned_ids=tuple(str(u.id) for u in mentioned),
        mentioned_names=tuple(_display_name(u) for u in mentioned),
    )


def link_mentions(text: str, mentions: Sequence[Mention]) -> str:
    """Turn the first ``@name`` of each mention into a Markdown user link.

    Telegram notifies the member through the ``tg://user?id=`` link even
    when they have no username. Non-numeric ids are left as plain text.
    """
    for mention in mentions:
        if not mention.user_id.lstrip("-").isdigit():
            continue
        token = f"@{mention.name}"
        text = text.replace(token, f"[{token}](tg://user?id={mention.user_id})", 1)
    return text


class TelegramReplySink:
    """ReplySink that sends through the Bot API.

    Mentions become ``tg://user?id=`` links; the plain-text fallback drops them.
    """

    def __init__(self, bot: Bot, max_retries: int = 3, base_delay: float = 1.0) -> None:
        self.bot = bot
        self.max_retries = max_retries
        self.base_delay = base_delay

    async def send_text(
        self,
        chat_id: str,
        text: str,
        *,
        mentions: Sequence[Mention] = (),
        reply_to: str | None = None,
    ) -> None:
        reply = _reply_parameters(reply_to)
        linked = link_mentions(text, mentions)
        try:
            await send_with_retry(
                lambda: self.bot.send_message(chat_id, linked, reply_parameters=reply),
                self.max_retries,
                self.base_delay,
            )
        except TelegramBadRequest as e:
            logger.warning(
                "Markdown parse error, sending as plain text",
                extra={"error": str(e), "chat_id": chat_id, "length": len(text)},
            )
            await send_with_retry(
                lambda: self.bot.send_message(chat_id, text, reply_parameters=reply, parse_mode=None),
                self.max_retries,
                self.base_delay,
            )

    async def send_media(
        self,
        chat_id: str,
        media: OutboundMedia,
        *,
        reply_to: str | None = None,
    ) -> None:
        file = BufferedInputFile(media.data, filename=media.filename)
        reply = _reply_parameters(reply_to)

        if media.kind == "sticker":
            send = partial(self.bot.send_sticker, chat_id, file, reply_parameters=reply)
        else:
            method = {
                "photo": self.bot.send_photo,
                "video": self.bot.send_video,
                "audio": self.bot.send_audio,
            }.get(media.kind, self.bot.send_document)
            send = partial(method, chat_id, file, caption=media.caption, reply_parameters=reply)

        await send_with_retry(send, self.max_retries, self.base_delay)


def _reply_parameters(reply_to: str | None) -> ReplyParameters | None:
    if reply_to is None:
        return None
    return ReplyParameters(message_id=int(reply_to), allow_sending_without_reply=True)


class TelegramGroupAdmin:
    """GroupAdmin backed by chat member API calls."""

    def __init__(self, bot: Bot) -> None:
        self.bot = bot

    async def is_admin(self, chat_id: str, user_id: str) -> bool:
        try:
            member = await self.bot.get_chat_member(chat_id, int(user_id))
        except TelegramAPIError as e:
            logger.warning(
                "Failed to get chat member",
                extra={"chat_id": chat_id, "user_id": user_id, "error": str(e)},
            )
            return False
        return member.status in ADMIN_STATUSES

    async def remove_member(self, chat_id: str, user_id: str) -> None:
        """Remove a member without banning them permanently.

        Raises:
            ExternalServiceError: If Telegram refuses the removal.
        """
        try:
            await self.bot.ban_chat_member(chat_id, int(user_id))
            await self.bot.unban_chat_member(chat_id, int(user_id), only_if_banned=True)
        except TelegramAPIError as e:
            raise ExternalServiceError("telegram", e) from e

    async def list_members(self, chat_id: str) -> list[Mention]:
        """List the group's human administrators.

        Raises:
            ExternalServiceError: If Telegram refuses the lookup.
        """
        try:
            admins = await self.bot.get_chat_administrators(chat_id)
        except TelegramAPIError as e:
            raise ExternalServiceError("telegram", e) from e
        return [Mention(str(admin.user.id), _display_name(admin.user)) for admin in admins if not admin.user.is_bot]


class ChisaBot:
    """Chisa Telegram Bot.

    This class encapsulates the bot setup and handlers,
    providing a clean interface for starting and stopping the bot.
    """

    def __init__(self, settings: Settings, services: Services | None = None) -> None:
        """Initialize the bot.

        Args:
            settings: Application settings.
            services: Pre-built services (tests); built from settings when omitted.
        """
        self.settings = settings
        self.bot = Bot(
            token=settings.telegram_bot_token.get_secret_value(),
            default=DefaultBotProperties(parse_mode=ParseMode.MARKDOWN),
        )
        self.dp = Dispatcher()
        self.sink = TelegramReplySink(
            self.bot,
            max_retries=settings.telegram_max_retries,
            base_delay=settings.telegram_retry_base_delay,
        )
        self.group_admin = TelegramGroupAdmin(self.bot)
        self.services = services or create_services(settings, self.sink, self.group_admin)

        self._setup_handlers()

        async def startup_hook() -> None:
            await self.bot.set_my_commands(list(BOT_COMMANDS))
            logger.info("Bot commands registered")
            self.services.start_background()

        async def shutdown_hook() -> None:
            await self.services.close(timeout=self.settings.shutdown_timeout)
            logger.info("Bot shutdown complete")

        self.dp.startup.register(startup_hook)
        self.dp.shutdown.register(shutdown_hook)

    def _setup_handlers(self) -> None:
        """Set up membership and message handlers."""

        @self.dp.message(F.new_chat_members)
        async def on_members_joined(message: types.Message) -> Any:
            for member in message.new_chat_members or []:
                if member.id == self.bot.id:
                    continue
                logger.info(
                    "Member joined",
                    extra={"chat_id": message.chat.id, "user_id": member.id},
                )
                await self._greet(
                    self.services.moderation.member_joined(str(message.chat.id), str(member.id), _display_name(member))
                )

        @self.dp.message(F.left_chat_member)
        async def on_member_left(message: types.Message) -> Any:
            member = message.left_chat_member
            if member is None or member.id == self.bot.id:
                return None
            logger.info(
                "Member left",
                extra={"chat_id": message.chat.id, "user_id": member.id},
            )
            await self._greet(
                self.services.moderation.member_left(str(message.chat.id), str(member.id), _display_name(member))
            )
            return None

        @self.dp.message()
        async def handle_message(message: types.Message) -> Any:
            inbound = to_inbound(message, self.bot.id)
            if inbound is None:
                return None
            self.services.dispatcher.submit(inbound)
            return None

    async def _greet(self, greeting: Awaitable[None]) -> None:
        try:
            await greeting
        except Exception as e:
            logger.error("Failed to send greeting", extra={"error": str(e)})

    async def start(self) -> None:
        """Start the bot polling."""
        logger.info(
            "Starting bot",
            extra={
                "app_name": self.settings.app_name,
                "app_version": self.settings.app_version,
            },
        )
        await self.dp.start_polling(self.bot)

    async def stop(self) -> None:
        """Stop the bot gracefully."""
        logger.info("Stopping bot")
        await self.services.close(timeout=self.settings.shutdown_timeout)
        await self.bot.session.close()
