"""Transport-neutral chat message types and outbound interfaces.

The core never talks to Telegram directly: inbound updates are converted
to :class:`InboundMessage` by the adapter in ``bot.py``, and every reply goes
through a :class:`ReplySink`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import NamedTuple, Protocol


class Mention(NamedTuple):
    """A member to notify, shown in the text as ``@name``."""

    user_id: str
    name: str


@dataclass(frozen=True)
class InboundMessage:
    """A chat event delivered to the dispatcher.

    Attributes:
        message_id: Message identifier inside the chat.
        chat_id: Conversation identifier.
        sender_id: Author identifier.
        sender_name: Author display name (may be empty).
        text: Message body or media caption.
        is_group: Whether the chat is a group.
        from_me: Whether the bot itself authored the message.
        quoted_sender_id: Author of the message this one replies to.
        quoted_sender_name: Display name of that author.
        mentioned_ids: Members mentioned in the message, in order.
        mentioned_names: Display names of the mentioned members, same order.
    """

    message_id: str
    chat_id: str
    sender_id: str
    text: str
    sender_name: str = ""
    is_group: bool = False
    from_me: bool = False
    quoted_sender_id: str | None = None
    quoted_sender_name: str | None = None
    mentioned_ids: tuple[str, ...] = ()
    mentioned_names: tuple[str, ...] = ()

    @property
    def display_name(self) -> str:
        """Sender name, falling back to ``+<sender_id>``."""
        return self.sender_name or f"+{self.sender_id}"


@dataclass(frozen=True)
class OutboundMedia:
    """Binary media to send to a chat.

    Attributes:
        data: Raw file content.
        filename: File name shown to recipients.
        kind: One of "photo", "video", "audio", "sticker", "document".
        caption: Optional caption.
        mime_type: Optional content type hint.
    """

    data: bytes
    filename: str
    kind: str = "document"
    caption: str | None = None
    mime_type: str | None = field(default=None, repr=False)


class ReplySink(Protocol):
    """Outbound message channel."""

    async def send_text(
        self,
        chat_id: str,
        text: str,
        *,
        mentions: Sequence[Mention] = (),
        reply_to: str | None = None,
    ) -> None: ...

    async def send_media(
        self,
        chat_id: str,
        media: OutboundMedia,
        *,
        reply_to: str | None = None,
    ) -> None: ...


class GroupAdmin(Protocol):
    """Group membership operations."""

    async def is_admin(self, chat_id: str, user_id: str) -> bool: ...

    async def remove_member(self, chat_id: str, user_id: str) -> None: ...

    async def list_members(self, chat_id: str) -> list[Mention]:
        """Members the transport can enumerate, excluding bots.

        Telegram only exposes a group's administrators to bots.
        """
        ...
