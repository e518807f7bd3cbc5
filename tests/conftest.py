"""Pytest configuration and shared fixtures.

This module provides fakes for the outbound chat interfaces, a controllable
clock and factories for inbound messages and command contexts.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

import pytest

from chisa_bot.exceptions import ExternalServiceError
from chisa_bot.messaging import InboundMessage, Mention, OutboundMedia
from chisa_bot.parser import CommandParser
from chisa_bot.registry import CommandContext


# ==============================================================================
# Fakes
# ==============================================================================


@dataclass
class SentText:
    chat_id: str
    text: str
    mentions: tuple[Mention, ...] = ()
    reply_to: str | None = None


class FakeSink:
    """ReplySink that records everything it is asked to send."""

    def __init__(self) -> None:
        self.texts: list[SentText] = []
        self.media: list[tuple[str, OutboundMedia, str | None]] = []

    async def send_text(
        self,
        chat_id: str,
        text: str,
        *,
        mentions: Sequence[Mention] = (),
        reply_to: str | None = None,
    ) -> None:
        self.texts.append(SentText(chat_id, text, tuple(mentions), reply_to))

    async def send_media(
        self,
        chat_id: str,
        media: OutboundMedia,
        *,
        reply_to: str | None = None,
    ) -> None:
        self.media.append((chat_id, media, reply_to))

    @property
    def last_text(self) -> str:
        assert self.texts, "nothing was sent"
        return self.texts[-1].text


class FakeGroupAdmin:
    """GroupAdmin with a configurable admin set."""

    def __init__(
        self,
        admins: set[str] | None = None,
        fail_remove: bool = False,
        members: list[Mention] | None = None,
        fail_list: bool = False,
    ) -> None:
        self.admins = admins if admins is not None else {"admin"}
        self.fail_remove = fail_remove
        self.members = members if members is not None else [Mention("admin", "Admin")]
        self.fail_list = fail_list
        self.removed: list[tuple[str, str]] = []

    async def is_admin(self, chat_id: str, user_id: str) -> bool:
        return user_id in self.admins

    async def remove_member(self, chat_id: str, user_id: str) -> None:
        if self.fail_remove:
            raise ExternalServiceError("telegram", message="not enough rights")
        self.removed.append((chat_id, user_id))

    async def list_members(self, chat_id: str) -> list[Mention]:
        if self.fail_list:
            raise ExternalServiceError("telegram", message="chat not found")
        return list(self.members)


class FakeScoreStore:
    """In-memory ScoreKeeper."""

    def __init__(self) -> None:
        self.data: dict[str, int] = {}

    def add_score(self, player: str, points: int = 1) -> int:
        self.data[player] = self.data.get(player, 0) + points
        return self.data[player]

    def scores(self) -> dict[str, int]:
        return dict(self.data)


@dataclass
class FakeClock:
    """Manually advanced clock."""

    now: float = 1000.0
    calls: list[float] = field(default_factory=list)

    def __call__(self) -> float:
        self.calls.append(self.now)
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ==============================================================================
# Fixtures
# ==============================================================================


@pytest.fixture
def sink() -> FakeSink:
    return FakeSink()


@pytest.fixture
def group_admin() -> FakeGroupAdmin:
    return FakeGroupAdmin()


@pytest.fixture
def failing_group_admin() -> FakeGroupAdmin:
    """Group admin whose member removals are rejected by the platform."""
    return FakeGroupAdmin(fail_remove=True)


@pytest.fixture
def score_store() -> FakeScoreStore:
    return FakeScoreStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_message() -> Callable[..., InboundMessage]:
    """Factory for inbound messages with sensible group-chat defaults."""

    base = InboundMessage(
        message_id="100",
        chat_id="chat-1",
        sender_id="user-1",
        sender_name="Budi",
        text="",
        is_group=True,
    )

    def _make(text: str = "", **overrides: Any) -> InboundMessage:
        return replace(base, text=text, **overrides)

    return _make


@pytest.fixture
def make_context(
    sink: FakeSink,
    make_message: Callable[..., InboundMessage],
) -> Callable[..., CommandContext]:
    """Factory for command contexts built from command text."""

    parser = CommandParser()

    def _make(text: str, **overrides: Any) -> CommandContext:
        command = parser.parse(text)
        assert command is not None, f"not a command: {text!r}"
        return CommandContext(message=make_message(text, **overrides), command=command, sink=sink)

    return _make
