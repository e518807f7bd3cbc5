"""Tests for moderation commands and membership greetings."""

from __future__ import annotations

from pathlib import Path

import pytest

from chisa_bot.exceptions import AdminOnlyError, MissingTargetError, NotInGroupError, UsageError
from chisa_bot.messages import (
    MSG_AUTOTAG_OFF,
    MSG_AUTOTAG_ON,
    MSG_GROUP_INFO_FAILED,
    MSG_KICK_DONE,
    MSG_KICK_FAILED,
    MSG_TAGALL_TITLE,
    MSG_WARN_KICK_FAILED,
)
from chisa_bot.messaging import Mention
from chisa_bot.moderation import ModerationCommands, Target, resolve_target
from chisa_bot.stores import AutoTagStore, WarnStore


@pytest.fixture
def warn_store(tmp_path: Path) -> WarnStore:
    return WarnStore(tmp_path / "warnings.json")


@pytest.fixture
def autotag_store(tmp_path: Path) -> AutoTagStore:
    return AutoTagStore(tmp_path / "autotag.json")


@pytest.fixture
def moderation(warn_store, autotag_store, group_admin, sink) -> ModerationCommands:
    return ModerationCommands(warn_store, autotag_store, group_admin, sink, kick_threshold=3)


def _admin_context(make_context, text: str, **overrides):
    overrides.setdefault("sender_id", "admin")
    return make_context(text, **overrides)


class TestResolveTarget:
    def test_quoted_sender_wins(self, make_message) -> None:
        message = make_message(
            ".warn",
            quoted_sender_id="u9",
            quoted_sender_name="Sari",
            mentioned_ids=("u2",),
            mentioned_names=("Ani",),
        )

        assert resolve_target(message) == Target("u9", "Sari")

    def test_first_mention(self, make_message) -> None:
        message = make_message(".warn", mentioned_ids=("u2", "u3"), mentioned_names=("Ani", "Citra"))

        assert resolve_target(message) == Target("u2", "Ani")

    def test_name_falls_back_to_id(self, make_message) -> None:
        assert resolve_target(make_message(".kick", quoted_sender_id="u9")) == Target("u9", "u9")
        assert resolve_target(make_message(".kick", mentioned_ids=("u2",))) == Target("u2", "u2")

    def test_no_target(self, make_message) -> None:
        assert resolve_target(make_message(".kick")) is None


class TestPermissions:
    """Admin-only commands refuse everyone else."""

    @pytest.mark.asyncio
    async def test_private_chat_rejected(self, moderation: ModerationCommands, make_context) -> None:
        with pytest.raises(NotInGroupError):
            await moderation.warn(_admin_context(make_context, ".warn", is_group=False, quoted_sender_id="u2"))

    @pytest.mark.asyncio
    async def test_non_admin_rejected(self, moderation: ModerationCommands, make_context, warn_store) -> None:
        with pytest.raises(AdminOnlyError):
            await moderation.warn(make_context(".warn", quoted_sender_id="u2"))

        assert warn_store.get_warning("chat-1", "u2") == 0

    @pytest.mark.asyncio
    async def test_missing_target(self, moderation: ModerationCommands, make_context) -> None:
        with pytest.raises(MissingTargetError):
            await moderation.kick(_admin_context(make_context, ".kick"))


class TestWarn:
    """Tests for the warning ladder."""

    @pytest.mark.asyncio
    async def test_warning_counts_up(self, moderation: ModerationCommands, make_context, sink, warn_store) -> None:
        ctx = _admin_context(make_context, ".warn", quoted_sender_id="u2", quoted_sender_name="Ani")

        await moderation.warn(ctx)
        await moderation.warn(ctx)

        sent = sink.texts[-1]
        assert "KE-2" in sent.text
        assert "@Ani" in sent.text
        assert sent.mentions == (Mention("u2", "Ani"),)
        assert sent.reply_to is None
        assert warn_store.get_warning("chat-1", "u2") == 2

    @pytest.mark.asyncio
    async def test_threshold_removes_member(
        self, moderation: ModerationCommands, make_context, sink, warn_store, group_admin
    ) -> None:
        ctx = _admin_context(make_context, ".warn", mentioned_ids=("u2",), mentioned_names=("Ani",))

        for _ in range(3):
            await moderation.warn(ctx)

        assert "FINAL" in sink.last_text
        assert group_admin.removed == [("chat-1", "u2")]
        assert warn_store.get_warning("chat-1", "u2") == 0

    @pytest.mark.asyncio
    async def test_failed_removal_keeps_warnings(
        self, warn_store, autotag_store, failing_group_admin, sink, make_context
    ) -> None:
        """A member that could not be removed keeps their count."""
        moderation = ModerationCommands(warn_store, autotag_store, failing_group_admin, sink, kick_threshold=1)

        await moderation.warn(_admin_context(make_context, ".warn", quoted_sender_id="u2"))

        assert sink.last_text == MSG_WARN_KICK_FAILED
        assert warn_store.get_warning("chat-1", "u2") == 1

    @pytest.mark.asyncio
    async def test_warnings_are_per_chat(self, moderation: ModerationCommands, make_context, warn_store) -> None:
        await moderation.warn(_admin_context(make_context, ".warn", quoted_sender_id="u2", chat_id="g1"))
        await moderation.warn(_admin_context(make_context, ".warn", quoted_sender_id="u2", chat_id="g2"))

        assert warn_store.get_warning("g1", "u2") == 1
        assert warn_store.get_warning("g2", "u2") == 1


class TestResetWarn:
    @pytest.mark.asyncio
    async def test_reset(self, moderation: ModerationCommands, make_context, sink, warn_store) -> None:
        warn_store.add_warning("chat-1", "u2")

        await moderation.reset_warn(_admin_context(make_context, ".resetwarn", quoted_sender_id="u2", quoted_sender_name="Ani"))

        assert "di-reset" in sink.last_text
        assert warn_store.get_warning("chat-1", "u2") == 0

    @pytest.mark.asyncio
    async def test_nothing_to_reset(self, moderation: ModerationCommands, make_context, sink) -> None:
        await moderation.reset_warn(_admin_context(make_context, ".resetwarn", quoted_sender_id="u2", quoted_sender_name="Ani"))

        assert "tidak punya peringatan" in sink.last_text


class TestKick:
    @pytest.mark.asyncio
    async def test_kick(self, moderation: ModerationCommands, make_context, sink, group_admin) -> None:
        await moderation.kick(_admin_context(make_context, ".usir", mentioned_ids=("u2",)))

        assert group_admin.removed == [("chat-1", "u2")]
        assert sink.last_text == MSG_KICK_DONE

    @pytest.mark.asyncio
    async def test_kick_failure_reported(self, warn_store, autotag_store, failing_group_admin, sink, make_context) -> None:
        moderation = ModerationCommands(warn_store, autotag_store, failing_group_admin, sink)

        await moderation.kick(_admin_context(make_context, ".kick", quoted_sender_id="u2"))

        assert sink.last_text == MSG_KICK_FAILED


class TestTagAll:
    """Tests for tagall."""

    @pytest.mark.asyncio
    async def test_mentions_every_listed_member(
        self, moderation: ModerationCommands, make_context, sink, group_admin
    ) -> None:
        group_admin.members = [Mention("admin", "Admin"), Mention("u2", "Ani Lestari")]

        await moderation.tagall(_admin_context(make_context, ".tagall", message_id="77"))

        sent = sink.texts[-1]
        assert sent.text == f"{MSG_TAGALL_TITLE}\n\n• @Admin\n• @Ani Lestari"
        assert sent.mentions == (Mention("admin", "Admin"), Mention("u2", "Ani Lestari"))
        assert sent.reply_to == "77"

    @pytest.mark.asyncio
    async def test_admin_only(self, moderation: ModerationCommands, make_context, sink) -> None:
        with pytest.raises(AdminOnlyError):
            await moderation.tagall(make_context(".tagall"))

        assert sink.texts == []

    @pytest.mark.asyncio
    async def test_lookup_failure(self, moderation: ModerationCommands, make_context, sink, group_admin) -> None:
        group_admin.fail_list = True

        await moderation.tagall(_admin_context(make_context, ".tagall"))

        assert sink.last_text == MSG_GROUP_INFO_FAILED
        assert sink.texts[-1].mentions == ()


class TestAutoTag:
    """Tests for the auto-tag toggle and greetings."""

    @pytest.mark.asyncio
    async def test_toggle(self, moderation: ModerationCommands, make_context, sink, autotag_store) -> None:
        await moderation.autotag(_admin_context(make_context, ".autotag OFF"))
        assert sink.last_text == MSG_AUTOTAG_OFF
        assert autotag_store.is_disabled("chat-1") is True

        await moderation.autotag(_admin_context(make_context, ".autotag on"))
        assert sink.last_text == MSG_AUTOTAG_ON
        assert autotag_store.is_disabled("chat-1") is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", [".autotag", ".autotag maybe"])
    async def test_usage(self, moderation: ModerationCommands, make_context, text: str) -> None:
        with pytest.raises(UsageError):
            await moderation.autotag(_admin_context(make_context, text))

    @pytest.mark.asyncio
    async def test_welcome_mentions_by_default(self, moderation: ModerationCommands, sink) -> None:
        await moderation.member_joined("chat-1", "u5", "Eka")

        sent = sink.texts[-1]
        assert "Halo @Eka" in sent.text
        assert sent.mentions == (Mention("u5", "Eka"),)

    @pytest.mark.asyncio
    async def test_greetings_without_tag(self, moderation: ModerationCommands, sink, autotag_store) -> None:
        autotag_store.set_disabled("chat-1", True)

        await moderation.member_left("chat-1", "u5", "Eka")

        sent = sink.texts[-1]
        assert "Sampai jumpa Eka" in sent.text
        assert "@" not in sent.text
        assert sent.mentions == ()
