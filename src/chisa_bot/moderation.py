"""Group moderation commands and membership greetings."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chisa_bot.exceptions import (
    AdminOnlyError,
    ExternalServiceError,
    MissingTargetError,
    NotInGroupError,
    UsageError,
)
from chisa_bot.messages import (
    MSG_AUTOTAG_OFF,
    MSG_AUTOTAG_ON,
    MSG_AUTOTAG_USAGE,
    MSG_GOODBYE,
    MSG_GROUP_INFO_FAILED,
    MSG_KICK_DONE,
    MSG_KICK_FAILED,
    MSG_KICK_USAGE,
    MSG_ONLY_ADMIN,
    MSG_ONLY_GROUP,
    MSG_RESETWARN_USAGE,
    MSG_TAGALL_TITLE,
    MSG_WARN,
    MSG_WARN_FINAL,
    MSG_WARN_KICK_FAILED,
    MSG_WARN_NONE,
    MSG_WARN_RESET,
    MSG_WARN_USAGE,
    MSG_WELCOME,
)
from chisa_bot.messaging import GroupAdmin, InboundMessage, Mention, ReplySink
from chisa_bot.registry import CommandContext, CommandRegistry
from chisa_bot.stores import AutoTagStore, WarnStore

logger = logging.getLogger(__name__)

# Warnings before a member is removed
DEFAULT_KICK_THRESHOLD = 3


@dataclass(frozen=True)
class Target:
    """A member a moderation command acts on."""

    member_id: str
    name: str

    @property
    def mention(self) -> Mention:
        return Mention(self.member_id, self.name)


def resolve_target(message: InboundMessage) -> Target | None:
    """Find the member a command refers to.

    The author of the replied-to message wins; otherwise the first mention.
    """
    if message.quoted_sender_id:
        return Target(message.quoted_sender_id, message.quoted_sender_name or message.quoted_sender_id)
    if message.mentioned_ids:
        member_id = message.mentioned_ids[0]
        names = message.mentioned_names
        return Target(member_id, names[0] if names and names[0] else member_id)
    return None


class ModerationCommands:
    """Admin-only group management: warnings, kicks, auto-tag and tag-all."""

    def __init__(
        self,
        warn_store: WarnStore,
        autotag_store: AutoTagStore,
        group_admin: GroupAdmin,
        sink: ReplySink,
        kick_threshold: int = DEFAULT_KICK_THRESHOLD,
    ) -> None:
        self.warn_store = warn_store
        self.autotag_store = autotag_store
        self.group_admin = group_admin
        self.sink = sink
        self.kick_threshold = kick_threshold

    def register(self, registry: CommandRegistry) -> None:
        """Register all moderation commands."""
        registry.register(self.warn, "warn")
        registry.register(self.reset_warn, "resetwarn")
        registry.register(self.kick, "kick", "usir")
        registry.register(self.autotag, "autotag")
        registry.register(self.tagall, "tagall")

    async def warn(self, ctx: CommandContext) -> None:
        """Warn a member; reaching the threshold removes them."""
        await self._require_group_admin(ctx)
        target = self._require_target(ctx, MSG_WARN_USAGE)

        count = self.warn_store.add_warning(ctx.chat_id, target.member_id)
        logger.info(
            "Member warned",
            extra={"chat_id": ctx.chat_id, "member_id": target.member_id, "count": count},
        )

        if count < self.kick_threshold:
            await ctx.send(
                MSG_WARN.format(count=count, member=target.name, limit=self.kick_threshold),
                mentions=(target.mention,),
            )
            return

        await ctx.reply(MSG_WARN_FINAL.format(count=count, member=target.name), mentions=(target.mention,))
        try:
            await self.group_admin.remove_member(ctx.chat_id, target.member_id)
        except ExternalServiceError as e:
            logger.warning(
                "Failed to remove warned member",
                extra={"chat_id": ctx.chat_id, "member_id": target.member_id, "error": e.message},
            )
            await ctx.reply(MSG_WARN_KICK_FAILED)
            return
        self.warn_store.reset_warning(ctx.chat_id, target.member_id)

    async def reset_warn(self, ctx: CommandContext) -> None:
        await self._require_group_admin(ctx)
        target = self._require_target(ctx, MSG_RESETWARN_USAGE)

        if self.warn_store.reset_warning(ctx.chat_id, target.member_id):
            await ctx.reply(MSG_WARN_RESET.format(member=target.name), mentions=(target.mention,))
        else:
            await ctx.reply(MSG_WARN_NONE.format(member=target.name), mentions=(target.mention,))

    async def kick(self, ctx: CommandContext) -> None:
        await self._require_group_admin(ctx)
        target = self._require_target(ctx, MSG_KICK_USAGE)

        try:
            await self.group_admin.remove_member(ctx.chat_id, target.member_id)
        except ExternalServiceError as e:
            logger.warning(
                "Failed to kick member",
                extra={"chat_id": ctx.chat_id, "member_id": target.member_id, "error": e.message},
            )
            await ctx.reply(MSG_KICK_FAILED)
            return
        logger.info("Member kicked", extra={"chat_id": ctx.chat_id, "member_id": target.member_id})
        await ctx.reply(MSG_KICK_DONE)

    async def autotag(self, ctx: CommandContext) -> None:
        """Toggle mentioning new members in welcome messages."""
        await self._require_group_admin(ctx)

        mode = ctx.args[0].lower() if ctx.args else ""
        if mode == "on":
            self.autotag_store.set_disabled(ctx.chat_id, False)
            await ctx.reply(MSG_AUTOTAG_ON)
        elif mode == "off":
            self.autotag_store.set_disabled(ctx.chat_id, True)
            await ctx.reply(MSG_AUTOTAG_OFF)
        else:
            raise UsageError(MSG_AUTOTAG_USAGE, command="autotag")

    async def tagall(self, ctx: CommandContext) -> None:
        """Mention every member the group exposes to the bot."""
        await self._require_group_admin(ctx)

        try:
            members = await self.group_admin.list_members(ctx.chat_id)
        except ExternalServiceError as e:
            logger.warning(
                "Failed to list group members",
                extra={"chat_id": ctx.chat_id, "error": e.message},
            )
            await ctx.reply(MSG_GROUP_INFO_FAILED)
            return

        lines = [MSG_TAGALL_TITLE, ""] + [f"• @{member.name}" for member in members]
        await ctx.reply("\n".join(lines), mentions=members)

    async def member_joined(self, chat_id: str, member_id: str, name: str) -> None:
        """Greet a member who joined a group."""
        await self._greet(chat_id, member_id, name, MSG_WELCOME)

    async def member_left(self, chat_id: str, member_id: str, name: str) -> None:
        await self._greet(chat_id, member_id, name, MSG_GOODBYE)

    async def _greet(self, chat_id: str, member_id: str, name: str, template: str) -> None:
        if self.autotag_store.is_disabled(chat_id):
            await self.sink.send_text(chat_id, template.format(member=name))
        else:
            await self.sink.send_text(
                chat_id, template.format(member=f"@{name}"), mentions=(Mention(member_id, name),)
            )

    async def _require_group_admin(self, ctx: CommandContext) -> None:
        if not ctx.message.is_group:
            raise NotInGroupError(MSG_ONLY_GROUP)
        if not await self.group_admin.is_admin(ctx.chat_id, ctx.message.sender_id):
            raise AdminOnlyError(MSG_ONLY_ADMIN)

    def _require_target(self, ctx: CommandContext, usage: str) -> Target:
        target = resolve_target(ctx.message)
        if target is None:
            raise MissingTargetError(usage)
        return target
