"""Service wiring.

Builds every manager, store and command handler from :class:`Settings` and
connects them to a :class:`Dispatcher`. Nothing here is global: the
messaging adapter owns one :class:`Services` instance.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import timedelta

from chisa_bot.config import Settings
from chisa_bot.dispatcher import Dispatcher
from chisa_bot.fun import FunCommands
from chisa_bot.game_commands import GameCommands
from chisa_bot.games import GameSessionManager
from chisa_bot.messaging import GroupAdmin, ReplySink
from chisa_bot.metrics import Metrics
from chisa_bot.moderation import ModerationCommands
from chisa_bot.parser import CommandParser
from chisa_bot.ratelimit import RateLimiter
from chisa_bot.registry import CommandRegistry
from chisa_bot.scheduler import start_periodic
from chisa_bot.stores import AutoTagStore, ScoreStore, WarnStore
from chisa_bot.utility import LinkShortener, UtilityCommands

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """All long-lived application components."""

    settings: Settings
    metrics: Metrics
    limiter: RateLimiter | None
    parser: CommandParser
    registry: CommandRegistry
    score_store: ScoreStore
    warn_store: WarnStore
    autotag_store: AutoTagStore
    games: GameSessionManager
    game_commands: GameCommands
    moderation: ModerationCommands
    fun: FunCommands
    utility: UtilityCommands
    shortener: LinkShortener
    dispatcher: Dispatcher
    background_tasks: list[asyncio.Task[None]] = field(default_factory=list)

    def start_background(self) -> None:
        """Start periodic maintenance tasks on the running loop."""
        if self.limiter is not None:
            self.background_tasks.append(
                start_periodic(
                    self.settings.rate_limit_cleanup_interval,
                    self.limiter.cleanup,
                    "rate-limiter-cleanup",
                )
            )
        self.background_tasks.append(
            start_periodic(
                self.settings.store_autosave_interval,
                self.score_store.autosave,
                "leaderboard-autosave",
            )
        )
        logger.info("Background tasks started", extra={"count": len(self.background_tasks)})

    async def close(self, timeout: float | None = None) -> None:
        """Stop background work and persist every store.

        Args:
            timeout: Seconds to wait for in-flight message handlers.
        """
        for task in self.background_tasks:
            task.cancel()
        if self.background_tasks:
            await asyncio.gather(*self.background_tasks, return_exceptions=True)
        self.background_tasks.clear()

        await self.dispatcher.drain(timeout)
        await self.games.cancel_timers()
        await self.shortener.close()

        self.score_store.flush()
        self.warn_store.flush()
        self.autotag_store.flush()
        logger.info("Services closed")


def create_services(
    settings: Settings,
    sink: ReplySink,
    group_admin: GroupAdmin,
    shortener: LinkShortener | None = None,
) -> Services:
    """Build and wire all components.

    Args:
        settings: Application settings.
        sink: Outbound reply channel.
        group_admin: Group membership operations.
        shortener: Link shortener; built from settings when omitted.

    Returns:
        The wired Services.
    """
    metrics = Metrics()
    limiter = (
        RateLimiter(
            cooldown=settings.rate_limit_user_cooldown,
            chat_limit=settings.rate_limit_chat_limit,
            chat_window=settings.rate_limit_chat_window,
            cleanup_interval=settings.rate_limit_cleanup_interval,
        )
        if settings.rate_limit_enabled
        else None
    )
    parser = CommandParser(settings.command_prefixes, bot_username=settings.bot_username)
    registry = CommandRegistry(metrics)

    score_store = ScoreStore(
        settings.leaderboard_file,
        reset_after=timedelta(days=settings.leaderboard_reset_days),
    )
    warn_store = WarnStore(settings.warnings_file)
    autotag_store = AutoTagStore(settings.autotag_file)

    games = GameSessionManager(score_store, timeout=settings.game_timeout)
    shortener = shortener or LinkShortener(settings.shortener_api_url, settings.shortener_timeout)

    game_commands = GameCommands(
        games,
        sink,
        metrics=metrics,
        leaderboard_reset_days=settings.leaderboard_reset_days,
    )
    moderation = ModerationCommands(
        warn_store,
        autotag_store,
        group_admin,
        sink,
        kick_threshold=settings.warn_kick_threshold,
    )
    fun = FunCommands(group_admin=group_admin)
    utility = UtilityCommands(
        shortener,
        metrics,
        prefixes=parser.prefixes,
        active_games=lambda: games.active_count,
        app_name=settings.app_name,
        app_version=settings.app_version,
    )

    game_commands.register(registry)
    moderation.register(registry)
    fun.register(registry)
    utility.register(registry)

    dispatcher = Dispatcher(
        parser,
        registry,
        sink,
        limiter=limiter,
        answer_handler=game_commands.handle_answer,
        metrics=metrics,
        rate_limit_scope=settings.rate_limit_scope,
        groups_only=settings.groups_only,
    )

    logger.info(
        "Services created",
        extra={"commands": len(registry.names()), "rate_limit": settings.rate_limit_enabled},
    )

    return Services(
        settings=settings,
        metrics=metrics,
        limiter=limiter,
        parser=parser,
        registry=registry,
        score_store=score_store,
        warn_store=warn_store,
        autotag_store=autotag_store,
        games=games,
        game_commands=game_commands,
        moderation=moderation,
        fun=fun,
        utility=utility,
        shortener=shortener,
        dispatcher=dispatcher,
    )
