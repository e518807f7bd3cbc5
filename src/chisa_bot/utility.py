"""Utility commands: random pick, link shortener, menu and stats."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence

import aiohttp

from chisa_bot.exceptions import ExternalServiceError, UsageError
from chisa_bot.messages import (
    MSG_MENU,
    MSG_PICK_RESULT,
    MSG_PICK_TOO_FEW,
    MSG_PICK_USAGE,
    MSG_SHORT_DONE,
    MSG_SHORT_FAILED,
    MSG_SHORT_USAGE,
    MSG_SHORT_WAIT,
)
from chisa_bot.metrics import Metrics, format_stats_message
from chisa_bot.registry import CommandContext, CommandRegistry

logger = logging.getLogger(__name__)

DEFAULT_SHORTENER_URL = "https://tinyurl.com/api-create.php"


def split_options(raw: str) -> list[str]:
    """Split ``a | b | c`` into trimmed, non-empty options."""
    return [option.strip() for option in raw.split("|") if option.strip()]


def normalize_url(url: str) -> str:
    """Add an https scheme to bare hosts."""
    if not url.startswith("http"):
        return "https://" + url
    return url


class LinkShortener:
    """TinyURL-compatible shortening client.

    The HTTP session is created lazily and must be closed with :meth:`close`.
    """

    def __init__(self, api_url: str = DEFAULT_SHORTENER_URL, timeout: float = 10.0) -> None:
        self.api_url = api_url
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def start(self) -> aiohttp.ClientSession:
        """Open the HTTP session if needed and return it."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
        return self._session

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def shorten(self, url: str) -> str:
        """Shorten a URL.

        Args:
            url: Full URL to shorten.

        Returns:
            The short URL.

        Raises:
            ExternalServiceError: If the service is unreachable or answers badly.
        """
        session = await self.start()
        try:
            async with session.get(self.api_url, params={"url": url}) as response:
                body = (await response.text()).strip()
                if response.status != 200:
                    raise ExternalServiceError("shortener", message=f"HTTP {response.status}")
        except (aiohttp.ClientError, TimeoutError) as e:
            raise ExternalServiceError("shortener", e) from e

        if not body.startswith("http"):
            raise ExternalServiceError("shortener", message="unexpected response body")
        return body


class UtilityCommands:
    """Pick, shorten, menu and stats."""

    def __init__(
        self,
        shortener: LinkShortener,
        metrics: Metrics,
        prefixes: Sequence[str] = (".", "!", "/"),
        active_games: Callable[[], int] | None = None,
        app_name: str = "Chisa Bot",
        app_version: str = "",
        rng: random.Random | None = None,
    ) -> None:
        self.shortener = shortener
        self.metrics = metrics
        self.prefixes = tuple(prefixes)
        self.active_games = active_games
        self.app_name = app_name
        self.app_version = app_version
        self._rng = rng or random.Random()

    def register(self, registry: CommandRegistry) -> None:
        registry.register(self.pick, "pick", "pilih")
        registry.register(self.short, "short", "shorten", "pendek")
        registry.register(self.menu, "menu", "help")
        registry.register(self.stats, "stats", "server", "stat")

    async def pick(self, ctx: CommandContext) -> None:
        """Choose one of the ``|``-separated options at random."""
        if not ctx.raw_args:
            raise UsageError(MSG_PICK_USAGE, command="pick")

        options = split_options(ctx.raw_args)
        if len(options) < 2:
            raise UsageError(MSG_PICK_TOO_FEW, command="pick")

        chosen = self._rng.choice(options)
        await ctx.reply(MSG_PICK_RESULT.format(count=len(options), options=", ".join(options), chosen=chosen))

    async def short(self, ctx: CommandContext) -> None:
        if not ctx.args:
            raise UsageError(MSG_SHORT_USAGE, command="short")

        url = normalize_url(ctx.args[0])
        await ctx.reply(MSG_SHORT_WAIT)
        try:
            short_url = await self.shortener.shorten(url)
        except ExternalServiceError as e:
            logger.warning("Link shortening failed", extra={"url": url, "error": e.message})
            await ctx.reply(MSG_SHORT_FAILED)
            return
        await ctx.reply(MSG_SHORT_DONE.format(url=short_url))

    async def menu(self, ctx: CommandContext) -> None:
        await ctx.reply(MSG_MENU.format(prefixes=" ".join(self.prefixes)))

    async def stats(self, ctx: CommandContext) -> None:
        active = self.active_games() if self.active_games is not None else 0
        await ctx.reply(
            format_stats_message(
                self.metrics,
                active_games=active,
                app_name=self.app_name,
                app_version=self.app_version,
            )
        )
