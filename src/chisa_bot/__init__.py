"""Chisa Bot - group chat games, moderation and fun commands for Telegram."""

__version__ = "1.0.0"
__author__ = "Chisa Team"

from chisa_bot.config import Settings
from chisa_bot.games import GameKind, GameSessionManager
from chisa_bot.metrics import Metrics
from chisa_bot.parser import CommandParser, ParsedCommand
from chisa_bot.ratelimit import RateLimiter, RateLimitResult

__all__ = [
    "CommandParser",
    "GameKind",
    "GameSessionManager",
    "Metrics",
    "ParsedCommand",
    "RateLimitResult",
    "RateLimiter",
    "Settings",
    "__version__",
]
