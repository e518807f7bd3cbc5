"""Per-sender and per-chat rate limiting.

Two independent gates protect the bot from spam:

- a per-sender cooldown (minimum time between two actions of one sender),
- a per-chat sliding window (maximum actions per chat inside the window).

State is kept in memory only and garbage collected periodically, so memory
usage tracks recently active senders and chats rather than all-time totals.
Thread-safe: every check-and-record runs under a single lock.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from collections.abc import Callable
from enum import Enum

logger = logging.getLogger(__name__)

# Seconds between opportunistic cleanup passes
DEFAULT_CLEANUP_INTERVAL = 300.0

# Sender entries idle longer than this are dropped during cleanup
STALE_SENDER_AGE = 60.0


class RateLimitResult(Enum):
    """Outcome of a rate limit check."""

    ALLOWED = "allowed"
    SENDER_COOLDOWN = "sender_cooldown"
    CONVERSATION_LIMITED = "conversation_limited"

    @property
    def allowed(self) -> bool:
        """Whether the action may proceed."""
        return self is RateLimitResult.ALLOWED


class RateLimiter:
    """Sender cooldown plus chat sliding-window limiter.

    Example:
        >>> limiter = RateLimiter(cooldown=3.0, chat_limit=20, chat_window=60.0)
        >>> limiter.check("user-1", "chat-1")
        <RateLimitResult.ALLOWED: 'allowed'>
    """

    def __init__(
        self,
        cooldown: float = 3.0,
        chat_limit: int = 20,
        chat_window: float = 60.0,
        cleanup_interval: float = DEFAULT_CLEANUP_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the limiter.

        Args:
            cooldown: Minimum seconds between actions of one sender.
            chat_limit: Maximum actions per chat inside the window.
            chat_window: Sliding window length in seconds.
            cleanup_interval: Seconds between opportunistic cleanup passes.
            clock: Monotonic time source, injectable for tests.
        """
        self.cooldown = cooldown
        self.chat_limit = chat_limit
        self.chat_window = chat_window
        self.cleanup_interval = cleanup_interval
        self._clock = clock

        self._lock = threading.Lock()
        # sender_id -> timestamp of last allowed action
        self._sender_last: dict[str, float] = {}
        # chat_id -> timestamps of allowed actions, oldest first
        self._chat_actions: dict[str, deque[float]] = {}
        self._last_cleanup = clock()

    def check(self, sender_id: str, chat_id: str) -> RateLimitResult:
        """Check whether an action is allowed and record it if so.

        Args:
            sender_id: Identity of the sender.
            chat_id: Identity of the chat.

        Returns:
            ALLOWED if recorded, otherwise the reason for denial.
        """
        with self._lock:
            now = self._clock()

            if now - self._last_cleanup > self.cleanup_interval:
                self._cleanup_locked(now)

            last = self._sender_last.get(sender_id)
            if last is not None and now - last < self.cooldown:
                return RateLimitResult.SENDER_COOLDOWN

            actions = self._chat_actions.get(chat_id)
            if actions is None:
                actions = deque()
                self._chat_actions[chat_id] = actions
            self._prune(actions, now)

            if len(actions) >= self.chat_limit:
                return RateLimitResult.CONVERSATION_LIMITED

            self._sender_last[sender_id] = now
            actions.append(now)
            return RateLimitResult.ALLOWED

    def cleanup(self) -> int:
        """Drop stale sender entries and empty chat windows.

        Returns:
            Number of entries removed.
        """
        with self._lock:
            return self._cleanup_locked(self._clock())

    @property
    def tracked_senders(self) -> int:
        """Number of senders currently tracked."""
        with self._lock:
            return len(self._sender_last)

    @property
    def tracked_chats(self) -> int:
        """Number of chats currently tracked."""
        with self._lock:
            return len(self._chat_actions)

    def reset(self) -> None:
        """Forget all recorded actions."""
        with self._lock:
            self._sender_last.clear()
            self._chat_actions.clear()
            self._last_cleanup = self._clock()

    def _prune(self, actions: deque[float], now: float) -> None:
        cutoff = now - self.chat_window
        while actions and actions[0] < cutoff:
            actions.popleft()

    def _cleanup_locked(self, now: float) -> int:
        stale_senders = [
            sender_id
            for sender_id, last in self._sender_last.items()
            if now - last > STALE_SENDER_AGE
        ]
        for sender_id in stale_senders:
            del self._sender_last[sender_id]

        empty_chats = []
        for chat_id, actions in self._chat_actions.items():
            self._prune(actions, now)
            if not actions:
                empty_chats.append(chat_id)
        for chat_id in empty_chats:
            del self._chat_actions[chat_id]

        self._last_cleanup = now
        removed = len(stale_senders) + len(empty_chats)
        if removed:
            logger.debug(
                "Rate limiter cleanup",
                extra={"senders_removed": len(stale_senders), "chats_removed": len(empty_chats)},
            )
        return removed
