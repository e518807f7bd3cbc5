"""Metrics and observability module for Chisa Bot.

Simple in-memory counters suitable for a single-instance deployment,
rendered by the ``stats`` command. Thread-safe: counters are updated
under a lock so dispatches running on worker threads can record too.
"""

from __future__ import annotations

import platform
import threading
import time
from dataclasses import dataclass, field


@dataclass
class Metrics:
    """Application metrics storage.

    Tracks inbound messages, command usage, rate-limit denials, handler
    errors and game outcomes.
    """

    # Event counters
    total_messages: int = 0
    total_commands: int = 0
    total_errors: int = 0
    total_rate_limited: int = 0

    # Per-name counters
    command_counts: dict[str, int] = field(default_factory=dict)
    rate_limit_counts: dict[str, int] = field(default_factory=dict)
    error_counts: dict[str, int] = field(default_factory=dict)

    # Games
    games_started: int = 0
    games_won: int = 0
    games_timed_out: int = 0

    # Timestamps
    start_time: float = field(default_factory=time.time)
    last_message_time: float | None = None

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record_message(self) -> None:
        """Record an inbound message that passed basic filtering."""
        with self._lock:
            self.total_messages += 1
            self.last_message_time = time.time()

    def record_command(self, command: str) -> None:
        """Record a dispatched command.

        Args:
            command: The command name (e.g., 'menu', 'tebakkata').
        """
        with self._lock:
            self.total_commands += 1
            self.command_counts[command] = self.command_counts.get(command, 0) + 1

    def record_rate_limited(self, reason: str) -> None:
        """Record a rate-limit denial.

        Args:
            reason: Denial reason (RateLimitResult value).
        """
        with self._lock:
            self.total_rate_limited += 1
            self.rate_limit_counts[reason] = self.rate_limit_counts.get(reason, 0) + 1

    def record_error(self, command: str) -> None:
        """Record a handler failure.

        Args:
            command: The command whose handler failed.
        """
        with self._lock:
            self.total_errors += 1
            self.error_counts[command] = self.error_counts.get(command, 0) + 1

    def record_game_started(self) -> None:
        with self._lock:
            self.games_started += 1

    def record_game_won(self) -> None:
        with self._lock:
            self.games_won += 1

    def record_game_timed_out(self) -> None:
        with self._lock:
            self.games_timed_out += 1

    def get_uptime(self) -> float:
        """Get application uptime in seconds."""
        return time.time() - self.start_time

    def get_error_rate(self) -> float:
        """Get handler error rate as a percentage of commands.

        Returns:
            Error rate percentage (0-100).
        """
        if self.total_commands == 0:
            return 0.0
        return (self.total_errors / self.total_commands) * 100

    def top_commands(self, limit: int = 5) -> list[tuple[str, int]]:
        """Get the most used commands, most used first."""
        with self._lock:
            ranked = sorted(self.command_counts.items(), key=lambda item: item[1], reverse=True)
        return ranked[:limit]

    def format_uptime(self) -> str:
        """Format uptime as human-readable string.

        Returns:
            Formatted uptime string (e.g., "1d 2h 30m 15s").
        """
        uptime = int(self.get_uptime())
        days = uptime // 86400
        hours = (uptime % 86400) // 3600
        minutes = (uptime % 3600) // 60
        seconds = uptime % 60

        parts = []
        if days > 0:
            parts.append(f"{days}d")
        if hours > 0:
            parts.append(f"{hours}h")
        if minutes > 0:
            parts.append(f"{minutes}m")
        parts.append(f"{seconds}s")

        return " ".join(parts)

    def reset(self) -> None:
        """Reset all metrics to initial values."""
        with self._lock:
            self.total_messages = 0
            self.total_commands = 0
            self.total_errors = 0
            self.total_rate_limited = 0
            self.command_counts.clear()
            self.rate_limit_counts.clear()
            self.error_counts.clear()
            self.games_started = 0
            self.games_won = 0
            self.games_timed_out = 0
            self.start_time = time.time()
            self.last_message_time = None


def format_stats_message(
    metrics: Metrics,
    active_games: int = 0,
    app_name: str = "Chisa Bot",
    app_version: str = "",
) -> str:
    """Format metrics as a chat message.

    Args:
        metrics: The metrics to render.
        active_games: Number of chats with a running game.
        app_name: Bot name shown in the header.
        app_version: Bot version shown in the header.

    Returns:
        Formatted stats string (Markdown).
    """
    header = f"{app_name} {app_version}".strip()
    message = f"""📊 *{header}*

⏱️ *Uptime:* `{metrics.format_uptime()}`
🐍 *Python:* `{platform.python_version()}`
💻 *Platform:* `{platform.system()} {platform.machine()}`

📨 *Aktivitas:*
- Pesan: `{metrics.total_messages}`
- Perintah: `{metrics.total_commands}`
- Dibatasi: `{metrics.total_rate_limited}`
- Error: `{metrics.total_errors}` (`{metrics.get_error_rate():.1f}%`)

🎮 *Game:*
- Aktif: `{active_games}`
- Dimulai: `{metrics.games_started}`
- Dimenangkan: `{metrics.games_won}`
- Waktu habis: `{metrics.games_timed_out}`"""

    top = metrics.top_commands()
    if top:
        message += "\n\n🔥 *Perintah populer:*"
        for name, count in top:
            message += f"\n- {name}: `{count}`"

    return message
