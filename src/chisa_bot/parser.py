"""Command parsing for chat messages.

Turns raw message text such as ``.pick Makan | Tidur`` into a
:class:`ParsedCommand`. Text that is not a command yields ``None`` so the
caller can fall through to free-text handling (game answers).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from chisa_bot.exceptions import ConfigurationError

DEFAULT_PREFIXES = (".", "!", "/")


@dataclass(frozen=True)
class ParsedCommand:
    """A parsed chat command.

    Attributes:
        prefix: The prefix that matched.
        name: Lowercased command name.
        args: Whitespace-separated positional arguments.
        raw_args: Text after the command name with internal spacing preserved.
    """

    prefix: str
    name: str
    args: tuple[str, ...] = field(default_factory=tuple)
    raw_args: str = ""


class CommandParser:
    """Parses chat text using a fixed, ordered set of prefixes.

    Example:
        >>> parser = CommandParser([".", "!"])
        >>> parser.parse("!Pick a | b")
        ParsedCommand(prefix='!', name='pick', args=('a', '|', 'b'), raw_args='a | b')
    """

    def __init__(
        self,
        prefixes: Iterable[str] = DEFAULT_PREFIXES,
        bot_username: str | None = None,
    ) -> None:
        """Initialize the parser.

        Args:
            prefixes: Recognized prefixes in priority order.
            bot_username: Optional bot username; ``name@username`` suffixes are stripped.

        Raises:
            ConfigurationError: If no non-empty prefix is configured.
        """
        self._prefixes = tuple(p for p in prefixes if p)
        if not self._prefixes:
            raise ConfigurationError("command_prefixes", "at least one prefix is required")
        self._bot_username = bot_username.lstrip("@").lower() if bot_username else None

    @property
    def prefixes(self) -> tuple[str, ...]:
        """Recognized prefixes in priority order."""
        return self._prefixes

    def parse(self, text: str | None) -> ParsedCommand | None:
        """Parse a command from text.

        Args:
            text: Raw message text.

        Returns:
            The parsed command, or None if the text is not a command.
        """
        if not text:
            return None
        text = text.strip()
        if not text:
            return None

        for prefix in self._prefixes:
            if not text.startswith(prefix):
                continue

            body = text[len(prefix) :].lstrip()
            parts = body.split()
            if not parts:
                return None

            token = parts[0]
            raw_args = body[len(token) :].strip()
            return ParsedCommand(
                prefix=prefix,
                name=self._normalize_name(token),
                args=tuple(parts[1:]),
                raw_args=raw_args,
            )

        return None

    def _normalize_name(self, token: str) -> str:
        name = token.lower()
        if self._bot_username and "@" in name:
            base, _, target = name.partition("@")
            if base and target == self._bot_username:
                return base
        return name


def parse_command(text: str | None, prefixes: Iterable[str] = DEFAULT_PREFIXES) -> ParsedCommand | None:
    """Parse a command using the given prefixes.

    Convenience wrapper around :class:`CommandParser` for one-off parsing.
    """
    return CommandParser(prefixes).parse(text)
