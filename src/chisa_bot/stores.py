"""Persistent JSON stores.

Each store keeps its state in memory and rewrites its whole JSON document
on every mutation (save-on-write) under its own lock. Read failures at
startup are treated as an empty store; write failures are logged and the
in-memory state keeps working.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from chisa_bot.exceptions import StoreError, StoreReadError, StoreWriteError

logger = logging.getLogger(__name__)

DocumentT = TypeVar("DocumentT", bound=BaseModel)

# Default leaderboard reset period
DEFAULT_RESET_AFTER = timedelta(days=7)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LeaderboardDocument(BaseModel):
    """On-disk leaderboard format."""

    last_reset: datetime = Field(default_factory=_utcnow)
    scores: dict[str, int] = Field(default_factory=dict)

    @field_validator("last_reset")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Files written without an offset are read as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class WarningsDocument(BaseModel):
    """On-disk warnings format: chat_id -> member_id -> count."""

    counts: dict[str, dict[str, int]] = Field(default_factory=dict)


class AutoTagDocument(BaseModel):
    """On-disk auto-tag preferences: chats where auto-tag is disabled."""

    disabled_chats: dict[str, bool] = Field(default_factory=dict)


class JsonStore(Generic[DocumentT]):
    """Base class for a lock-guarded, write-through JSON document.

    Subclasses set ``document_type`` and mutate ``self._document`` while
    holding ``self._lock``, then call ``self._save_locked()``.
    """

    document_type: type[DocumentT]

    def __init__(self, path: str | Path) -> None:
        """Initialize the store and load the document from disk.

        Args:
            path: Location of the JSON document.
        """
        self.path = Path(path)
        self._lock = threading.Lock()
        self._document = self._load()

    def flush(self) -> bool:
        """Write the current document to disk.

        Returns:
            True if the document was written.
        """
        with self._lock:
            return self._save_locked()

    def _load(self) -> DocumentT:
        try:
            return self._read()
        except StoreReadError as e:
            logger.error(
                "Failed to load store, starting empty",
                extra={"path": str(self.path), "error": str(e.original_error)},
            )
            return self._new_document()

    def _new_document(self) -> DocumentT:
        return self.document_type()

    def _read(self) -> DocumentT:
        if not self.path.exists():
            return self._new_document()
        try:
            raw = self.path.read_text(encoding="utf-8")
            return self.document_type.model_validate_json(raw)
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            raise StoreReadError(str(self.path), e) from e

    def _write(self) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(self._document.model_dump_json(indent=2), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StoreWriteError(str(self.path), e) from e

    def _save_locked(self) -> bool:
        # Caller holds self._lock
        try:
            self._write()
        except StoreError as e:
            logger.error(
                "Failed to save store",
                extra={"path": str(self.path), "error": str(e.original_error)},
            )
            return False
        return True


class ScoreStore(JsonStore[LeaderboardDocument]):
    """Cumulative player scores with a periodic full reset.

    Example:
        >>> store = ScoreStore("data/leaderboard.json")
        >>> store.add_score("Budi")
        1
    """

    document_type = LeaderboardDocument

    def __init__(
        self,
        path: str | Path,
        reset_after: timedelta = DEFAULT_RESET_AFTER,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the store.

        Args:
            path: Location of the leaderboard JSON document.
            reset_after: Period after which all scores are cleared.
            clock: Timezone-aware time source.
        """
        self.reset_after = reset_after
        self._clock = clock
        super().__init__(path)
        self.check_reset()

    def _new_document(self) -> LeaderboardDocument:
        return LeaderboardDocument(last_reset=self._clock())

    @property
    def last_reset(self) -> datetime:
        """When the scores were last cleared."""
        with self._lock:
            return self._document.last_reset

    def add_score(self, player: str, points: int = 1) -> int:
        """Add points to a player and persist immediately.

        Args:
            player: Player identity.
            points: Points to add.

        Returns:
            The player's new total.
        """
        with self._lock:
            scores = self._document.scores
            scores[player] = scores.get(player, 0) + points
            total = scores[player]
            self._save_locked()
        return total

    def get_score(self, player: str) -> int:
        with self._lock:
            return self._document.scores.get(player, 0)

    def scores(self) -> dict[str, int]:
        """Get a copy of all scores."""
        with self._lock:
            return dict(self._document.scores)

    def check_reset(self) -> bool:
        """Clear all scores if the reset period has elapsed.

        Returns:
            True if a reset happened.
        """
        with self._lock:
            return self._reset_if_due_locked()

    def autosave(self) -> None:
        """Periodic tick: apply a due reset and persist the document."""
        with self._lock:
            self._reset_if_due_locked(save=False)
            self._save_locked()

    def _reset_if_due_locked(self, save: bool = True) -> bool:
        now = self._clock()
        if now - self._document.last_reset <= self.reset_after:
            return False
        logger.info(
            "Leaderboard reset triggered",
            extra={"players": len(self._document.scores), "last_reset": self._document.last_reset.isoformat()},
        )
        self._document = LeaderboardDocument(last_reset=now, scores={})
        if save:
            self._save_locked()
        return True


class WarnStore(JsonStore[WarningsDocument]):
    """Warning counts per chat member."""

    document_type = WarningsDocument

    def add_warning(self, chat_id: str, member_id: str) -> int:
        """Increment a member's warning count.

        Returns:
            The new count.
        """
        with self._lock:
            chat = self._document.counts.setdefault(chat_id, {})
            chat[member_id] = chat.get(member_id, 0) + 1
            count = chat[member_id]
            self._save_locked()
        return count

    def get_warning(self, chat_id: str, member_id: str) -> int:
        """Get a member's warning count (0 if none)."""
        with self._lock:
            return self._document.counts.get(chat_id, {}).get(member_id, 0)

    def reset_warning(self, chat_id: str, member_id: str) -> bool:
        """Clear a member's warnings.

        Returns:
            True if the member had warnings.
        """
        with self._lock:
            chat = self._document.counts.get(chat_id)
            if not chat or member_id not in chat:
                return False
            del chat[member_id]
            if not chat:
                del self._document.counts[chat_id]
            self._save_locked()
        return True


class AutoTagStore(JsonStore[AutoTagDocument]):
    """Per-chat switch for mentioning new members in welcome messages.

    Auto-tag is enabled by default; only disabled chats are stored.
    """

    document_type = AutoTagDocument

    def is_disabled(self, chat_id: str) -> bool:
        with self._lock:
            return self._document.disabled_chats.get(chat_id, False)

    def set_disabled(self, chat_id: str, disabled: bool) -> None:
        """Update the preference for a chat and persist it."""
        with self._lock:
            if disabled:
                self._document.disabled_chats[chat_id] = True
            else:
                self._document.disabled_chats.pop(chat_id, None)
            self._save_locked()
