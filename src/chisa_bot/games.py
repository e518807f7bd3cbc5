"""Guessing game sessions.

Each chat can run at most one game at a time. A session ends when somebody
answers correctly, when the chat surrenders, or when the answer window
elapses (number guessing never expires). All state lives inside
:class:`GameSessionManager` and is guarded by a single lock; the delayed
timeout re-checks session identity under that lock, so a timer that fires
after the session was answered, surrendered or replaced does nothing.
"""

from __future__ import annotations

import asyncio
import logging
import random
import re
import threading
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from chisa_bot import game_content

logger = logging.getLogger(__name__)

# Seconds before an unanswered round expires
DEFAULT_GAME_TIMEOUT = 30.0

# Entries shown by the leaderboard
LEADERBOARD_SIZE = 10

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


class GameKind(Enum):
    """Supported game variants."""

    WORD_SCRAMBLE = "word_scramble"
    CAPITAL_QUIZ = "capital_quiz"
    COUNTRY_QUIZ = "country_quiz"
    OBJECT_RIDDLE = "object_riddle"
    FLAG_QUIZ = "flag_quiz"
    NUMBER_GUESS = "number_guess"
    TRIVIA = "trivia"

    @property
    def expires(self) -> bool:
        """Whether rounds of this kind time out."""
        return self is not GameKind.NUMBER_GUESS


@dataclass(eq=False)
class GameSession:
    """One running game round.

    Sessions compare by identity: two rounds with the same question are
    still different sessions.

    Attributes:
        kind: The game variant.
        question: Prompt shown to the chat.
        answer: Canonical answer for display.
        accepted_answers: Normalized (trimmed, lowercased) acceptable answers.
        started_at: Unix timestamp when the round started.
    """

    kind: GameKind
    question: str
    answer: str
    accepted_answers: frozenset[str]
    started_at: float

    def accepts(self, text: str) -> bool:
        """Check whether text is an acceptable answer."""
        return normalize_answer(text) in self.accepted_answers


@dataclass(frozen=True)
class StartResult:
    """Result of starting a game.

    Attributes:
        started: True if a new session was created.
        session: The new session, or the already active one when rejected.
        reason: Rejection reason, None on success.
    """

    started: bool
    session: GameSession
    reason: str | None = None


class AnswerStatus(Enum):
    """Outcome of submitting an answer."""

    NOT_ACTIVE = "not_active"
    CORRECT = "correct"
    INCORRECT = "incorrect"
    TOO_LOW = "too_low"
    TOO_HIGH = "too_high"

    @property
    def is_hint(self) -> bool:
        return self in (AnswerStatus.TOO_LOW, AnswerStatus.TOO_HIGH)


@dataclass(frozen=True)
class AnswerResult:
    """Result of submitting an answer.

    Attributes:
        status: What happened.
        session: The session the answer was checked against, if any.
        score: The player's new total score on a correct answer.
    """

    status: AnswerStatus
    session: GameSession | None = None
    score: int | None = None


class ScoreKeeper(Protocol):
    """Persistent player score storage used by the game manager."""

    def add_score(self, player: str, points: int = 1) -> int: ...

    def scores(self) -> dict[str, int]: ...


TimeoutCallback = Callable[[GameSession], Awaitable[None]]


def normalize_answer(text: str) -> str:
    """Normalize an answer for matching."""
    return text.strip().lower()


def scramble_word(word: str, rng: random.Random) -> str:
    """Shuffle the letters of a word.

    The result is always a permutation of ``word`` and differs from it
    whenever that is possible (length >= 2 and not all letters equal).

    Args:
        word: The word to scramble.
        rng: Random source.

    Returns:
        The scrambled word.
    """
    if len(word) < 2:
        return word

    letters = list(word)
    rng.shuffle(letters)
    scrambled = "".join(letters)
    if scrambled != word:
        return scrambled

    # Shuffle reproduced the word; swap the first two letters instead
    letters = list(word)
    letters[0], letters[1] = letters[1], letters[0]
    scrambled = "".join(letters)
    if scrambled != word:
        return scrambled

    for index, letter in enumerate(word):
        if letter != word[0]:
            letters = list(word)
            letters[0], letters[index] = letters[index], letters[0]
            return "".join(letters)
    return word


def build_session(kind: GameKind, rng: random.Random, now: float) -> GameSession:
    """Create a new round of the given kind with random content.

    Args:
        kind: The game variant.
        rng: Random source.
        now: Start timestamp.

    Returns:
        A fresh GameSession.
    """
    if kind is GameKind.WORD_SCRAMBLE:
        word = rng.choice(game_content.WORDS)
        question, answer, accepted = scramble_word(word, rng), word.title(), (word,)
    elif kind is GameKind.CAPITAL_QUIZ:
        item = rng.choice(game_content.CAPITALS)
        question, answer, accepted = rng.choice(item.clues), item.answer, (item.answer,)
    elif kind is GameKind.COUNTRY_QUIZ:
        item = rng.choice(game_content.COUNTRIES)
        question, answer, accepted = rng.choice(item.clues), item.answer, (item.answer,)
    elif kind is GameKind.OBJECT_RIDDLE:
        riddle = rng.choice(game_content.OBJECT_RIDDLES)
        question, answer, accepted = riddle.prompt, riddle.answer, riddle.accepted
    elif kind is GameKind.FLAG_QUIZ:
        flag = rng.choice(game_content.FLAGS)
        question, answer, accepted = flag.emoji, flag.country, (flag.country,)
    elif kind is GameKind.NUMBER_GUESS:
        target = str(rng.randint(game_content.NUMBER_MIN, game_content.NUMBER_MAX))
        question = f"Tebak angka antara {game_content.NUMBER_MIN} sampai {game_content.NUMBER_MAX}!"
        answer, accepted = target, (target,)
    elif kind is GameKind.TRIVIA:
        riddle = rng.choice(game_content.TRIVIA)
        question, answer, accepted = riddle.prompt, riddle.answer, riddle.accepted
    else:  # pragma: no cover
        raise ValueError(f"Unknown game kind: {kind}")

    return GameSession(
        kind=kind,
        question=question,
        answer=answer,
        accepted_answers=frozenset(normalize_answer(a) for a in accepted),
        started_at=now,
    )


class GameSessionManager:
    """Owns the active game session of every chat.

    Example:
        >>> manager = GameSessionManager(score_store)
        >>> result = manager.start("chat-1", GameKind.TRIVIA)
        >>> manager.submit_answer("chat-1", "Budi", result.session.answer).status
        <AnswerStatus.CORRECT: 'correct'>
    """

    def __init__(
        self,
        score_store: ScoreKeeper,
        timeout: float = DEFAULT_GAME_TIMEOUT,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the manager.

        Args:
            score_store: Where points for correct answers are recorded.
            timeout: Seconds before an unanswered round expires.
            rng: Random source for game content.
            clock: Time source for session start timestamps.
        """
        self._scores = score_store
        self.timeout = timeout
        self._rng = rng or random.Random()
        self._clock = clock

        self._lock = threading.Lock()
        self._sessions: dict[str, GameSession] = {}
        self._timers: set[asyncio.Task[None]] = set()

    def start(
        self,
        chat_id: str,
        kind: GameKind,
        on_timeout: TimeoutCallback | None = None,
    ) -> StartResult:
        """Start a game in a chat unless one is already running.

        When ``on_timeout`` is given and the kind expires, a timer task is
        scheduled on the running event loop; it awaits ``on_timeout`` only if
        this very session is still active when the timeout elapses.

        Args:
            chat_id: The chat to start the game in.
            kind: The game variant.
            on_timeout: Async callback announcing an expired session.

        Returns:
            StartResult with the new session, or the active one if rejected.
        """
        with self._lock:
            current = self._sessions.get(chat_id)
            if current is not None:
                return StartResult(started=False, session=current, reason="already active")

            session = build_session(kind, self._rng, self._clock())
            self._sessions[chat_id] = session

        logger.info(
            "Game started",
            extra={"chat_id": chat_id, "kind": kind.value},
        )

        if on_timeout is not None and kind.expires:
            self._schedule_timeout(chat_id, session, on_timeout)

        return StartResult(started=True, session=session)

    def submit_answer(self, chat_id: str, player: str, text: str) -> AnswerResult:
        """Check a free-text message against the chat's active session.

        Args:
            chat_id: The chat the message was sent in.
            player: Display identity credited on a correct answer.
            text: The candidate answer.

        Returns:
            AnswerResult describing the outcome.
        """
        guess = normalize_answer(text)

        with self._lock:
            session = self._sessions.get(chat_id)
            if session is None:
                return AnswerResult(AnswerStatus.NOT_ACTIVE)

            if guess not in session.accepted_answers:
                return AnswerResult(self._miss_status(session, guess), session)

            del self._sessions[chat_id]

        score = self._scores.add_score(player, 1)
        logger.info(
            "Game answered correctly",
            extra={"chat_id": chat_id, "kind": session.kind.value, "player": player},
        )
        return AnswerResult(AnswerStatus.CORRECT, session, score)

    def surrender(self, chat_id: str) -> GameSession | None:
        """End the chat's active session without a winner.

        Returns:
            The removed session (to reveal its answer), or None if idle.
        """
        with self._lock:
            session = self._sessions.pop(chat_id, None)

        if session is not None:
            logger.info(
                "Game surrendered",
                extra={"chat_id": chat_id, "kind": session.kind.value},
            )
        return session

    def expire(self, chat_id: str, session: GameSession) -> bool:
        """Remove a session if it is still the chat's active one.

        Args:
            chat_id: The chat the session was started in.
            session: The exact session instance the timer was created for.

        Returns:
            True if the session was removed, False if it was already resolved.
        """
        with self._lock:
            if self._sessions.get(chat_id) is not session:
                return False
            del self._sessions[chat_id]

        logger.info(
            "Game timed out",
            extra={"chat_id": chat_id, "kind": session.kind.value},
        )
        return True

    def active(self, chat_id: str) -> GameSession | None:
        """Get the chat's active session, if any."""
        with self._lock:
            return self._sessions.get(chat_id)

    @property
    def active_count(self) -> int:
        """Number of chats with a running game."""
        with self._lock:
            return len(self._sessions)

    def leaderboard(self, limit: int = LEADERBOARD_SIZE) -> list[tuple[str, int]]:
        """Get top players sorted by score, highest first.

        Args:
            limit: Maximum number of entries.

        Returns:
            List of (player, score) tuples.
        """
        ranked = sorted(self._scores.scores().items(), key=lambda item: item[1], reverse=True)
        return ranked[:limit]

    async def cancel_timers(self) -> None:
        """Cancel pending timeout timers (used on shutdown)."""
        timers = list(self._timers)
        for task in timers:
            task.cancel()
        if timers:
            await asyncio.gather(*timers, return_exceptions=True)

    def _miss_status(self, session: GameSession, guess: str) -> AnswerStatus:
        if session.kind is not GameKind.NUMBER_GUESS or not _INTEGER_PATTERN.match(guess):
            return AnswerStatus.INCORRECT

        target = int(session.answer)
        value = int(guess)
        if value < target:
            return AnswerStatus.TOO_LOW
        if value > target:
            return AnswerStatus.TOO_HIGH
        return AnswerStatus.INCORRECT

    def _schedule_timeout(
        self,
        chat_id: str,
        session: GameSession,
        on_timeout: TimeoutCallback,
    ) -> None:
        task = asyncio.get_running_loop().create_task(
            self._expire_later(chat_id, session, on_timeout)
        )
        self._timers.add(task)
        task.add_done_callback(self._timers.discard)

    async def _expire_later(
        self,
        chat_id: str,
        session: GameSession,
        on_timeout: TimeoutCallback,
    ) -> None:
        await asyncio.sleep(self.timeout)
        if not self.expire(chat_id, session):
            return
        try:
            await on_timeout(session)
        except Exception:
            logger.exception(
                "Timeout announcement failed",
                extra={"chat_id": chat_id, "kind": session.kind.value},
            )
