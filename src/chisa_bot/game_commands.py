"""Chat commands for the guessing games."""

from __future__ import annotations

import logging
from functools import partial

from chisa_bot.games import AnswerStatus, GameKind, GameSession, GameSessionManager
from chisa_bot.messages import (
    MSG_GAME_ACTIVE,
    MSG_GAME_CORRECT,
    MSG_GAME_NONE,
    MSG_GAME_SURRENDER,
    MSG_GAME_TIMEOUT,
    MSG_GAME_TOO_HIGH,
    MSG_GAME_TOO_LOW,
    MSG_LEADERBOARD_EMPTY,
    MSG_LEADERBOARD_HEADER,
)
from chisa_bot.messaging import InboundMessage, Mention, ReplySink
from chisa_bot.metrics import Metrics
from chisa_bot.registry import CommandContext, CommandRegistry

logger = logging.getLogger(__name__)

# Command name -> (game kind, title shown above the question)
GAME_COMMANDS: dict[str, tuple[GameKind, str]] = {
    "tebakkata": (GameKind.WORD_SCRAMBLE, "Tebak Kata"),
    "tebakibukota": (GameKind.CAPITAL_QUIZ, "Tebak Ibu Kota"),
    "tebaknegara": (GameKind.COUNTRY_QUIZ, "Tebak Negara"),
    "tebakbenda": (GameKind.OBJECT_RIDDLE, "Tebak Benda"),
    "tebakbendera": (GameKind.FLAG_QUIZ, "Tebak Bendera"),
    "tebakangka": (GameKind.NUMBER_GUESS, "Tebak Angka"),
    "kuis": (GameKind.TRIVIA, "Kuis Pengetahuan"),
}

MEDALS = ("🥇", "🥈", "🥉")


def format_question(title: str, session: GameSession) -> str:
    """Render the opening message of a round."""
    if session.kind is GameKind.WORD_SCRAMBLE:
        body = f"Susun kata berikut: *{session.question.upper()}*"
    elif session.kind is GameKind.FLAG_QUIZ:
        body = f"Bendera negara apa ini?\n{session.question}"
    else:
        body = session.question
    return f"🎮 *{title}*\n\n{body}"


def format_leaderboard(entries: list[tuple[str, int]], reset_days: int) -> str:
    """Render leaderboard entries with medals for the top three."""
    if not entries:
        return MSG_LEADERBOARD_EMPTY

    lines = [MSG_LEADERBOARD_HEADER.format(days=reset_days)]
    for position, (player, score) in enumerate(entries):
        medal = MEDALS[position] if position < len(MEDALS) else f"{position + 1}."
        lines.append(f"{medal} {player}: *{score}* poin")
    return "\n".join(lines)


class GameCommands:
    """Game start, surrender, leaderboard and free-text answer handling."""

    def __init__(
        self,
        manager: GameSessionManager,
        sink: ReplySink,
        metrics: Metrics | None = None,
        leaderboard_reset_days: int = 7,
    ) -> None:
        self.manager = manager
        self.sink = sink
        self.metrics = metrics
        self.leaderboard_reset_days = leaderboard_reset_days

    def register(self, registry: CommandRegistry) -> None:
        """Register all game commands."""
        for name, (kind, title) in GAME_COMMANDS.items():
            registry.register(partial(self.start_game, kind, title), name)
        registry.register(self.surrender, "nyerah", "skip")
        registry.register(self.leaderboard, "leaderboard", "lb")

    async def start_game(self, kind: GameKind, title: str, ctx: CommandContext) -> None:
        chat_id = ctx.chat_id
        result = self.manager.start(chat_id, kind, on_timeout=partial(self.announce_timeout, chat_id))
        if not result.started:
            await ctx.reply(MSG_GAME_ACTIVE)
            return

        if self.metrics is not None:
            self.metrics.record_game_started()
        await ctx.reply(format_question(title, result.session))

    async def surrender(self, ctx: CommandContext) -> None:
        session = self.manager.surrender(ctx.chat_id)
        if session is None:
            await ctx.reply(MSG_GAME_NONE)
            return
        await ctx.reply(MSG_GAME_SURRENDER.format(answer=session.answer))

    async def leaderboard(self, ctx: CommandContext) -> None:
        await ctx.reply(format_leaderboard(self.manager.leaderboard(), self.leaderboard_reset_days))

    async def handle_answer(self, message: InboundMessage) -> None:
        """Check free text against the chat's running game.

        Wrong answers are ignored silently; number guesses get a hint.
        """
        result = self.manager.submit_answer(message.chat_id, message.display_name, message.text)

        if result.status is AnswerStatus.CORRECT:
            if self.metrics is not None:
                self.metrics.record_game_won()
            await self.sink.send_text(
                message.chat_id,
                MSG_GAME_CORRECT.format(player=message.display_name),
                mentions=(Mention(message.sender_id, message.display_name),),
                reply_to=message.message_id,
            )
        elif result.status is AnswerStatus.TOO_LOW:
            await self.sink.send_text(message.chat_id, MSG_GAME_TOO_LOW, reply_to=message.message_id)
        elif result.status is AnswerStatus.TOO_HIGH:
            await self.sink.send_text(message.chat_id, MSG_GAME_TOO_HIGH, reply_to=message.message_id)

    async def announce_timeout(self, chat_id: str, session: GameSession) -> None:
        if self.metrics is not None:
            self.metrics.record_game_timed_out()
        await self.sink.send_text(chat_id, MSG_GAME_TIMEOUT.format(answer=session.answer))
