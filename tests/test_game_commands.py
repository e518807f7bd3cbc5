"""Tests for the game chat commands."""

from __future__ import annotations

import random

import pytest

from chisa_bot.game_commands import GAME_COMMANDS, GameCommands, format_leaderboard, format_question
from chisa_bot.games import GameKind, GameSession, GameSessionManager
from chisa_bot.messages import (
    MSG_GAME_ACTIVE,
    MSG_GAME_NONE,
    MSG_GAME_TOO_HIGH,
    MSG_GAME_TOO_LOW,
    MSG_LEADERBOARD_EMPTY,
)
from chisa_bot.messaging import Mention
from chisa_bot.metrics import Metrics
from chisa_bot.registry import CommandRegistry


@pytest.fixture
def metrics() -> Metrics:
    return Metrics()


@pytest.fixture
def manager(score_store) -> GameSessionManager:
    return GameSessionManager(score_store, timeout=30.0, rng=random.Random(7))


@pytest.fixture
def commands(manager: GameSessionManager, sink, metrics: Metrics) -> GameCommands:
    return GameCommands(manager, sink, metrics=metrics)


def _session(kind: GameKind, question: str, answer: str) -> GameSession:
    return GameSession(
        kind=kind,
        question=question,
        answer=answer,
        accepted_answers=frozenset({answer.lower()}),
        started_at=0.0,
    )


class TestFormatting:
    """Tests for question and leaderboard rendering."""

    def test_word_scramble_is_uppercased(self) -> None:
        text = format_question("Tebak Kata", _session(GameKind.WORD_SCRAMBLE, "uknci", "Kucing"))

        assert text == "🎮 *Tebak Kata*\n\nSusun kata berikut: *UKNCI*"

    def test_flag_question(self) -> None:
        text = format_question("Tebak Bendera", _session(GameKind.FLAG_QUIZ, "🇯🇵", "Jepang"))

        assert text.endswith("Bendera negara apa ini?\n🇯🇵")

    def test_plain_question(self) -> None:
        text = format_question("Kuis", _session(GameKind.TRIVIA, "Planet terbesar?", "Jupiter"))

        assert text == "🎮 *Kuis*\n\nPlanet terbesar?"

    def test_empty_leaderboard(self) -> None:
        assert format_leaderboard([], 7) == MSG_LEADERBOARD_EMPTY

    def test_leaderboard_medals(self) -> None:
        entries = [("Ani", 9), ("Budi", 5), ("Citra", 3), ("Dodi", 1)]

        lines = format_leaderboard(entries, 7).splitlines()

        assert "7 hari" in lines[1]
        assert lines[-4:] == [
            "🥇 Ani: *9* poin",
            "🥈 Budi: *5* poin",
            "🥉 Citra: *3* poin",
            "4. Dodi: *1* poin",
        ]


class TestRegistration:
    def test_registers_every_game_and_aliases(self, commands: GameCommands) -> None:
        registry = CommandRegistry()

        commands.register(registry)

        for name in [*GAME_COMMANDS, "nyerah", "skip", "leaderboard", "lb"]:
            assert name in registry


class TestStartGame:
    """Tests for starting rounds."""

    @pytest.mark.asyncio
    async def test_start_replies_with_question(
        self, commands: GameCommands, manager: GameSessionManager, make_context, sink, metrics: Metrics
    ) -> None:
        await commands.start_game(GameKind.TRIVIA, "Kuis Pengetahuan", make_context(".kuis"))

        session = manager.active("chat-1")
        assert session is not None
        assert sink.last_text == format_question("Kuis Pengetahuan", session)
        assert sink.texts[-1].reply_to == "100"
        assert metrics.games_started == 1
        await manager.cancel_timers()

    @pytest.mark.asyncio
    async def test_second_game_rejected(
        self, commands: GameCommands, manager: GameSessionManager, make_context, sink, metrics: Metrics
    ) -> None:
        """Only one game may run per chat."""
        await commands.start_game(GameKind.NUMBER_GUESS, "Tebak Angka", make_context(".tebakangka"))
        first = manager.active("chat-1")

        await commands.start_game(GameKind.TRIVIA, "Kuis", make_context(".kuis"))

        assert sink.last_text == MSG_GAME_ACTIVE
        assert manager.active("chat-1") is first
        assert metrics.games_started == 1

    @pytest.mark.asyncio
    async def test_games_are_per_chat(self, commands: GameCommands, manager: GameSessionManager, make_context) -> None:
        await commands.start_game(GameKind.NUMBER_GUESS, "Tebak Angka", make_context(".tebakangka", chat_id="a"))
        await commands.start_game(GameKind.NUMBER_GUESS, "Tebak Angka", make_context(".tebakangka", chat_id="b"))

        assert manager.active_count == 2


class TestSurrender:
    @pytest.mark.asyncio
    async def test_without_game(self, commands: GameCommands, make_context, sink) -> None:
        await commands.surrender(make_context(".nyerah"))

        assert sink.last_text == MSG_GAME_NONE

    @pytest.mark.asyncio
    async def test_reveals_answer(self, commands: GameCommands, manager: GameSessionManager, make_context, sink) -> None:
        await commands.start_game(GameKind.NUMBER_GUESS, "Tebak Angka", make_context(".tebakangka"))
        answer = manager.active("chat-1").answer

        await commands.surrender(make_context(".skip"))

        assert f"*{answer}*" in sink.last_text
        assert manager.active("chat-1") is None


class TestHandleAnswer:
    """Tests for free-text answers."""

    @pytest.mark.asyncio
    async def test_correct_answer_scores_and_mentions(
        self, commands: GameCommands, manager: GameSessionManager, make_context, make_message, sink, score_store, metrics: Metrics
    ) -> None:
        await commands.start_game(GameKind.NUMBER_GUESS, "Tebak Angka", make_context(".tebakangka"))
        answer = manager.active("chat-1").answer

        await commands.handle_answer(make_message(f" {answer} ", message_id="101"))

        sent = sink.texts[-1]
        assert "@Budi" in sent.text
        assert sent.mentions == (Mention("user-1", "Budi"),)
        assert sent.reply_to == "101"
        assert score_store.data == {"Budi": 1}
        assert metrics.games_won == 1
        assert manager.active("chat-1") is None

    @pytest.mark.asyncio
    async def test_score_key_falls_back_to_sender_id(
        self, commands: GameCommands, manager: GameSessionManager, make_context, make_message, score_store
    ) -> None:
        await commands.start_game(GameKind.NUMBER_GUESS, "Tebak Angka", make_context(".tebakangka"))
        answer = manager.active("chat-1").answer

        await commands.handle_answer(make_message(answer, sender_name=""))

        assert score_store.data == {"+user-1": 1}

    @pytest.mark.asyncio
    async def test_number_hints(self, commands: GameCommands, manager: GameSessionManager, make_context, make_message, sink) -> None:
        await commands.start_game(GameKind.NUMBER_GUESS, "Tebak Angka", make_context(".tebakangka"))
        target = int(manager.active("chat-1").answer)

        await commands.handle_answer(make_message(str(target - 1000)))
        assert sink.last_text == MSG_GAME_TOO_LOW

        await commands.handle_answer(make_message(str(target + 1000)))
        assert sink.last_text == MSG_GAME_TOO_HIGH

    @pytest.mark.asyncio
    async def test_wrong_answer_is_silent(self, commands: GameCommands, make_context, make_message, sink) -> None:
        await commands.start_game(GameKind.NUMBER_GUESS, "Tebak Angka", make_context(".tebakangka"))
        sent_before = len(sink.texts)

        await commands.handle_answer(make_message("bukan angka"))

        assert len(sink.texts) == sent_before

    @pytest.mark.asyncio
    async def test_no_game_is_silent(self, commands: GameCommands, make_message, sink) -> None:
        await commands.handle_answer(make_message("jakarta"))

        assert sink.texts == []


class TestTimeoutAndLeaderboard:
    @pytest.mark.asyncio
    async def test_announce_timeout(self, commands: GameCommands, sink, metrics: Metrics) -> None:
        await commands.announce_timeout("chat-1", _session(GameKind.TRIVIA, "?", "Jupiter"))

        sent = sink.texts[-1]
        assert "*Jupiter*" in sent.text
        assert sent.reply_to is None
        assert metrics.games_timed_out == 1

    @pytest.mark.asyncio
    async def test_round_times_out_in_chat(self, score_store, sink, make_context) -> None:
        manager = GameSessionManager(score_store, timeout=0.01, rng=random.Random(1))
        commands = GameCommands(manager, sink)

        await commands.start_game(GameKind.TRIVIA, "Kuis", make_context(".kuis"))
        answer = manager.active("chat-1").answer
        for task in list(manager._timers):
            await task

        assert manager.active("chat-1") is None
        assert f"*{answer}*" in sink.last_text

    @pytest.mark.asyncio
    async def test_leaderboard(self, commands: GameCommands, score_store, make_context, sink) -> None:
        score_store.add_score("Ani", 3)
        score_store.add_score("Budi", 5)

        await commands.leaderboard(make_context(".lb"))

        assert "🥇 Budi: *5* poin" in sink.last_text
        assert "🥈 Ani: *3* poin" in sink.last_text
