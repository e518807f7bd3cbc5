"""Tests for inbound message dispatch."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from chisa_bot.dispatcher import Dispatcher
from chisa_bot.metrics import Metrics
from chisa_bot.parser import CommandParser
from chisa_bot.ratelimit import RateLimiter
from chisa_bot.registry import CommandRegistry


@pytest.fixture
def handler() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def answer_handler() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def metrics() -> Metrics:
    return Metrics()


@pytest.fixture
def limiter(clock) -> RateLimiter:
    return RateLimiter(cooldown=3.0, chat_limit=20, chat_window=60.0, clock=clock)


@pytest.fixture
def dispatcher(sink, handler, answer_handler, metrics, limiter) -> Dispatcher:
    registry = CommandRegistry(metrics)
    registry.register(handler, "menu", "help")
    return Dispatcher(
        CommandParser(),
        registry,
        sink,
        limiter=limiter,
        answer_handler=answer_handler,
        metrics=metrics,
    )


class TestHandle:
    """Tests for Dispatcher.handle routing."""

    @pytest.mark.asyncio
    async def test_command_runs_handler(self, dispatcher: Dispatcher, make_message, handler, answer_handler) -> None:
        await dispatcher.handle(make_message("!help"))

        handler.assert_awaited_once()
        ctx = handler.await_args.args[0]
        assert ctx.command.name == "help"
        answer_handler.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_free_text_goes_to_answer_handler(self, dispatcher: Dispatcher, make_message, handler, answer_handler) -> None:
        message = make_message("jakarta")

        await dispatcher.handle(message)

        answer_handler.assert_awaited_once_with(message)
        handler.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_command_not_treated_as_answer(self, dispatcher: Dispatcher, make_message, answer_handler, sink) -> None:
        await dispatcher.handle(make_message(".tidakada"))

        answer_handler.assert_not_awaited()
        assert sink.texts == []

    @pytest.mark.asyncio
    async def test_blank_messages_ignored(self, dispatcher: Dispatcher, make_message, answer_handler, metrics) -> None:
        for text in ("", "   \n"):
            await dispatcher.handle(make_message(text))

        answer_handler.assert_not_awaited()
        assert metrics.total_messages == 0

    @pytest.mark.asyncio
    async def test_bot_text_not_offered_as_answer(self, dispatcher: Dispatcher, make_message, answer_handler) -> None:
        await dispatcher.handle(make_message("jakarta", from_me=True))

        answer_handler.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_groups_only(self, sink, handler, make_message) -> None:
        registry = CommandRegistry()
        registry.register(handler, "menu")
        dispatcher = Dispatcher(CommandParser(), registry, sink, groups_only=True)

        await dispatcher.handle(make_message(".menu", is_group=False))
        handler.assert_not_awaited()

        await dispatcher.handle(make_message(".menu", is_group=True))
        handler.assert_awaited_once()


class TestRateLimiting:
    """Tests for rate limiting inside the dispatcher."""

    @pytest.mark.asyncio
    async def test_second_command_in_cooldown_dropped(self, dispatcher: Dispatcher, make_message, handler, metrics, sink) -> None:
        """Denied messages are dropped silently."""
        await dispatcher.handle(make_message(".menu"))
        await dispatcher.handle(make_message(".menu"))

        assert handler.await_count == 1
        assert sink.texts == []
        assert metrics.rate_limit_counts == {"sender_cooldown": 1}

    @pytest.mark.asyncio
    async def test_free_text_is_limited_by_default(self, dispatcher: Dispatcher, make_message, handler, answer_handler) -> None:
        await dispatcher.handle(make_message("tebakan"))
        await dispatcher.handle(make_message(".menu"))

        answer_handler.assert_awaited_once()
        handler.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_commands_scope_skips_free_text(self, sink, handler, answer_handler, limiter, make_message) -> None:
        registry = CommandRegistry()
        registry.register(handler, "menu")
        dispatcher = Dispatcher(
            CommandParser(),
            registry,
            sink,
            limiter=limiter,
            answer_handler=answer_handler,
            rate_limit_scope="commands",
        )

        for guess in ("10", "20", "30"):
            await dispatcher.handle(make_message(guess))
        await dispatcher.handle(make_message(".menu"))

        assert answer_handler.await_count == 3
        handler.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_bot_messages_bypass_limiter(self, dispatcher: Dispatcher, make_message, handler) -> None:
        for _ in range(3):
            await dispatcher.handle(make_message(".menu", from_me=True))

        assert handler.await_count == 3

    @pytest.mark.asyncio
    async def test_allowed_after_cooldown(self, dispatcher: Dispatcher, make_message, handler, clock) -> None:
        await dispatcher.handle(make_message(".menu"))
        clock.advance(3.0)
        await dispatcher.handle(make_message(".menu"))

        assert handler.await_count == 2


class TestSubmit:
    """Tests for task-per-message submission."""

    @pytest.mark.asyncio
    async def test_submit_runs_on_task(self, dispatcher: Dispatcher, make_message, answer_handler) -> None:
        task = dispatcher.submit(make_message("halo"))
        await task

        answer_handler.assert_awaited_once()
        assert dispatcher.in_flight == 0

    @pytest.mark.asyncio
    async def test_fault_is_contained(self, dispatcher: Dispatcher, make_message, answer_handler) -> None:
        """A crashing handler must not fail the task."""
        answer_handler.side_effect = RuntimeError("boom")

        task = dispatcher.submit(make_message("halo"))
        await task

        assert task.exception() is None

    @pytest.mark.asyncio
    async def test_slow_message_does_not_block_others(self, sink, make_message) -> None:
        release = asyncio.Event()
        order: list[str] = []

        async def answer(message) -> None:
            if message.text == "slow":
                await release.wait()
            order.append(message.text)

        dispatcher = Dispatcher(CommandParser(), CommandRegistry(), sink, answer_handler=answer)
        slow = dispatcher.submit(make_message("slow", chat_id="c1"))
        fast = dispatcher.submit(make_message("fast", chat_id="c2"))

        await fast
        assert order == ["fast"]

        release.set()
        await slow
        assert order == ["fast", "slow"]

    @pytest.mark.asyncio
    async def test_drain_waits_for_in_flight(self, sink, make_message) -> None:
        done: list[str] = []

        async def answer(message) -> None:
            await asyncio.sleep(0.01)
            done.append(message.text)

        dispatcher = Dispatcher(CommandParser(), CommandRegistry(), sink, answer_handler=answer)
        dispatcher.submit(make_message("a", chat_id="c1"))
        dispatcher.submit(make_message("b", chat_id="c2"))

        await dispatcher.drain(timeout=1.0)

        assert sorted(done) == ["a", "b"]

    @pytest.mark.asyncio
    async def test_drain_cancels_after_timeout(self, sink, make_message) -> None:
        async def answer(message) -> None:
            await asyncio.sleep(10)

        dispatcher = Dispatcher(CommandParser(), CommandRegistry(), sink, answer_handler=answer)
        task = dispatcher.submit(make_message("a"))

        await dispatcher.drain(timeout=0.01)

        assert task.cancelled()
