"""Command-line entry point: ``python -m chisa_bot`` or ``chisa-bot``.

Loads settings, configures structured logging, then runs the Telegram
adapter until polling ends or SIGINT/SIGTERM arrives. Shutdown drains
in-flight messages and flushes the stores within ``shutdown_timeout``.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
import sys

import structlog

from chisa_bot.bot import ChisaBot
from chisa_bot.config import Settings, get_settings

STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def configure_structlog(log_level: str) -> None:
    """Route stdlib logging and structlog through one console renderer.

    Args:
        log_level: Logging level name, any case.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _load_settings() -> Settings:
    try:
        return get_settings()
    except Exception as e:
        print(f"Failed to load settings: {e}", file=sys.stderr)
        print("Set TELEGRAM_BOT_TOKEN in the environment or in a .env file.", file=sys.stderr)
        sys.exit(1)


def _install_stop_signals(stop: asyncio.Event) -> None:
    log = structlog.get_logger(__name__)
    loop = asyncio.get_running_loop()

    def on_signal(sig: signal.Signals) -> None:
        log.info("Received signal", signal=sig.name)
        stop.set()

    for sig in STOP_SIGNALS:
        # add_signal_handler is unavailable on Windows event loops
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, on_signal, sig)


async def shutdown(bot: ChisaBot, timeout: int = 30) -> None:
    """Stop the bot, giving up after ``timeout`` seconds.

    Errors are logged, never raised.
    """
    log = structlog.get_logger(__name__)
    log.info("Initiating graceful shutdown...", timeout=timeout)

    try:
        await asyncio.wait_for(bot.stop(), timeout=timeout)
        log.info("Bot stopped successfully")
    except TimeoutError:
        log.warning("Shutdown timed out", seconds=timeout)
    except Exception as e:
        log.error("Error during shutdown", error=str(e))


async def main() -> None:
    """Run Chisa Bot until polling ends or a stop signal arrives."""
    settings = _load_settings()

    configure_structlog(settings.log_level)
    log = structlog.get_logger(__name__)
    log.info(
        "Starting Chisa Bot",
        app_name=settings.app_name,
        version=settings.app_version,
        prefixes=settings.command_prefixes,
        rate_limit=settings.rate_limit_enabled,
        groups_only=settings.groups_only,
    )

    bot = ChisaBot(settings)
    stop = asyncio.Event()
    _install_stop_signals(stop)

    polling = asyncio.create_task(bot.start(), name="polling")
    stop_waiter = asyncio.create_task(stop.wait(), name="stop-signal")
    try:
        done, pending = await asyncio.wait({polling, stop_waiter}, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        if polling in done and polling.exception() is not None:
            log.error("Polling stopped with an error", error=str(polling.exception()))
    finally:
        await shutdown(bot, timeout=settings.shutdown_timeout)
        log.info("Shutdown complete")


def run() -> None:
    """Console script entry point."""
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(main())


if __name__ == "__main__":
    run()
