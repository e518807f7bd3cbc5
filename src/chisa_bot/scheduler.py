"""Periodic background tasks."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

PeriodicAction = Callable[[], Awaitable[None] | None]


async def run_periodic(interval: float, action: PeriodicAction, name: str) -> None:
    """Run an action every ``interval`` seconds until cancelled.

    The action may be sync or async. A failing tick is logged and the loop
    keeps running.

    Args:
        interval: Seconds between ticks.
        action: Callable invoked on each tick.
        name: Task name used in log records.
    """
    logger.debug("Periodic task started", extra={"task": name, "interval": interval})
    try:
        while True:
            await asyncio.sleep(interval)
            try:
                result = action()
                if asyncio.iscoroutine(result):
                    await result
            except Exception:
                logger.exception("Periodic task failed", extra={"task": name})
    finally:
        logger.debug("Periodic task stopped", extra={"task": name})


def start_periodic(interval: float, action: PeriodicAction, name: str) -> asyncio.Task[None]:
    """Schedule :func:`run_periodic` on the running loop.

    Returns:
        The created task; cancel it to stop the loop.
    """
    return asyncio.get_running_loop().create_task(run_periodic(interval, action, name), name=name)
