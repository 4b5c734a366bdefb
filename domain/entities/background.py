"""
Fire-and-forget task tracking for entity side effects.

Entities start some writes without awaiting them (a new set creating its
row, a removed set deleting its row, a workout saving its row). The event
loop only keeps weak references to tasks, so they are held here until they
finish, and any failure is logged instead of vanishing with the task.
"""
import asyncio
import logging
from functools import partial
from typing import Coroutine, Set

logger = logging.getLogger(__name__)

_pending: Set["asyncio.Future"] = set()


def _finished(description: str, level: int, task: "asyncio.Future") -> None:
    _pending.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.log(level, f"Background {description} failed: {exc}")


def spawn(
    coro: Coroutine,
    *,
    description: str,
    level: int = logging.WARNING,
) -> "asyncio.Task":
    """
    Schedule a coroutine on the running loop and keep it alive until done.

    Args:
        coro: Coroutine to run
        description: Short label used when logging a failure
        level: Log level for failures (cleanup is WARNING, lost data is ERROR)

    Returns:
        The scheduled task; awaiting it re-raises its exception

    Raises:
        RuntimeError: If called outside a running event loop
    """
    task = asyncio.get_running_loop().create_task(coro)
    _pending.add(task)
    task.add_done_callback(partial(_finished, description, level))
    return task


def pending_count() -> int:
    """Number of background tasks that have not finished yet."""
    return len(_pending)


async def wait_for_background_tasks() -> None:
    """Wait until every spawned task, including ones spawned meanwhile, is done."""
    while _pending:
        await asyncio.gather(*list(_pending), return_exceptions=True)
