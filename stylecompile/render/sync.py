"""Forced-synchronous execution of asynchronous render calls.

Some engines only offer an asynchronous API, yet the blocking compile path
must return within the caller's stack frame. ``force_sync`` drains a private
event loop until the single pending operation settles, records its outcome,
and only then inspects it.
"""

import asyncio
import threading
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

T = TypeVar("T")


def force_sync(factory: Callable[[], Awaitable[T]]) -> T:
    """Run one awaitable to completion and return its result.

    The awaitable is created inside the draining loop. If the calling thread
    already runs an event loop, the drain happens on a dedicated thread that
    is joined before returning, so control never goes back to the caller's
    loop while the operation is pending.

    Args:
        factory: Zero-argument callable producing the awaitable

    Returns:
        The awaitable's result

    Raises:
        Whatever the awaitable raised
    """
    outcome: dict[str, Any] = {}

    def drain() -> None:
        loop = asyncio.new_event_loop()
        try:
            outcome["value"] = loop.run_until_complete(_await(factory))
        except BaseException as e:  # re-raised in the calling thread below
            outcome["error"] = e
        finally:
            loop.run_until_complete(loop.shutdown_asyncgens())
            loop.close()

    try:
        asyncio.get_running_loop()
    except RuntimeError:
        drain()
    else:
        worker = threading.Thread(target=drain, name="stylecompile-force-sync")
        worker.start()
        worker.join()

    if "error" in outcome:
        raise outcome["error"]
    return outcome["value"]


async def _await(factory: Callable[[], Awaitable[T]]) -> T:
    return await factory()
