"""Tests for forced-synchronous execution of async calls."""

import asyncio
import threading

import pytest

from stylecompile.errors import EngineError
from stylecompile.render import force_sync


def test_returns_value_without_running_loop():
    async def work():
        await asyncio.sleep(0)
        return "done"

    assert force_sync(work) == "done"


def test_propagates_error():
    """Test that the awaitable's exception is raised to the caller."""

    async def fail():
        await asyncio.sleep(0)
        raise EngineError("broken")

    with pytest.raises(EngineError, match="broken"):
        force_sync(fail)


@pytest.mark.asyncio
async def test_drains_inside_running_loop():
    """Test that a running loop in the caller's thread is not re-entered."""
    caller_thread = threading.get_ident()
    seen_threads = []

    async def work():
        seen_threads.append(threading.get_ident())
        await asyncio.sleep(0.01)
        return 42

    assert force_sync(work) == 42
    assert seen_threads and seen_threads[0] != caller_thread


@pytest.mark.asyncio
async def test_error_inside_running_loop():
    async def fail():
        raise ValueError("bad value")

    with pytest.raises(ValueError, match="bad value"):
        force_sync(fail)


def test_awaitable_created_in_draining_loop():
    """Test that the awaitable is created after the private loop exists."""
    loops = []

    async def work():
        loops.append(asyncio.get_running_loop())
        return None

    force_sync(work)
    force_sync(work)

    assert len(loops) == 2
    assert loops[0] is not loops[1]
    assert all(loop.is_closed() for loop in loops)
