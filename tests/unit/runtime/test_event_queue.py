# tests/unit/runtime/test_event_queue.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import asyncio
import threading

import pytest
from hypothesis import given
from hypothesis import strategies as st

from layerable.core.events import Event
from layerable.runtime.event_queue import AsyncEventQueue


@pytest.mark.asyncio
async def test_fifo_order():
    queue = AsyncEventQueue()
    first, second = Event(name="a"), Event(name="b")
    queue.push(first)
    queue.push(second)
    assert queue.qsize() == 2
    assert await queue.get(0) is first
    assert await queue.get(0) is second
    assert await queue.get(0) is None
    assert queue.is_empty()


@pytest.mark.asyncio
async def test_get_times_out():
    queue = AsyncEventQueue()
    assert await queue.get(timeout=0.01) is None


@pytest.mark.asyncio
async def test_get_waits_for_late_push():
    queue = AsyncEventQueue()
    event = Event(name="late")

    async def produce():
        await asyncio.sleep(0.01)
        queue.push(event)

    producer = asyncio.ensure_future(produce())
    assert await queue.get(timeout=1.0) is event
    await producer


@pytest.mark.asyncio
async def test_push_threadsafe_from_other_thread():
    queue = AsyncEventQueue()
    assert await queue.get(0) is None  # binds the consuming loop
    event = Event(name="remote")

    thread = threading.Thread(target=queue.push_threadsafe, args=(event,))
    thread.start()
    thread.join()
    assert await queue.get(timeout=1.0) is event


def test_push_threadsafe_before_consumer_starts():
    queue = AsyncEventQueue()
    queue.push_threadsafe(Event(name="early"))
    assert queue.get_nowait() == Event(name="early")


def test_clear():
    queue = AsyncEventQueue()
    queue.push(Event())
    queue.push(Event())
    queue.clear()
    assert queue.get_nowait() is None


@pytest.mark.property
@given(st.lists(st.text(max_size=5), max_size=30))
def test_fifo_property(names):
    queue = AsyncEventQueue()
    for name in names:
        queue.push(Event(name=name))
    drained = []
    while not queue.is_empty():
        drained.append(queue.get_nowait().name)
    assert drained == names
