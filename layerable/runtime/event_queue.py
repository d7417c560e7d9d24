# layerable/runtime/event_queue.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio
from typing import Optional

from layerable.core.events import Event


class AsyncEventQueue:
    """
    Unbounded FIFO of events backed by ``asyncio.Queue``. Pushing never blocks
    and is allowed at any time, including from inside a handler; consumers
    await the next event instead of polling on a timer.
    """

    def __init__(self) -> None:
        self._queue: "asyncio.Queue[Event]" = asyncio.Queue()
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def push(self, event: Event) -> None:
        """Append an event at the tail."""
        self._queue.put_nowait(event)

    def push_threadsafe(self, event: Event) -> None:
        """
        Append an event from a thread other than the one consuming the queue.
        Falls back to a plain push before the consumer has started.
        """
        loop = self._loop
        if loop is None or loop.is_closed() or _running_loop() is loop:
            self.push(event)
        else:
            loop.call_soon_threadsafe(self._queue.put_nowait, event)

    async def get(self, timeout: Optional[float] = None) -> Optional[Event]:
        """
        Remove and return the head event.

        :param timeout: None waits indefinitely, 0 only takes an event that is
            already queued, a positive value bounds the wait in seconds.
        :return: The next event, or None if none became ready in time.
        """
        self._loop = asyncio.get_running_loop()
        if timeout is not None and timeout <= 0:
            event = self.get_nowait()
            if event is None:
                # Yield so producers on this loop get a chance to run.
                await asyncio.sleep(0)
            return event
        if timeout is None:
            return await self._queue.get()
        try:
            return await asyncio.wait_for(self._queue.get(), timeout=timeout)
        except asyncio.TimeoutError:
            return None

    def get_nowait(self) -> Optional[Event]:
        try:
            return self._queue.get_nowait()
        except asyncio.QueueEmpty:
            return None

    def clear(self) -> None:
        while not self._queue.empty():
            try:
                self._queue.get_nowait()
            except asyncio.QueueEmpty:
                break

    def qsize(self) -> int:
        return self._queue.qsize()

    def is_empty(self) -> bool:
        return self._queue.empty()


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None
