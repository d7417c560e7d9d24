# layerable/runtime/executor.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio
import threading
from typing import Optional

from layerable.runtime.automata import Automata


class Executor:
    """
    Drives an Automata: keeps stepping until its context stack is empty or
    ``stop()`` is called, possibly from another thread.
    """

    def __init__(self, automata: Automata, interval: Optional[float] = None) -> None:
        """
        :param automata: Automata instance to run.
        :param interval: Seconds each step waits for an event; defaults to the automata's config.
        """
        self.automata = automata
        self.interval = automata.config.poll_interval if interval is None else interval
        self._running = False
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        with self._lock:
            return self._running

    def run(self) -> None:
        """
        Blocking entry point that owns its own event loop.
        Returns once the stack is empty or ``stop()`` was called.
        """
        asyncio.run(self.run_async())

    async def run_async(self) -> None:
        """Step the automata on the current event loop until stopped or exhausted."""
        with self._lock:
            self._running = True

        try:
            while True:
                with self._lock:
                    if not self._running:
                        break
                if not await self.automata.step(timeout=self.interval):
                    break
        finally:
            with self._lock:
                self._running = False

    def stop(self) -> None:
        """
        Signal the loop to stop after the step in progress.
        """
        with self._lock:
            self._running = False
