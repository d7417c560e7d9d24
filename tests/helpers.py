# tests/helpers.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import List


class Cargo:
    """Mutable payload used across the test suite."""

    def __init__(self) -> None:
        self.log: List[str] = []
        self.count = 0


def returns(value):
    """A handler that always requests ``value``."""

    def handler(event, cargo):
        return value

    return handler


def declines(event, cargo):
    return None


async def drain(automata, limit: int = 50) -> int:
    """Step until the queue is empty; return the number of dispatched events."""
    steps = 0
    while not automata.queue.is_empty() and steps < limit:
        await automata.step()
        steps += 1
    return steps
