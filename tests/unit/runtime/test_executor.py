# tests/unit/runtime/test_executor.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import threading
import time

import pytest

from layerable.core.states import State
from layerable.runtime.executor import Executor
from tests.helpers import declines, returns


def test_executor_runs_until_stack_empty(automata):
    automata.register_system("main", {"@start": State(returns("@end"))})
    automata.push_context("main")

    executor = Executor(automata, interval=0.01)
    executor.run()
    assert automata.contexts == ()
    assert not executor.running


def test_executor_defaults_to_config_interval(automata):
    assert Executor(automata).interval == automata.config.poll_interval


def test_executor_stop_from_other_thread(automata):
    automata.register_system("main", {"@start": State(declines)})
    automata.push_context("main")
    executor = Executor(automata, interval=0.01)

    thread = threading.Thread(target=executor.run)
    thread.start()
    deadline = time.time() + 2.0
    while not executor.running and time.time() < deadline:
        time.sleep(0.005)
    executor.stop()
    thread.join(timeout=2.0)

    assert not thread.is_alive()
    assert len(automata.contexts) == 1


@pytest.mark.asyncio
async def test_run_async_with_remote_producer(automata):
    names = []

    def start(event, cargo):
        names.append(event.name)
        return "@end" if event.name == "quit" else None

    automata.register_system("main", {"@start": State(start)})
    automata.push_context("main")
    executor = Executor(automata, interval=0.01)

    producer = threading.Timer(0.05, automata.push_event_threadsafe, args=({"name": "quit"},))
    producer.start()
    await executor.run_async()
    producer.join()

    assert names == ["entered", "quit"]
    assert automata.contexts == ()
