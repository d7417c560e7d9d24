# layerable/runtime/automata.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Generic, List, Mapping, Optional, Tuple, TypeVar

from layerable.config import AutomataConfig
from layerable.core.hooks import HookManager, Observer
from layerable.core.states import State
from layerable.core.systems import SystemRegistry
from layerable.core.tokens import parse_token
from layerable.core.validations import Validator
from layerable.runtime.context import Context, ContextStack
from layerable.runtime.engine import TransitionEngine
from layerable.runtime.event_queue import AsyncEventQueue

logger = logging.getLogger(__name__)

CargoT = TypeVar("CargoT")


class Automata(Generic[CargoT]):
    """
    A stack of independently defined systems driven by a FIFO event queue.

    Each step takes one event and offers it to every active context from the
    root to the leaf. The first context whose handler requests a transition
    that actually applies consumes the event for that step.
    """

    def __init__(
        self,
        cargo_factory: Callable[[], CargoT],
        config: Optional[AutomataConfig] = None,
        on_update_contexts: Optional[Observer] = None,
        hooks: Optional[List[Any]] = None,
        validator: Optional[Validator] = None,
    ) -> None:
        """
        :param cargo_factory: Builds a fresh cargo for every new context, e.g. a class.
        :param config: Runtime settings; defaults to AutomataConfig().
        :param on_update_contexts: No-argument observer run after every stack mutation.
        :param hooks: Hook objects implementing any of on_enter, on_exit, on_transition, on_error.
        :param validator: Validator used for system registration and incoming events.
        """
        if not callable(cargo_factory):
            raise TypeError("cargo_factory must be callable.")
        self._config = config or AutomataConfig()
        self._validator = validator or Validator()
        self._registry = SystemRegistry(self._validator)
        self._stack = ContextStack()
        self._queue = AsyncEventQueue()
        self._hooks = HookManager(hooks)
        if on_update_contexts is not None:
            self._hooks.add_observer(on_update_contexts)
        self._engine = TransitionEngine(
            self._registry,
            self._stack,
            self._queue,
            cargo_factory,
            hooks=self._hooks,
            config=self._config,
        )
        self._latest_transition = time.time()

    @property
    def config(self) -> AutomataConfig:
        return self._config

    @property
    def queue(self) -> AsyncEventQueue:
        return self._queue

    @property
    def latest_transition(self) -> float:
        """Epoch seconds of the last applied transition (construction time before any)."""
        return self._latest_transition

    @property
    def contexts(self) -> Tuple[Context, ...]:
        return tuple(self._stack)

    def register_system(self, name: str, states: Mapping[str, State]) -> None:
        """
        Register a system; it must be registered before any context of it is pushed.

        :raises ValidationError: If the name is taken or the definition is invalid.
        """
        self._registry.register(name, states)

    def push_context(self, system_name: str) -> Context:
        """
        Create and activate a context for ``system_name`` on top of the stack.

        :raises SystemNotFoundError: If the system is not registered.
        """
        return self._engine.push_context(system_name)

    def push_event(self, event: Any = None) -> None:
        """Enqueue an event (an Event, a mapping, or None for an empty one)."""
        self._queue.push(self._validator.validate_event(event))

    def push_event_threadsafe(self, event: Any = None) -> None:
        """Enqueue an event from a thread that is not running the step loop."""
        self._queue.push_threadsafe(self._validator.validate_event(event))

    def add_observer(self, observer: Observer) -> None:
        self._hooks.add_observer(observer)

    def remove_observer(self, observer: Observer) -> None:
        self._hooks.remove_observer(observer)

    def register_hook(self, hook: Any) -> None:
        self._hooks.register_hook(hook)

    def get_context(self, system_name: str) -> Optional[Context]:
        """The outermost active context bound to ``system_name``, if any."""
        return self._stack.find(system_name)

    def get_cargo_snapshot(self) -> List[CargoT]:
        """Cargo of every active context, root to leaf."""
        return self._stack.cargo_snapshot()

    def is_top_of_stack(self, system_name: str) -> bool:
        top = self._stack.top
        return top is not None and top.system == system_name

    async def step(self, timeout: Optional[float] = 0) -> bool:
        """
        Dispatch at most one event and apply at most one transition.

        :param timeout: How long to wait for an event; 0 does not wait, None waits forever.
        :return: True while at least one context remains active.
        """
        event = await self._queue.get(timeout)
        if event is None:
            return bool(self._stack)

        try:
            for context in self._stack:
                if not event.targets(context.system):
                    continue

                state = self._registry.get_state(context.system, context.current_state)
                next_state = await state.run(event, context.cargo)
                if not next_state:
                    # Declined: let the deeper contexts see the event.
                    continue

                if await self._engine.transition_to(parse_token(next_state), context):
                    self._latest_transition = time.time()
                    break
        except Exception as error:
            logger.exception("step failed while dispatching %r", event)
            self._hooks.execute_on_error(error)
            raise

        return bool(self._stack)

    async def run(self, interval: Optional[float] = None) -> None:
        """
        Step until no context remains active.

        :param interval: Seconds each step waits for an event before
            re-checking the stack; defaults to ``config.poll_interval``.
        """
        if interval is None:
            interval = self._config.poll_interval
        while await self.step(timeout=interval):
            pass
        logger.debug("no active contexts left, stopping")
