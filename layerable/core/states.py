# layerable/core/states.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Optional, Union

from layerable.core.errors import ValidationError
from layerable.core.events import Event

HandlerResult = Optional[str]
StateHandler = Callable[[Event, Any], Union[HandlerResult, Awaitable[HandlerResult]]]
TransitionObserver = Callable[[str, str, Any], None]


class State:
    """
    A unit of behavior inside a system: a handler deciding the next state for
    an event, plus an optional observer called whenever a transition lands on
    this state.
    """

    __slots__ = ("_handler", "_on_transition")

    def __init__(self, handler: StateHandler, on_transition: Optional[TransitionObserver] = None) -> None:
        """
        :param handler: ``handler(event, cargo)`` returning the next state name or None.
            May be a coroutine function.
        :param on_transition: ``on_transition(to, source, cargo)`` observer.
        """
        if not callable(handler):
            raise ValidationError("State handler must be callable.")
        if on_transition is not None and not callable(on_transition):
            raise ValidationError("State on_transition observer must be callable.")
        self._handler = handler
        self._on_transition = on_transition

    @property
    def handler(self) -> StateHandler:
        return self._handler

    @property
    def on_transition(self) -> Optional[TransitionObserver]:
        return self._on_transition

    async def run(self, event: Event, cargo: Any) -> HandlerResult:
        """
        Invoke the handler, awaiting its result when it is awaitable.

        :param event: The event being dispatched.
        :param cargo: The cargo owned by the context running this state.
        :return: The requested next state, or a falsy value to decline.
        """
        result = self._handler(event, cargo)
        if inspect.isawaitable(result):
            result = await result
        return result

    def notify_transition(self, to: str, source: str, cargo: Any) -> None:
        """Call the transition observer, if any."""
        if self._on_transition is not None:
            self._on_transition(to, source, cargo)

    def __repr__(self) -> str:
        name = getattr(self._handler, "__name__", repr(self._handler))
        return f"State(handler={name})"
