# layerable/core/hooks.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Protocol

if TYPE_CHECKING:
    from layerable.runtime.context import Context

logger = logging.getLogger(__name__)

Observer = Callable[[], None]


class HookProtocol(Protocol):
    """
    Shape of a hook object. Every method is optional; missing ones are skipped.
    """

    def on_enter(self, context: "Context") -> Any: ...

    def on_exit(self, context: "Context") -> Any: ...

    def on_transition(self, context: "Context", source: str, target: str) -> Any: ...

    def on_error(self, error: Exception) -> Any: ...


class HookManager:
    """
    Manages the observers notified after every context-stack mutation and the
    hook objects listening to context lifecycle events (on_enter, on_exit,
    on_transition, on_error). Users can attach logging, UI mirroring or custom
    side effects without altering core logic.
    """

    def __init__(self, hooks: Optional[List[HookProtocol]] = None, observers: Optional[List[Observer]] = None) -> None:
        self._hooks: List[HookProtocol] = list(hooks or [])
        self._observers: List[Observer] = list(observers or [])

    def register_hook(self, hook: HookProtocol) -> None:
        """
        Add a new hook to the manager's list of hooks.

        :param hook: An object implementing any subset of HookProtocol.
        """
        self._hooks.append(hook)

    def add_observer(self, observer: Observer) -> None:
        """
        Add a no-argument callback run after every push, pop, truncation or re-entry.
        """
        if not callable(observer):
            raise TypeError("Observer must be callable.")
        self._observers.append(observer)

    def remove_observer(self, observer: Observer) -> None:
        self._observers.remove(observer)

    @property
    def hooks(self) -> List[HookProtocol]:
        return list(self._hooks)

    @property
    def observers(self) -> List[Observer]:
        return list(self._observers)

    def notify_contexts_changed(self) -> None:
        for observer in self._observers:
            observer()

    def execute_on_enter(self, context: "Context") -> None:
        for hook in self._hooks:
            if hasattr(hook, "on_enter"):
                hook.on_enter(context)

    def execute_on_exit(self, context: "Context") -> None:
        for hook in self._hooks:
            if hasattr(hook, "on_exit"):
                hook.on_exit(context)

    def execute_on_transition(self, context: "Context", source: str, target: str) -> None:
        for hook in self._hooks:
            if hasattr(hook, "on_transition"):
                hook.on_transition(context, source, target)

    def execute_on_error(self, error: Exception) -> None:
        """
        Run all hooks' on_error logic. A failing error hook is logged and does
        not mask the original error.
        """
        for hook in self._hooks:
            if hasattr(hook, "on_error"):
                try:
                    hook.on_error(error)
                except Exception:
                    logger.exception("on_error hook %r failed", hook)
