# layerable/runtime/engine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional

from layerable.config import AutomataConfig
from layerable.core.errors import FinalizationError
from layerable.core.events import Event
from layerable.core.hooks import HookManager
from layerable.core.systems import SystemRegistry
from layerable.core.tokens import END, FINALIZE, START, Token, TokenKind
from layerable.runtime.context import Context, ContextStack
from layerable.runtime.event_queue import AsyncEventQueue

logger = logging.getLogger(__name__)


class TransitionEngine:
    """
    Resolves next-state tokens against a context and the stack it lives on,
    mutating the stack and firing finalize/enter notifications.
    """

    def __init__(
        self,
        registry: SystemRegistry,
        stack: ContextStack,
        queue: AsyncEventQueue,
        cargo_factory: Callable[[], Any],
        hooks: Optional[HookManager] = None,
        config: Optional[AutomataConfig] = None,
    ) -> None:
        self._registry = registry
        self._stack = stack
        self._queue = queue
        self._cargo_factory = cargo_factory
        self._hooks = hooks or HookManager()
        self._config = config or AutomataConfig()

    def push_context(self, system_name: str) -> Context:
        """
        Activate a new context for ``system_name`` on top of the stack.

        :raises SystemNotFoundError: If the system is not registered.
        :raises StateNotFoundError: If the system has no ``@start`` state.
        """
        start = self._registry.get_state(system_name, START)
        context = Context(system=system_name, current_state=START, cargo=self._cargo_factory())
        self._stack.push(context)

        start.notify_transition(system_name, START, context.cargo)
        self._hooks.execute_on_enter(context)
        self._hooks.notify_contexts_changed()

        self._queue.push(Event.entered(system_name))
        logger.debug("enter: %s (depth %d)", system_name, len(self._stack))
        return context

    async def finalize_context(self, context: Context) -> None:
        """Run the system's ``@finalize`` state for ``context``, if it defines one."""
        state = self._registry.find_state(context.system, FINALIZE)
        if state is None:
            return
        logger.debug("finalize: %s", context.system)
        await state.run(Event.finalize(context), context.cargo)

    async def remove_descendants(self, context: Context, include_self: bool = False) -> None:
        """
        Truncate the stack above ``context`` (and ``context`` itself when
        ``include_self``), finalizing every removed context concurrently.

        The truncation is committed only after every finalization has finished.
        Removed contexts finalize in no particular order relative to each other.

        :raises FinalizationError: If any ``@finalize`` handler failed; the
            stack is left unchanged.
        """
        index = self._stack.index_of(context) + (0 if include_self else 1)
        removed = self._stack.slice_from(index)
        if not removed:
            return

        results = await asyncio.gather(
            *(self.finalize_context(c) for c in removed),
            return_exceptions=True,
        )
        errors = [r for r in results if isinstance(r, BaseException)]
        if errors:
            for error in errors:
                logger.error("finalization failed: %r", error)
            raise FinalizationError(
                f"{len(errors)} of {len(removed)} contexts failed to finalize", errors
            ) from errors[0]

        self._stack.truncate(index)
        for c in removed:
            self._hooks.execute_on_exit(c)
            logger.debug("trash: %s", c.system)

    async def transition_to(self, token: Token, context: Context) -> bool:
        """
        Apply a requested transition for ``context``.

        :param token: The parsed next-state request.
        :param context: The context whose handler made the request.
        :return: True if the stack or state changed, False for a rejected no-op.
        :raises StateNotFoundError: If an ordinary target state does not exist.
        """
        if token.kind is TokenKind.END:
            return await self._end(context)

        if token.kind is TokenKind.CURRENT:
            await self._reenter(context)
        elif token.kind is TokenKind.CHILD:
            if not await self._enter_child(token, context):
                return False
        elif token.name == context.current_state:
            # Same-state re-entry must be requested explicitly with @current.
            return False
        else:
            await self._move(token.name, context)

        self._hooks.notify_contexts_changed()
        return True

    async def _end(self, context: Context) -> bool:
        top = self._stack.top
        if top is None:
            return False

        # @end belongs to the requesting system; teardown always pops the top.
        end_state = self._registry.find_state(context.system, END)
        if end_state is not None:
            await end_state.run(Event.end(context), context.cargo)

        await self.remove_descendants(top, include_self=True)
        self._hooks.notify_contexts_changed()
        self._queue.push(Event.leaved(top.system, top.cargo))
        logger.debug("leave: %s", top.system)
        return True

    async def _reenter(self, context: Context) -> None:
        current = context.current_state
        state = self._registry.get_state(context.system, current)
        await self.remove_descendants(context)

        state.notify_transition(current, current, context.cargo)
        self._hooks.execute_on_transition(context, current, current)
        self._announce(context.system, current, current)
        logger.debug("re-transition(%s): %s", context.system, current)

    async def _enter_child(self, token: Token, context: Context) -> bool:
        if token.is_self_entry:
            system_name = context.system
        else:
            system_name = token.name
            index = self._stack.index_of(context)
            if index + 1 < len(self._stack) and self._stack[index + 1].system == system_name:
                return False
            self._registry.get_system(system_name)

        await self.remove_descendants(context)
        self.push_context(system_name)

        self._announce(context.system, context.current_state, str(token))
        logger.debug("enter(%s): => #%s", context.system, system_name)
        return True

    async def _move(self, target: str, context: Context) -> None:
        state = self._registry.get_state(context.system, target)
        source = context.current_state
        await self.remove_descendants(context)

        state.notify_transition(target, source, context.cargo)
        logger.debug("transition(%s): %s => %s", context.system, source, target)
        context.current_state = target

        self._hooks.execute_on_transition(context, source, target)
        self._announce(context.system, source, target)

    def _announce(self, system_name: str, source: str, target: str) -> None:
        if self._config.announce_transitions:
            self._queue.push(Event.transitioned(system_name, source, target))
