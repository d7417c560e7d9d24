"""
Runtime package: the context stack, the event queue, the transition engine
and the Automata facade that steps them.
"""

from .automata import Automata
from .context import Context, ContextStack
from .engine import TransitionEngine
from .event_queue import AsyncEventQueue
from .executor import Executor

__all__ = ["Automata", "AsyncEventQueue", "Context", "ContextStack", "Executor", "TransitionEngine"]
