"""layerable: layered, event-driven finite state machines

A stack of independently defined systems (named sets of states). Entering a
child system pushes a new context on top of its parent; ending it pops back.
Events are drained from a FIFO queue and offered to every active context from
the root to the leaf, one transition per step. See README.md for the
reserved next-state tokens.
"""

from .config import AutomataConfig
from .core import (
    AutomataError,
    Event,
    FinalizationError,
    State,
    StateNotFoundError,
    SystemNotFoundError,
    TransitionError,
    ValidationError,
)
from .runtime import Automata, Context, Executor

__version__ = "0.1.0"

__all__ = [
    "Automata",
    "AutomataConfig",
    "AutomataError",
    "Context",
    "Event",
    "Executor",
    "FinalizationError",
    "State",
    "StateNotFoundError",
    "SystemNotFoundError",
    "TransitionError",
    "ValidationError",
]
