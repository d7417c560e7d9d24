"""
Core package: states, systems, events, reserved tokens, hooks and errors.
"""

from .errors import (
    AutomataError,
    FinalizationError,
    StateNotFoundError,
    SystemNotFoundError,
    TransitionError,
    ValidationError,
)
from .events import ENGINE_EVENT_TYPE, Event
from .hooks import HookManager
from .states import State
from .systems import SystemRegistry
from .tokens import CHILD_PREFIX, CURRENT, END, FINALIZE, START, Token, TokenKind, parse_token
from .validations import Validator

__all__ = [
    # States and systems
    "State",
    "SystemRegistry",
    "Validator",
    # Events
    "Event",
    "ENGINE_EVENT_TYPE",
    # Tokens
    "Token",
    "TokenKind",
    "parse_token",
    "START",
    "END",
    "FINALIZE",
    "CURRENT",
    "CHILD_PREFIX",
    # Hooks
    "HookManager",
    # Errors
    "AutomataError",
    "FinalizationError",
    "StateNotFoundError",
    "SystemNotFoundError",
    "TransitionError",
    "ValidationError",
]
