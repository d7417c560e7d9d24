# layerable/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import List, Optional


class AutomataError(Exception):
    """
    Base exception class for errors within the layered automata library.
    """


class SystemNotFoundError(AutomataError, KeyError):
    """
    Raised when a context is requested for a system that was never registered.
    """

    def __init__(self, system: str) -> None:
        super().__init__(f"System '{system}' is not registered.")
        self.system = system

    def __str__(self) -> str:
        return self.args[0]


class StateNotFoundError(AutomataError, KeyError):
    """
    Raised when a requested state does not exist in a registered system.
    """

    def __init__(self, system: str, state: str) -> None:
        super().__init__(f"State '{state}' does not exist in system '{system}'.")
        self.system = system
        self.state = state

    def __str__(self) -> str:
        return self.args[0]


class TransitionError(AutomataError):
    """
    Raised when a handler requests a transition with a malformed token.
    """


class ValidationError(AutomataError):
    """
    Raised when validation detects configuration or registration constraint violations.
    """


class FinalizationError(AutomataError):
    """
    Raised when one or more @finalize handlers fail while the stack is being truncated.
    The stack is left untouched when this is raised.
    """

    def __init__(self, message: str, errors: Optional[List[BaseException]] = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])
