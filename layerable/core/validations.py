# layerable/core/validations.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Any, List, Mapping

from layerable.core.errors import ValidationError
from layerable.core.events import Event
from layerable.core.states import State
from layerable.core.tokens import CHILD_PREFIX, CURRENT, RESERVED_STATES, START


class Validator:
    """
    Performs registration-time validation of systems and events, turning a
    class of runtime lookup failures into early, explicit errors.
    """

    def __init__(self) -> None:
        self._rules_engine = _ValidationRulesEngine()

    def validate_system(self, name: str, states: Mapping[str, State]) -> List[str]:
        """
        Check a system definition before it is registered.

        :param name: The system name.
        :param states: Mapping of state name to State.
        :return: Non-fatal warnings about the definition.
        :raises ValidationError: If the definition is unusable.
        """
        return self._rules_engine.validate_system(name, states)

    def validate_event(self, event: Any) -> Event:
        """
        Coerce and check an event before it is queued.

        :raises ValidationError: If the event cannot be used.
        """
        return self._rules_engine.validate_event(event)


class _ValidationRulesEngine:
    """
    Internal engine applying the default rule set. Centralizes validation
    logic for easier maintenance.
    """

    def __init__(self) -> None:
        self._default_rules = _DefaultValidationRules

    def validate_system(self, name: str, states: Mapping[str, State]) -> List[str]:
        return self._default_rules.validate_system(name, states)

    def validate_event(self, event: Any) -> Event:
        return self._default_rules.validate_event(event)


class _DefaultValidationRules:
    """
    Built-in rules:
    - System names are non-empty strings, carry no child prefix and are not reserved state names.
    - State maps hold only State instances keyed by plain or reserved names.
    - ``@current`` and ``#``-prefixed names are tokens, never states.
    - A missing ``@start`` is reported as a warning.
    """

    @staticmethod
    def validate_system(name: str, states: Mapping[str, State]) -> List[str]:
        if not isinstance(name, str) or not name:
            raise ValidationError("System name must be a non-empty string.")
        if name.startswith(CHILD_PREFIX) or name in RESERVED_STATES:
            raise ValidationError(f"System name '{name}' collides with a reserved token.")
        if not isinstance(states, Mapping):
            raise ValidationError(f"States of system '{name}' must be a mapping of name to State.")

        for state_name, state in states.items():
            if not isinstance(state_name, str) or not state_name:
                raise ValidationError(f"System '{name}' has an invalid state name: {state_name!r}.")
            if state_name == CURRENT or state_name.startswith(CHILD_PREFIX):
                raise ValidationError(f"'{state_name}' in system '{name}' is a reserved token, not a state.")
            if not isinstance(state, State):
                raise ValidationError(f"State '{state_name}' of system '{name}' is not a State instance.")

        warnings = []
        if START not in states:
            warnings.append(f"System '{name}' has no '{START}' state; pushing it will fail.")
        return warnings

    @staticmethod
    def validate_event(event: Any) -> Event:
        return Event.coerce(event)
