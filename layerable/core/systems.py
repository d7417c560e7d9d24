# layerable/core/systems.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from layerable.core.errors import StateNotFoundError, SystemNotFoundError, ValidationError
from layerable.core.states import State
from layerable.core.validations import Validator

logger = logging.getLogger(__name__)


class SystemRegistry:
    """
    Owned table of registered systems: system name -> state name -> State.
    Definitions are validated and copied on registration, so later changes to
    the caller's mapping have no effect.
    """

    def __init__(self, validator: Optional[Validator] = None) -> None:
        self._validator = validator or Validator()
        self._systems: Dict[str, Mapping[str, State]] = {}

    def register(self, name: str, states: Mapping[str, State]) -> None:
        """
        Register a system under a unique name.

        :param name: The system name, later used by ``#name`` tokens.
        :param states: Mapping of state name to State.
        :raises ValidationError: If the name is taken or the definition is invalid.
        """
        warnings = self._validator.validate_system(name, states)
        if name in self._systems:
            raise ValidationError(f"System '{name}' is already registered.")
        for warning in warnings:
            logger.warning(warning)
        self._systems[name] = MappingProxyType(dict(states))
        logger.debug("registered system %s with states %s", name, sorted(states))

    def get_system(self, name: str) -> Mapping[str, State]:
        try:
            return self._systems[name]
        except KeyError:
            raise SystemNotFoundError(name) from None

    def get_state(self, system: str, state: str) -> State:
        """
        Look up a state, failing fast when it does not exist.

        :raises SystemNotFoundError: If the system is unknown.
        :raises StateNotFoundError: If the system has no such state.
        """
        found = self.get_system(system).get(state)
        if found is None:
            raise StateNotFoundError(system, state)
        return found

    def find_state(self, system: str, state: str) -> Optional[State]:
        """Look up an optional state such as ``@end`` or ``@finalize``."""
        return self.get_system(system).get(state)

    def names(self) -> List[str]:
        return list(self._systems)

    def __contains__(self, name: object) -> bool:
        return name in self._systems

    def __len__(self) -> int:
        return len(self._systems)
