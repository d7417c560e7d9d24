# layerable/config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from layerable.core.errors import ValidationError

DEFAULT_POLL_INTERVAL = 0.03


@dataclass(frozen=True)
class AutomataConfig:
    """
    Runtime settings of an Automata.

    :param poll_interval: Seconds a step waits for an event before re-checking
        whether any context is still active.
    :param announce_transitions: Enqueue a ``transitioned`` engine event after
        every re-entry, child entry and ordinary transition.
    """

    poll_interval: float = DEFAULT_POLL_INTERVAL
    announce_transitions: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.poll_interval, (int, float)) or isinstance(self.poll_interval, bool):
            raise ValidationError("poll_interval must be a number of seconds.")
        if self.poll_interval < 0:
            raise ValidationError("poll_interval must be >= 0.")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "AutomataConfig":
        """
        Build a config from a plain mapping, e.g. a section of an application config file.

        :raises ValidationError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(mapping) - known
        if unknown:
            raise ValidationError(f"Unknown automata settings: {sorted(unknown)}")
        return cls(**dict(mapping))
