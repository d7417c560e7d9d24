# layerable/core/events.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Optional

from layerable.core.errors import ValidationError

if TYPE_CHECKING:
    from layerable.runtime.context import Context

ENGINE_EVENT_TYPE = "automata"


@dataclass
class Event:
    """
    Represents a free-form record pushed onto the event queue. Every field is
    optional; events produced by the engine itself carry ``type == "automata"``.
    """

    type: Optional[str] = None
    name: Optional[str] = None
    data: Any = None

    @classmethod
    def coerce(cls, obj: Any = None) -> "Event":
        """
        Build an Event from None, an existing Event, or a mapping with
        ``type``/``name``/``data`` keys.

        :raises ValidationError: If the object cannot be turned into an Event.
        """
        if obj is None:
            return cls()
        if isinstance(obj, Event):
            return obj
        if isinstance(obj, Mapping):
            unknown = set(obj) - {"type", "name", "data"}
            if unknown:
                raise ValidationError(f"Unknown event fields: {sorted(unknown)}")
            return cls(type=obj.get("type"), name=obj.get("name"), data=obj.get("data"))
        raise ValidationError(f"Cannot build an event from {type(obj).__name__}.")

    @property
    def is_engine_event(self) -> bool:
        return self.type == ENGINE_EVENT_TYPE

    def targets(self, system_name: str) -> bool:
        """
        Whether this event may be offered to a context of ``system_name``.

        Only targeted transition events are filtered; they reach the contexts
        whose system matches ``data["system_name"]``.
        """
        if not (self.is_engine_event and self.name == "transition"):
            return True
        data = self.data if isinstance(self.data, Mapping) else {}
        return data.get("system_name") == system_name

    @classmethod
    def entered(cls, system_name: str) -> "Event":
        return cls(ENGINE_EVENT_TYPE, "entered", {"system_name": system_name})

    @classmethod
    def leaved(cls, system_name: str, cargo: Any) -> "Event":
        return cls(ENGINE_EVENT_TYPE, "leaved", {"system_name": system_name, "cargo": cargo})

    @classmethod
    def transitioned(cls, system_name: str, source: str, target: str) -> "Event":
        return cls(
            ENGINE_EVENT_TYPE,
            "transitioned",
            {"system_name": system_name, "source": source, "target": target},
        )

    @classmethod
    def finalize(cls, context: "Context") -> "Event":
        return cls(ENGINE_EVENT_TYPE, "finalize", {"context": context})

    @classmethod
    def end(cls, context: "Context") -> "Event":
        return cls(ENGINE_EVENT_TYPE, "end", {"context": context})

    @classmethod
    def transition(cls, system_name: str, **data: Any) -> "Event":
        """A transition event delivered only to contexts of ``system_name``."""
        return cls(ENGINE_EVENT_TYPE, "transition", {"system_name": system_name, **data})
