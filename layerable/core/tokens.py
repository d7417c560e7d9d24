# layerable/core/tokens.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from layerable.core.errors import TransitionError

START = "@start"
END = "@end"
FINALIZE = "@finalize"
CURRENT = "@current"
CHILD_PREFIX = "#"

RESERVED_STATES = frozenset({START, END, FINALIZE, CURRENT})


class TokenKind(Enum):
    START = "start"
    END = "end"
    FINALIZE = "finalize"
    CURRENT = "current"
    CHILD = "child"
    STATE = "state"


@dataclass(frozen=True)
class Token:
    """
    A parsed next-state request returned by a state handler.

    For CHILD tokens ``name`` is the system to enter; for every other kind it
    is the state name as written by the handler.
    """

    kind: TokenKind
    name: str

    @property
    def is_self_entry(self) -> bool:
        """True for ``#@current``: enter a fresh instance of the requesting system."""
        return self.kind is TokenKind.CHILD and self.name == CURRENT

    def __str__(self) -> str:
        if self.kind is TokenKind.CHILD:
            return f"{CHILD_PREFIX}{self.name}"
        return self.name


_RESERVED_KINDS = {
    START: TokenKind.START,
    END: TokenKind.END,
    FINALIZE: TokenKind.FINALIZE,
    CURRENT: TokenKind.CURRENT,
}


def parse_token(raw: str) -> Token:
    """
    Parse a handler's return value into a Token.

    :param raw: The next-state string, e.g. ``"idle"``, ``"@end"`` or ``"#sub"``.
    :return: The parsed Token.
    :raises TransitionError: If the string is empty or names no child system.
    """
    if isinstance(raw, Token):
        return raw
    if not isinstance(raw, str) or not raw:
        raise TransitionError(f"Invalid next-state token: {raw!r}")

    if raw.startswith(CHILD_PREFIX):
        system = raw[len(CHILD_PREFIX) :]
        if not system:
            raise TransitionError("Child-system token '#' must name a system.")
        return Token(TokenKind.CHILD, system)

    return Token(_RESERVED_KINDS.get(raw, TokenKind.STATE), raw)
