"""
Runtime context stack: one activation per nested system, root first.
"""

from dataclasses import dataclass
from typing import Any, Iterator, List, Optional


@dataclass(eq=False)
class Context:
    """
    One activation of a system on the stack. Contexts compare by identity,
    so the same system may appear at several depths.
    """

    system: str
    current_state: str
    cargo: Any

    def __repr__(self) -> str:
        return f"Context({self.system}:{self.current_state})"


class ContextStack:
    """
    Ordered contexts where index 0 is the root and the last element the
    innermost leaf. Contexts are appended one at a time and removed only by
    truncation.
    """

    def __init__(self) -> None:
        self._contexts: List[Context] = []

    def push(self, context: Context) -> None:
        self._contexts.append(context)

    def index_of(self, context: Context) -> int:
        """
        Position of ``context`` on the stack, compared by identity.

        :raises ValueError: If the context is not on the stack.
        """
        for idx, candidate in enumerate(self._contexts):
            if candidate is context:
                return idx
        raise ValueError(f"{context!r} is not on the context stack")

    def find(self, system: str) -> Optional[Context]:
        """The outermost context bound to ``system``."""
        for context in self._contexts:
            if context.system == system:
                return context
        return None

    def slice_from(self, index: int) -> List[Context]:
        return self._contexts[index:]

    def truncate(self, index: int) -> List[Context]:
        """Drop every context at ``index`` and above, returning the removed ones."""
        removed = self._contexts[index:]
        del self._contexts[index:]
        return removed

    def pop(self) -> Optional[Context]:
        return self._contexts.pop() if self._contexts else None

    @property
    def top(self) -> Optional[Context]:
        return self._contexts[-1] if self._contexts else None

    def cargo_snapshot(self) -> List[Any]:
        return [context.cargo for context in self._contexts]

    def __getitem__(self, index: int) -> Context:
        return self._contexts[index]

    def __iter__(self) -> Iterator[Context]:
        # Live iterator: contexts pushed during dispatch are visited too.
        return iter(self._contexts)

    def __len__(self) -> int:
        return len(self._contexts)

    def __bool__(self) -> bool:
        return bool(self._contexts)
