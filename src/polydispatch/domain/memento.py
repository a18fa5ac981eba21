"""Memento and caretaker - immutable state snapshots held outside the context."""
from __future__ import annotations
import copy
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Iterator, List, Optional

from polydispatch.domain.core.exceptions import IndexOutOfRangeError

if TYPE_CHECKING:
    from polydispatch.domain.context import Context
    from polydispatch.domain.variant import Variant


class Memento:
    """
    Snapshot of a context's state and bound variant.

    The captured state is private to the memento. ``state`` hands out a fresh
    deep copy on every access, so nothing a caller does to the returned value
    reaches the snapshot.
    """

    __slots__ = ("_context_name", "_state", "_variant", "_taken_at")

    def __init__(self,
                 context_name: str,
                 state: Any,
                 variant: Optional["Variant"] = None,
                 taken_at: Optional[datetime] = None):
        object.__setattr__(self, "_context_name", context_name)
        object.__setattr__(self, "_state", copy.deepcopy(state))
        object.__setattr__(self, "_variant", variant)
        object.__setattr__(self, "_taken_at", taken_at or datetime.now(timezone.utc))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Memento is immutable, cannot set '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Memento is immutable, cannot delete '{name}'")

    @property
    def context_name(self) -> str:
        return self._context_name

    @property
    def state(self) -> Any:
        return copy.deepcopy(self._state)

    @property
    def variant(self) -> Optional["Variant"]:
        return self._variant

    @property
    def taken_at(self) -> datetime:
        return self._taken_at

    def __repr__(self) -> str:
        return f"Memento(context_name={self._context_name!r}, taken_at={self._taken_at.isoformat()})"


class Caretaker:
    """Ordered holder of mementos; restoring never alters the held snapshots."""

    def __init__(self) -> None:
        self._mementos: List[Memento] = []

    def save(self, context: "Context") -> Memento:
        memento = context.snapshot()
        self._mementos.append(memento)
        return memento

    def add(self, memento: Memento) -> None:
        self._mementos.append(memento)

    def get(self, index: int) -> Memento:
        # Negative indices are rejected rather than counted from the end
        if not 0 <= index < len(self._mementos):
            raise IndexOutOfRangeError(index, len(self._mementos))
        return self._mementos[index]

    def restore(self, context: "Context", index: int) -> Any:
        """
        Restore ``context`` from the snapshot at ``index``.

        Returns:
            The restored state

        Raises:
            IndexOutOfRangeError: If ``index`` is not a held snapshot
        """
        context.restore(self.get(index))
        return context.state

    def clear(self) -> None:
        self._mementos.clear()

    def __len__(self) -> int:
        return len(self._mementos)

    def __iter__(self) -> Iterator[Memento]:
        return iter(list(self._mementos))
