"""Context - holds variant references and exposes the operation clients call."""
import threading
from typing import Any, List, Optional, Tuple
from uuid import uuid4

from polydispatch.domain.capability import Capability
from polydispatch.domain.core.common_types import UNHANDLED
from polydispatch.domain.core.exceptions import SignatureMismatchError
from polydispatch.domain.memento import Memento
from polydispatch.domain.variant import Variant


class Context:
    """
    Composition point for variants.

    A context owns a bound variant (optional), a successor for chained
    dispatch, ordered children for tree composition, ordered observers for
    fan-out notification and a small private ``state`` that mementos capture.
    Every mutation and read of those references goes through the context's
    own lock; variant code is never executed while the lock is held.
    """

    def __init__(self,
                 variant: Optional[Variant] = None,
                 name: Optional[str] = None,
                 state: Any = None):
        self._name = name or f"context-{uuid4().hex[:8]}"
        self._lock = threading.RLock()
        self._capability: Optional[Capability] = None
        self._variant: Optional[Variant] = None
        self._successor: Optional["Context"] = None
        self._children: List["Context"] = []
        self._observers: List[Variant] = []
        self._observer_capability: Optional[Capability] = None
        self._state = state
        if variant is not None:
            self.bind(variant)

    @property
    def name(self) -> str:
        return self._name

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def capability(self) -> Optional[Capability]:
        return self._capability

    @property
    def variant(self) -> Optional[Variant]:
        with self._lock:
            return self._variant

    @property
    def successor(self) -> Optional["Context"]:
        with self._lock:
            return self._successor

    @property
    def children(self) -> Tuple["Context", ...]:
        with self._lock:
            return tuple(self._children)

    @property
    def observers(self) -> Tuple[Variant, ...]:
        with self._lock:
            return tuple(self._observers)

    @property
    def state(self) -> Any:
        with self._lock:
            return self._state

    @state.setter
    def state(self, value: Any) -> None:
        with self._lock:
            self._state = value

    def bind(self, variant: Variant) -> Optional[Variant]:
        """
        Bind ``variant``, replacing the current one.

        The first binding fixes the context's capability; later bindings must
        implement the same signature.

        Returns:
            The previously bound variant, or None
        """
        with self._lock:
            if not variant.conforms_to(self._capability):
                raise SignatureMismatchError(
                    self._capability.name,
                    f"context '{self._name}' is bound to {self._capability}, "
                    f"variant '{variant.name}' implements {variant.capability}",
                )
            previous = self._variant
            self._capability = variant.capability
            self._variant = variant
            return previous

    def execute(self, *args: Any) -> Any:
        """Run the bound variant alone; an empty context declines."""
        variant = self.variant
        if variant is None:
            return UNHANDLED
        return variant.execute(*args)

    # Edge mutators. Cycle checks belong to the composition strategies that
    # call these; the context only keeps the references consistent.

    def set_successor(self, successor: Optional["Context"]) -> Optional["Context"]:
        with self._lock:
            previous = self._successor
            self._successor = successor
            return previous

    def append_child(self, child: "Context") -> None:
        with self._lock:
            self._children.append(child)

    def discard_child(self, child: "Context") -> bool:
        with self._lock:
            for index, existing in enumerate(self._children):
                if existing is child:
                    del self._children[index]
                    return True
            return False

    def add_observer(self, observer: Variant) -> None:
        with self._lock:
            if not observer.conforms_to(self._observer_capability):
                raise SignatureMismatchError(
                    self._observer_capability.name,
                    f"observers of '{self._name}' implement {self._observer_capability}, "
                    f"'{observer.name}' implements {observer.capability}",
                )
            self._observer_capability = observer.capability
            self._observers.append(observer)

    def remove_observer(self, observer: Variant) -> bool:
        with self._lock:
            for index, existing in enumerate(self._observers):
                if existing is observer:
                    del self._observers[index]
                    if not self._observers:
                        self._observer_capability = None
                    return True
            return False

    def snapshot(self) -> Memento:
        with self._lock:
            return Memento(context_name=self._name, state=self._state, variant=self._variant)

    def restore(self, memento: Memento) -> None:
        """
        Replace state (and bound variant, if captured) with a fresh copy of ``memento``.

        A captured variant of another capability is rejected before the state
        is touched.
        """
        with self._lock:
            if memento.variant is not None:
                self.bind(memento.variant)
            self._state = memento.state

    def __repr__(self) -> str:
        variant = self._variant.name if self._variant else None
        return f"Context({self._name!r}, variant={variant!r})"
