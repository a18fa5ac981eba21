"""Flyweight cache - one shared variant per (capability, key)."""
import threading
from typing import Callable, Dict, Hashable, List, Tuple

from polydispatch.domain.variant import Variant


class FlyweightCache:
    """
    Cache of shared variants.

    Repeated requests for the same key return the very same variant instance,
    so any number of contexts can reference it; the number of instances equals
    the number of distinct keys requested.
    """

    def __init__(self):
        self._variants: Dict[Tuple[str, Hashable], Variant] = {}
        self._lock = threading.RLock()

    def get_or_create(self,
                      capability_name: str,
                      key: Hashable,
                      create: Callable[[], Variant]) -> Variant:
        cache_key = (capability_name, key)
        with self._lock:
            variant = self._variants.get(cache_key)
            if variant is None:
                variant = create()
                self._variants[cache_key] = variant
            return variant

    def contains(self, capability_name: str, key: Hashable) -> bool:
        return (capability_name, key) in self._variants

    @property
    def count(self) -> int:
        return len(self._variants)

    def keys(self) -> List[Tuple[str, Hashable]]:
        return list(self._variants.keys())

    def clear(self) -> None:
        with self._lock:
            self._variants.clear()
