"""Process-wide holder of at most one instance per class."""
import threading
from typing import Any, Dict, Optional, Type, TypeVar, cast

from polydispatch.infrastructure.logging import get_logger

T = TypeVar("T")


class SingletonRegistry:
    """
    Registry of singleton instances keyed by class.

    Instances live from first access until process end or an explicit reset.
    Tests call ``reset()`` between cases so that state does not leak from one
    test into the next.
    """

    _instance: Optional["SingletonRegistry"] = None
    _lock = threading.RLock()

    def __init__(self):
        self._instances: Dict[Type[Any], Any] = {}
        self._instances_lock = threading.RLock()
        self._logger = get_logger(__name__)

    @classmethod
    def get_instance(cls) -> "SingletonRegistry":
        """Get singleton instance of the singleton registry."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def get(self, singleton_class: Type[T], *args: Any, **kwargs: Any) -> T:
        """Return the instance of ``singleton_class``, creating it on first request."""
        with self._instances_lock:
            if singleton_class not in self._instances:
                self._instances[singleton_class] = singleton_class(*args, **kwargs)
                self._logger.debug("Created singleton", singleton=singleton_class.__name__)
            return cast(T, self._instances[singleton_class])

    def has(self, singleton_class: Type[Any]) -> bool:
        return singleton_class in self._instances

    def reset(self, singleton_class: Optional[Type[Any]] = None) -> None:
        """Drop one singleton, or all of them when no class is given."""
        with self._instances_lock:
            if singleton_class is None:
                self._instances.clear()
            else:
                self._instances.pop(singleton_class, None)
