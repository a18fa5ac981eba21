"""Standard singleton access functions."""

from typing import Any, Optional, Type, TypeVar

from polydispatch.infrastructure.patterns.singleton_registry import SingletonRegistry

T = TypeVar("T")


def get_singleton(singleton_class: Type[T], *args: Any, **kwargs: Any) -> T:
    """
    Standard way to get singleton instances.

    Only one instance of each class is created and reused; constructor
    arguments are honored on the creating call only.

    Args:
        singleton_class: The class to get an instance of
        *args: Arguments to pass to the constructor if creating a new instance
        **kwargs: Keyword arguments to pass to the constructor if creating a new instance

    Returns:
        The singleton instance
    """
    registry = SingletonRegistry.get_instance()
    return registry.get(singleton_class, *args, **kwargs)


def reset_singleton(singleton_class: Optional[Type[Any]] = None) -> None:
    """Reset hook for tests: forget one singleton, or all of them."""
    SingletonRegistry.get_instance().reset(singleton_class)
