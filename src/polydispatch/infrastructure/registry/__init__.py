"""Infrastructure registry patterns."""

from .behavior_registry import PolymorphicBehaviorRegistry, get_behavior_registry
from .flyweight_cache import FlyweightCache

__all__ = [
    'FlyweightCache',
    'PolymorphicBehaviorRegistry',
    'get_behavior_registry',
]
