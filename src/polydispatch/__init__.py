"""polydispatch - a catalog of classic design patterns built on one dispatch harness.

Every pattern demonstration is a thin client of the polymorphic behavior
registry: interchangeable variants implementing a capability are bound to
contexts and invoked directly, along a chain, through decorator layers,
across observers or over a tree.

Key Components:
    - domain: capabilities, variants, contexts, mementos and exceptions
    - infrastructure: the registry, composition strategies, logging, singletons
    - config: pydantic configuration schemas and the configuration manager
    - demos: the pattern catalog
"""

from polydispatch._version import __version__
from polydispatch.domain.capability import Capability
from polydispatch.domain.context import Context
from polydispatch.domain.core.common_types import (
    UNHANDLED,
    CompositionOrder,
    NotificationPolicy,
    TraversalOrder,
    UnhandledRequest,
    is_unhandled,
)
from polydispatch.domain.core.exceptions import (
    CapabilityNotFoundError,
    ConfigurationError,
    CycleDetectedError,
    DomainException,
    DuplicateCapabilityError,
    IndexOutOfRangeError,
    ObserverNotificationError,
    SignatureMismatchError,
)
from polydispatch.domain.memento import Caretaker, Memento
from polydispatch.domain.variant import Variant
from polydispatch.infrastructure.composition import (
    NotificationReport,
    ObserverFailure,
    wrap,
    wrap_after,
    wrap_before,
)
from polydispatch.infrastructure.registry import (
    FlyweightCache,
    PolymorphicBehaviorRegistry,
    get_behavior_registry,
)

__all__ = [
    "UNHANDLED",
    "Capability",
    "CapabilityNotFoundError",
    "Caretaker",
    "CompositionOrder",
    "ConfigurationError",
    "Context",
    "CycleDetectedError",
    "DomainException",
    "DuplicateCapabilityError",
    "FlyweightCache",
    "IndexOutOfRangeError",
    "Memento",
    "NotificationPolicy",
    "NotificationReport",
    "ObserverFailure",
    "ObserverNotificationError",
    "PolymorphicBehaviorRegistry",
    "SignatureMismatchError",
    "TraversalOrder",
    "UnhandledRequest",
    "Variant",
    "__version__",
    "get_behavior_registry",
    "is_unhandled",
    "wrap",
    "wrap_after",
    "wrap_before",
]
