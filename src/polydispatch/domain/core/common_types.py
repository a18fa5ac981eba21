# src/polydispatch/domain/core/common_types.py
from __future__ import annotations
from enum import Enum


class UnhandledRequest:
    """Sentinel result for a dispatch that no variant accepted.

    A variant returns ``UNHANDLED`` to decline an input so that the next link of
    a chain gets a chance; a chain that runs out of links returns it to the
    caller. It is a value, not an error.
    """

    _instance: "UnhandledRequest" = None

    def __new__(cls) -> "UnhandledRequest":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNHANDLED"

    def __copy__(self) -> "UnhandledRequest":
        return self

    def __deepcopy__(self, memo) -> "UnhandledRequest":
        return self

    def __reduce__(self):
        return (UnhandledRequest, ())


UNHANDLED = UnhandledRequest()


def is_unhandled(result: object) -> bool:
    return result is UNHANDLED


class CompositionOrder(str, Enum):
    """Order in which a decorator layer runs relative to the component it wraps."""
    INSIDE_OUT = "inside_out"   # delegate first, then combine
    OUTSIDE_IN = "outside_in"   # pre-process, then delegate


class TraversalOrder(str, Enum):
    """Depth-first visiting order for tree composition."""
    PRE_ORDER = "pre_order"
    POST_ORDER = "post_order"


class NotificationPolicy(str, Enum):
    """What a fan-out dispatch does with observer failures."""
    COLLECT = "collect"
    RAISE_AGGREGATE = "raise_aggregate"
    FAIL_FAST = "fail_fast"
