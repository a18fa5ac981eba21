"""Composition strategies: chained, decorated, fan-out and tree dispatch."""

from polydispatch.infrastructure.composition.decorator import wrap, wrap_after, wrap_before
from polydispatch.infrastructure.composition.fanout import NotificationReport, ObserverFailure

__all__ = [
    "NotificationReport",
    "ObserverFailure",
    "wrap",
    "wrap_after",
    "wrap_before",
]
