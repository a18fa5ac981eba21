"""Decorator composition - an outer variant built around an inner context."""
from typing import Any, Callable, Tuple

from polydispatch.domain.context import Context
from polydispatch.domain.core.common_types import UNHANDLED, CompositionOrder

Delegate = Callable[..., Any]
VariantFactory = Callable[[Delegate], Any]


def delegate_to(inner: Context, invoke: Callable[..., Any]) -> Delegate:
    """Return a callable that runs ``inner`` through ``invoke`` (chain-aware)."""
    def delegate(*args: Any) -> Any:
        return invoke(inner, *args)
    delegate.__name__ = f"delegate_to_{inner.name}"
    return delegate


def _as_args(prepared: Any) -> Tuple[Any, ...]:
    return prepared if isinstance(prepared, tuple) else (prepared,)


def wrap_after(combine: Callable[..., Any]) -> VariantFactory:
    """
    Inside-out layer: the inner result is computed first, then combined.

    ``combine`` receives the inner result followed by the original arguments,
    e.g. ``wrap_after(lambda cost: cost + 1)`` for a zero-argument capability.
    When the inner chain declines, the layer declines too and ``combine`` is
    not called.
    """
    def factory(delegate: Delegate) -> Callable[..., Any]:
        def layer(*args: Any) -> Any:
            result = delegate(*args)
            if result is UNHANDLED:
                return UNHANDLED
            return combine(result, *args)
        layer.__name__ = getattr(combine, "__name__", "layer")
        return layer
    factory.order = CompositionOrder.INSIDE_OUT
    return factory


def wrap_before(prepare: Callable[..., Any]) -> VariantFactory:
    """
    Outside-in layer: the arguments are pre-processed, then passed inward.

    ``prepare`` returns the new argument (or a tuple of arguments).
    """
    def factory(delegate: Delegate) -> Callable[..., Any]:
        def layer(*args: Any) -> Any:
            return delegate(*_as_args(prepare(*args)))
        layer.__name__ = getattr(prepare, "__name__", "layer")
        return layer
    factory.order = CompositionOrder.OUTSIDE_IN
    return factory


def wrap(func: Callable[..., Any], order: CompositionOrder) -> VariantFactory:
    """Build a layer factory for ``order`` from a single function."""
    if order is CompositionOrder.OUTSIDE_IN:
        return wrap_before(func)
    return wrap_after(func)
