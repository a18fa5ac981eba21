"""Variant - one concrete implementation of a capability."""
import inspect
from typing import Any, Callable, Optional

from polydispatch.domain.capability import Capability
from polydispatch.domain.core.exceptions import SignatureMismatchError


def resolve_callable(capability: Capability, implementation: Any) -> Callable[..., Any]:
    """
    Resolve the callable that implements ``capability`` and check its arity.

    An implementation is either an object exposing a method named after the
    capability or a plain callable. The check happens here, at composition
    time, so that a mismatched variant never reaches a context.

    Args:
        capability: Capability the implementation must conform to
        implementation: Object or callable providing the behavior

    Returns:
        The callable to execute for this variant

    Raises:
        SignatureMismatchError: If nothing callable is found or arity differs
    """
    method = getattr(implementation, capability.name, None)
    if callable(method) and not inspect.isclass(implementation):
        target = method
    elif callable(implementation):
        target = implementation
    else:
        raise SignatureMismatchError(
            capability.name,
            f"{type(implementation).__name__} is not callable and has no '{capability.name}' method",
        )

    try:
        signature = inspect.signature(target)
    except (TypeError, ValueError):
        # Builtins without an introspectable signature are accepted as-is
        return target

    try:
        signature.bind(*range(capability.arity))
    except TypeError as e:
        raise SignatureMismatchError(
            capability.name,
            f"expected {capability.arity} positional argument(s), got signature {signature} ({e})",
        ) from e
    return target


def _default_name(implementation: Any) -> str:
    name = getattr(implementation, "__name__", None)
    if name and name != "<lambda>":
        return name
    return type(implementation).__name__


class Variant:
    """A behavior registered under a capability."""

    def __init__(self, capability: Capability, implementation: Any, name: Optional[str] = None):
        self._capability = capability
        self._implementation = implementation
        self._call = resolve_callable(capability, implementation)
        self._name = name or _default_name(implementation)

    @property
    def capability(self) -> Capability:
        return self._capability

    @property
    def implementation(self) -> Any:
        return self._implementation

    @property
    def name(self) -> str:
        return self._name

    def conforms_to(self, capability: Optional[Capability]) -> bool:
        return capability is None or self._capability.is_compatible_with(capability)

    def execute(self, *args: Any) -> Any:
        return self._call(*args)

    def __call__(self, *args: Any) -> Any:
        return self._call(*args)

    def __repr__(self) -> str:
        return f"Variant({self._name!r}, capability={self._capability.name!r})"
