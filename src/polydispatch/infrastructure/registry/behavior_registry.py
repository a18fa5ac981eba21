"""Polymorphic Behavior Registry - capabilities, variants and the contexts that dispatch to them.

This module implements the registry every pattern demonstration is built on:
variants are registered against a capability, bound to contexts, and invoked
through the context directly, along a chain, through decorator layers, across
observers or over a tree.
"""

from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple, Union
import threading

from polydispatch.config import ConfigurationManager
from polydispatch.config.schemas import RegistryConfig
from polydispatch.domain.capability import Capability
from polydispatch.domain.context import Context
from polydispatch.domain.core.common_types import (
    CompositionOrder,
    NotificationPolicy,
    TraversalOrder,
)
from polydispatch.domain.core.exceptions import (
    CapabilityNotFoundError,
    DuplicateCapabilityError,
)
from polydispatch.domain.memento import Memento
from polydispatch.domain.variant import Variant
from polydispatch.infrastructure.composition import chain as chain_strategy
from polydispatch.infrastructure.composition import tree as tree_strategy
from polydispatch.infrastructure.composition.decorator import VariantFactory, delegate_to, wrap
from polydispatch.infrastructure.composition.fanout import NotificationReport, notify
from polydispatch.infrastructure.logging import get_logger
from polydispatch.infrastructure.registry.flyweight_cache import FlyweightCache

CapabilityRef = Union[Capability, str]


class PolymorphicBehaviorRegistry:
    """
    Registry of capabilities and their interchangeable variants.

    Capabilities are kept in a name-keyed table guarded by the registry lock.
    Contexts are not tracked by the registry; each guards its own references
    with its own lock, so the registry only validates and wires.

    A process-wide instance is available through ``get_instance()``; tests
    reset it with ``reset_instance()``. Independent instances can be created
    directly.
    """

    _instance: Optional['PolymorphicBehaviorRegistry'] = None
    _lock = threading.RLock()

    def __init__(self, config: Optional[RegistryConfig] = None):
        """
        Initialize behavior registry.

        Args:
            config: Registry defaults; RegistryConfig() when omitted
        """
        self._config = config or RegistryConfig()
        self._capabilities: Dict[str, Capability] = {}
        self._registration_lock = threading.RLock()
        self._flyweights = FlyweightCache()
        self._logger = get_logger(__name__)

    @classmethod
    def get_instance(cls, config: Optional[RegistryConfig] = None) -> 'PolymorphicBehaviorRegistry':
        """
        Get the process-wide registry, creating it on first access.

        Without an explicit ``config`` the registry section of the application
        configuration is used, so environment overrides such as
        POLYDISPATCH_NOTIFICATION_POLICY apply to the shared instance.
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls(config or ConfigurationManager().registry)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the process-wide registry. Used primarily for testing."""
        with cls._lock:
            cls._instance = None

    @property
    def config(self) -> RegistryConfig:
        return self._config

    @property
    def flyweights(self) -> FlyweightCache:
        return self._flyweights

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    def define_capability(self,
                          signature: CapabilityRef,
                          input_types: Tuple[Any, ...] = (),
                          output_type: Any = object) -> Capability:
        """
        Register an operation contract.

        Args:
            signature: A Capability, or the capability name
            input_types: Parameter types when ``signature`` is a name
            output_type: Result type when ``signature`` is a name

        Returns:
            The registered capability; an identical redefinition returns the
            existing one

        Raises:
            DuplicateCapabilityError: If the name is taken by a different signature
        """
        if not isinstance(signature, Capability):
            signature = Capability(name=signature, input_types=tuple(input_types), output_type=output_type)

        with self._registration_lock:
            existing = self._capabilities.get(signature.name)
            if existing is not None:
                if existing.is_compatible_with(signature):
                    return existing
                raise DuplicateCapabilityError(signature.name, existing, signature)

            self._capabilities[signature.name] = signature
            self._logger.info("Defined capability", capability=signature.describe())
            return signature

    def get_capability(self, name: str) -> Capability:
        capability = self._capabilities.get(name)
        if capability is None:
            raise CapabilityNotFoundError(name)
        return capability

    def is_capability_defined(self, name: str) -> bool:
        return name in self._capabilities

    def get_defined_capabilities(self) -> List[str]:
        return list(self._capabilities.keys())

    def _lookup(self, capability: CapabilityRef) -> Capability:
        if isinstance(capability, Capability):
            existing = self.get_capability(capability.name)
            if not existing.is_compatible_with(capability):
                raise DuplicateCapabilityError(capability.name, existing, capability)
            return existing
        return self.get_capability(capability)

    # ------------------------------------------------------------------
    # Variants
    # ------------------------------------------------------------------

    def register_variant(self,
                         capability: CapabilityRef,
                         implementation: Any,
                         name: Optional[str] = None) -> Variant:
        """
        Wrap a concrete behavior under a capability.

        Args:
            capability: Defined capability (or its name)
            implementation: Callable, or object with a method named after the capability
            name: Display name; derived from the implementation when omitted

        Returns:
            The new variant

        Raises:
            CapabilityNotFoundError: If the capability is not defined
            SignatureMismatchError: If the implementation does not conform
        """
        variant = Variant(self._lookup(capability), implementation, name=name)
        self._logger.debug("Registered variant", variant=variant.name, capability=variant.capability.name)
        return variant

    def shared_variant(self,
                       capability: CapabilityRef,
                       key: Hashable,
                       implementation_factory: Callable[[Hashable], Any],
                       name: Optional[str] = None) -> Variant:
        """
        Return the shared variant for ``key``, creating it on first request.

        ``implementation_factory`` is called with ``key`` only when no variant
        is cached for it yet.
        """
        resolved = self._lookup(capability)
        return self._flyweights.get_or_create(
            resolved.name,
            key,
            lambda: self.register_variant(resolved, implementation_factory(key), name=name or str(key)),
        )

    # ------------------------------------------------------------------
    # Contexts
    # ------------------------------------------------------------------

    def create_context(self,
                       initial_variant: Optional[Variant] = None,
                       name: Optional[str] = None,
                       state: Any = None) -> Context:
        """Allocate a context, optionally pre-bound to a variant."""
        context = Context(variant=initial_variant, name=name, state=state)
        self._logger.debug(
            "Created context",
            context=context.name,
            variant=initial_variant.name if initial_variant else None,
        )
        return context

    def set_variant(self, context: Context, variant: Variant) -> Optional[Variant]:
        """
        Replace the variant bound to ``context``.

        Returns:
            The released variant, or None

        Raises:
            SignatureMismatchError: If ``variant`` implements another capability
        """
        previous = context.bind(variant)
        self._logger.debug(
            "Bound variant",
            context=context.name,
            variant=variant.name,
            previous=previous.name if previous else None,
        )
        return previous

    def invoke(self, context: Context, *args: Any) -> Any:
        """
        Execute ``context`` against ``args``.

        Follows the chain when the bound variant declines; returns UNHANDLED
        when no link handles the input. Exceptions raised by a variant
        propagate unchanged.
        """
        return chain_strategy.dispatch(context, *args)

    # ------------------------------------------------------------------
    # Chained dispatch
    # ------------------------------------------------------------------

    def chain(self, context_a: Context, context_b: Context) -> Context:
        """
        Make ``context_b`` the successor of ``context_a``.

        Returns:
            ``context_b``, so that links can be appended fluently

        Raises:
            CycleDetectedError: If ``context_b`` already reaches ``context_a``
        """
        chain_strategy.link(context_a, context_b)
        self._logger.debug("Chained contexts", source=context_a.name, successor=context_b.name)
        return context_b

    def build_chain(self, *contexts: Context) -> Context:
        """Link ``contexts`` in the given order and return the head."""
        if not contexts:
            raise ValueError("build_chain requires at least one context")
        for current, successor in zip(contexts, contexts[1:]):
            self.chain(current, successor)
        return contexts[0]

    def unchain(self, context: Context) -> Optional[Context]:
        """Remove and return the successor of ``context``."""
        previous = context.set_successor(None)
        if previous is not None:
            self._logger.debug("Unchained contexts", source=context.name, successor=previous.name)
        return previous

    # ------------------------------------------------------------------
    # Decorator composition
    # ------------------------------------------------------------------

    def compose(self,
                outer_variant_factory: VariantFactory,
                inner_context: Context,
                name: Optional[str] = None) -> Context:
        """
        Wrap ``inner_context`` in a new outer context.

        ``outer_variant_factory`` receives a delegate that invokes the inner
        context and returns the outer implementation. Wrapping V1 then V2
        nests V2 outside V1.

        Returns:
            The new outer context

        Raises:
            ValueError: If no link of ``inner_context`` is bound to a variant
        """
        capability = chain_strategy.chain_capability(inner_context)
        if capability is None:
            raise ValueError(f"Context '{inner_context.name}' has no bound variant to compose around")

        implementation = outer_variant_factory(delegate_to(inner_context, self.invoke))
        variant = self.register_variant(capability, implementation)
        outer = self.create_context(variant, name=name or f"{variant.name}({inner_context.name})")
        self._logger.debug("Composed context", outer=outer.name, inner=inner_context.name)
        return outer

    def decorate(self,
                 inner_context: Context,
                 func: Callable[..., Any],
                 order: Optional[CompositionOrder] = None,
                 name: Optional[str] = None) -> Context:
        """Compose a single-function layer using ``order`` or the configured default."""
        return self.compose(wrap(func, order or self._config.composition_order), inner_context, name=name)

    # ------------------------------------------------------------------
    # Fan-out notification
    # ------------------------------------------------------------------

    def attach_observer(self, context: Context, observer: Variant) -> None:
        """Register ``observer`` for ``context``; notification follows registration order."""
        context.add_observer(observer)
        self._logger.debug("Attached observer", context=context.name, observer=observer.name)

    def detach_observer(self, context: Context, observer: Variant) -> bool:
        removed = context.remove_observer(observer)
        if removed:
            self._logger.debug("Detached observer", context=context.name, observer=observer.name)
        return removed

    def notify_all(self,
                   context: Context,
                   event: Any,
                   policy: Optional[NotificationPolicy] = None) -> NotificationReport:
        """
        Deliver ``event`` to every observer of ``context``.

        Args:
            context: Subject whose observers are notified
            event: Payload passed to each observer
            policy: Failure policy; the configured default when omitted

        Returns:
            Report of delivered observers and collected failures

        Raises:
            ObserverNotificationError: Under RAISE_AGGREGATE, after all observers ran
        """
        policy = policy or self._config.notification_policy
        report = notify(context.observers, event, policy)
        self._logger.debug(
            "Notified observers",
            context=context.name,
            delivered=len(report.delivered),
            failed=len(report.failures),
        )
        return report

    # ------------------------------------------------------------------
    # Tree composition
    # ------------------------------------------------------------------

    def add_child(self, parent: Context, child: Context) -> None:
        """
        Append ``child`` to ``parent``.

        Raises:
            CycleDetectedError: If ``parent`` is ``child`` or one of its descendants
        """
        tree_strategy.attach(parent, child)
        self._logger.debug("Added child", parent=parent.name, child=child.name)

    def remove_child(self, parent: Context, child: Context) -> bool:
        return tree_strategy.detach(parent, child)

    def traverse(self,
                 root: Context,
                 *args: Any,
                 order: Optional[TraversalOrder] = None) -> List[Tuple[Context, Any]]:
        """Depth-first ``(node, contribution)`` pairs, children in insertion order."""
        return tree_strategy.traverse(root, *args, order=order or self._config.traversal_order)

    def aggregate(self,
                  root: Context,
                  combine: Callable[[Optional[Any], List[Any]], Any],
                  *args: Any) -> Any:
        """Fold each node's own contribution with its children's combined results."""
        return tree_strategy.aggregate(root, combine, *args)

    # ------------------------------------------------------------------
    # State capture
    # ------------------------------------------------------------------

    def snapshot(self, context: Context) -> Memento:
        return context.snapshot()

    def restore(self, context: Context, memento: Memento) -> Any:
        """Replace ``context``'s state with a copy of ``memento`` and return it."""
        context.restore(memento)
        self._logger.debug("Restored context", context=context.name, taken_at=memento.taken_at.isoformat())
        return context.state

    def clear_registrations(self) -> None:
        """Clear all capabilities and shared variants. Used primarily for testing."""
        with self._registration_lock:
            self._capabilities.clear()
            self._flyweights.clear()
            self._logger.info("Cleared all capability registrations")


# Convenience function for global access
def get_behavior_registry() -> PolymorphicBehaviorRegistry:
    """Get the global behavior registry instance."""
    return PolymorphicBehaviorRegistry.get_instance()
