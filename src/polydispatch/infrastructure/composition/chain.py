"""Chained dispatch - iterative fall-through along successor edges."""
import threading
from typing import Any, Iterator, Optional

from polydispatch.domain.capability import Capability
from polydispatch.domain.context import Context
from polydispatch.domain.core.common_types import UNHANDLED
from polydispatch.domain.core.exceptions import CycleDetectedError, SignatureMismatchError

# Serializes check-then-link so two concurrent links cannot close a cycle.
# Context locks are only taken one at a time underneath it.
_link_lock = threading.RLock()


def iter_chain(head: Context) -> Iterator[Context]:
    """Yield ``head`` and every successor in order."""
    link: Optional[Context] = head
    while link is not None:
        yield link
        link = link.successor


def reaches(start: Context, target: Context) -> bool:
    """True when ``target`` is ``start`` or one of its successors."""
    return any(link is target for link in iter_chain(start))


def chain_capability(head: Context) -> Optional[Capability]:
    """Capability of the first bound link from ``head`` on, or None."""
    return next((link.capability for link in iter_chain(head) if link.capability), None)


def link(source: Context, successor: Context) -> Optional[Context]:
    """
    Make ``successor`` the next link after ``source``.

    Chains are never walked with cycle detection, so the check happens here,
    before the edge exists. Every bound link of one chain implements the same
    capability; ``source`` is compared with the first bound link from
    ``successor`` on.

    Returns:
        The successor ``source`` had before, or None

    Raises:
        CycleDetectedError: If ``successor`` already reaches ``source``
        SignatureMismatchError: If the two sides implement different capabilities
    """
    with _link_lock:
        if reaches(successor, source):
            raise CycleDetectedError(source.name, successor.name)

        expected = source.capability
        offered = chain_capability(successor)
        if expected is not None and offered is not None and not expected.is_compatible_with(offered):
            raise SignatureMismatchError(
                expected.name,
                f"cannot chain '{successor.name}' ({offered}) after '{source.name}' ({expected})",
            )
        return source.set_successor(successor)


def dispatch(head: Context, *args: Any) -> Any:
    """
    Offer ``args`` to each link in turn until one handles it.

    Each link either returns a result (terminal) or ``UNHANDLED`` (declined).
    Exceptions raised by a link propagate immediately.
    """
    for context in iter_chain(head):
        result = context.execute(*args)
        if result is not UNHANDLED:
            return result
    return UNHANDLED
