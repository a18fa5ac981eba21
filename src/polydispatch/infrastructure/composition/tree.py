"""Tree composition - composite nodes with ordered children."""
import threading
from typing import Any, Callable, List, Optional, Tuple

from polydispatch.domain.context import Context
from polydispatch.domain.core.common_types import UNHANDLED, TraversalOrder
from polydispatch.domain.core.exceptions import CycleDetectedError

# Serializes check-then-attach so two concurrent attaches cannot close a cycle.
_attach_lock = threading.RLock()


def contains(root: Context, target: Context) -> bool:
    """True when ``target`` is ``root`` or any of its descendants."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node is target:
            return True
        stack.extend(node.children)
    return False


def attach(parent: Context, child: Context) -> None:
    """
    Append ``child`` to ``parent``'s children.

    Raises:
        CycleDetectedError: If ``parent`` is ``child`` or one of its descendants
    """
    with _attach_lock:
        if contains(child, parent):
            raise CycleDetectedError(parent.name, child.name)
        parent.append_child(child)


def detach(parent: Context, child: Context) -> bool:
    return parent.discard_child(child)


def walk(root: Context, order: TraversalOrder = TraversalOrder.PRE_ORDER) -> List[Context]:
    """Depth-first node order, children in insertion order."""
    visited: List[Context] = []
    # (node, expanded) pairs; a node is emitted on its second pop in post-order
    stack: List[Tuple[Context, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if order is TraversalOrder.POST_ORDER:
            if expanded:
                visited.append(node)
                continue
            stack.append((node, True))
        else:
            visited.append(node)
        for child in reversed(node.children):
            stack.append((child, False))
    return visited


def traverse(root: Context,
             *args: Any,
             order: TraversalOrder = TraversalOrder.PRE_ORDER) -> List[Tuple[Context, Any]]:
    """
    Execute each node's own variant in traversal order.

    Nodes without a bound variant, or whose variant declines, contribute
    nothing and are left out of the result.
    """
    contributions = []
    for node in walk(root, order):
        result = node.execute(*args)
        if result is not UNHANDLED:
            contributions.append((node, result))
    return contributions


def aggregate(root: Context,
              combine: Callable[[Optional[Any], List[Any]], Any],
              *args: Any) -> Any:
    """
    Fold the tree bottom-up.

    For every node ``combine(own, child_results)`` is called with the node's
    own contribution (None when it has none) and the already-combined results
    of its children in insertion order.
    """
    combined = {}
    for node in walk(root, TraversalOrder.POST_ORDER):
        own = node.execute(*args)
        child_results = [combined[id(child)] for child in node.children]
        combined[id(node)] = combine(None if own is UNHANDLED else own, child_results)
    return combined[id(root)]
