"""Tests for composite tree traversal."""

import threading

import pytest

from polydispatch.config.schemas import RegistryConfig
from polydispatch.domain.core.common_types import TraversalOrder
from polydispatch.domain.core.exceptions import CycleDetectedError
from polydispatch.infrastructure.composition.tree import contains, walk
from polydispatch.infrastructure.registry import PolymorphicBehaviorRegistry


@pytest.fixture
def label(registry):
    return registry.define_capability("label", output_type=str)


@pytest.fixture
def node(registry, label):
    def make(name, bound=True):
        variant = registry.register_variant(label, lambda: name, name=name) if bound else None
        return registry.create_context(variant, name=name)
    return make


@pytest.fixture
def sample_tree(registry, node):
    """
    root
    ├── a
    │   ├── a1
    │   └── a2
    ├── b
    └── c
        └── c1
    """
    nodes = {name: node(name) for name in ("root", "a", "a1", "a2", "b", "c", "c1")}
    for parent, child in (("root", "a"), ("a", "a1"), ("a", "a2"), ("root", "b"), ("root", "c"), ("c", "c1")):
        registry.add_child(nodes[parent], nodes[child])
    return nodes


class TestTraversal:
    """Depth-first ordering."""

    def test_pre_order(self, registry, sample_tree):
        visited = [value for _, value in registry.traverse(sample_tree["root"])]
        assert visited == ["root", "a", "a1", "a2", "b", "c", "c1"]

    def test_post_order(self, registry, sample_tree):
        visited = [value for _, value in registry.traverse(sample_tree["root"], order=TraversalOrder.POST_ORDER)]
        assert visited == ["a1", "a2", "a", "b", "c1", "c", "root"]

    @pytest.mark.parametrize("order", list(TraversalOrder))
    def test_leaf_visits_itself_only(self, registry, node, order):
        leaf = node("leaf")
        assert [value for _, value in registry.traverse(leaf, order=order)] == ["leaf"]

    def test_parent_before_children_in_pre_order_for_every_node(self, sample_tree):
        order = walk(sample_tree["root"], TraversalOrder.PRE_ORDER)
        for position, current in enumerate(order):
            for child in current.children:
                assert order.index(child) > position

    def test_parent_after_children_in_post_order_for_every_node(self, sample_tree):
        order = walk(sample_tree["root"], TraversalOrder.POST_ORDER)
        for position, current in enumerate(order):
            for child in current.children:
                assert order.index(child) < position

    def test_unbound_nodes_contribute_nothing(self, registry, node):
        group = node("group", bound=False)
        registry.add_child(group, node("x"))
        pairs = registry.traverse(group)
        assert [(ctx.name, value) for ctx, value in pairs] == [("x", "x")]

    def test_configured_default_order(self, label):
        registry = PolymorphicBehaviorRegistry(RegistryConfig(traversal_order=TraversalOrder.POST_ORDER))
        capability = registry.define_capability(label)
        parent = registry.create_context(registry.register_variant(capability, lambda: "parent"))
        registry.add_child(parent, registry.create_context(registry.register_variant(capability, lambda: "child")))
        assert [value for _, value in registry.traverse(parent)] == ["child", "parent"]


class TestAggregate:
    """Bottom-up folding."""

    def test_sizes_sum(self, registry):
        size = registry.define_capability("size", output_type=int)
        root = registry.create_context(name="root")
        docs = registry.create_context(name="docs")
        registry.add_child(docs, registry.create_context(registry.register_variant(size, lambda: 120)))
        registry.add_child(docs, registry.create_context(registry.register_variant(size, lambda: 4)))
        registry.add_child(root, docs)
        registry.add_child(root, registry.create_context(registry.register_variant(size, lambda: 2048)))

        total = registry.aggregate(root, lambda own, children: (own or 0) + sum(children))
        assert total == 2172

    def test_structure_is_preserved(self, registry, sample_tree):
        rendered = registry.aggregate(
            sample_tree["root"],
            lambda own, children: own + ("(" + ",".join(children) + ")" if children else ""),
        )
        assert rendered == "root(a(a1,a2),b,c(c1))"

    def test_arguments_reach_every_node(self, registry):
        scale = registry.define_capability("scale", input_types=(int,), output_type=int)
        parent = registry.create_context(registry.register_variant(scale, lambda factor: factor))
        registry.add_child(parent, registry.create_context(registry.register_variant(scale, lambda factor: 2 * factor)))
        assert registry.aggregate(parent, lambda own, children: own + sum(children), 3) == 9


class TestTreeEdges:
    """Child management and cycle checks."""

    def test_child_cannot_be_its_own_parent(self, registry, node):
        leaf = node("leaf")
        with pytest.raises(CycleDetectedError):
            registry.add_child(leaf, leaf)

    def test_ancestor_cannot_become_child(self, registry, sample_tree):
        with pytest.raises(CycleDetectedError):
            registry.add_child(sample_tree["c1"], sample_tree["root"])
        assert sample_tree["c1"].children == ()

    def test_remove_child(self, registry, sample_tree):
        assert registry.remove_child(sample_tree["root"], sample_tree["b"]) is True
        assert registry.remove_child(sample_tree["root"], sample_tree["b"]) is False
        assert not contains(sample_tree["root"], sample_tree["b"])
        visited = [value for _, value in registry.traverse(sample_tree["root"])]
        assert visited == ["root", "a", "a1", "a2", "c", "c1"]

    def test_removed_subtree_can_be_reattached_elsewhere(self, registry, sample_tree):
        registry.remove_child(sample_tree["root"], sample_tree["c"])
        registry.add_child(sample_tree["b"], sample_tree["c"])
        visited = [value for _, value in registry.traverse(sample_tree["root"])]
        assert visited == ["root", "a", "a1", "a2", "b", "c", "c1"]
        assert sample_tree["c"] in sample_tree["b"].children

    @pytest.mark.parametrize("attempt", range(20))
    def test_opposite_attaches_from_two_threads(self, registry, node, attempt):
        a, b = node("a"), node("b")
        barrier = threading.Barrier(2)
        outcomes = []

        def connect(parent, child):
            barrier.wait()
            try:
                registry.add_child(parent, child)
                outcomes.append("attached")
            except CycleDetectedError:
                outcomes.append("cycle")

        threads = [threading.Thread(target=connect, args=(a, b)), threading.Thread(target=connect, args=(b, a))]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        assert not any(thread.is_alive() for thread in threads)
        assert sorted(outcomes) == ["attached", "cycle"]
