"""Creational patterns: singleton, factory method, abstract factory, prototype, builder."""
from typing import List

from polydispatch.domain.core.exceptions import SignatureMismatchError
from polydispatch.infrastructure.composition.decorator import wrap_before
from polydispatch.infrastructure.patterns import get_singleton, reset_singleton
from polydispatch.infrastructure.registry import PolymorphicBehaviorRegistry


class EventLog:
    """Process-wide log; only ever reached through get_singleton."""

    def __init__(self):
        self.entries: List[str] = []

    def record(self, entry: str) -> None:
        self.entries.append(entry)


def singleton_demo() -> List[str]:
    reset_singleton(EventLog)
    first = get_singleton(EventLog)
    second = get_singleton(EventLog)
    first.record("application started")
    lines = [
        f"Same instance: {first is second}",
        f"Entries seen through second reference: {second.entries}",
    ]
    reset_singleton(EventLog)
    lines.append(f"After reset, fresh instance: {get_singleton(EventLog) is not first}")
    reset_singleton(EventLog)
    return lines


class Truck:
    def deliver(self, cargo: str) -> str:
        return f"Truck delivering {cargo} by land"


class Ship:
    def deliver(self, cargo: str) -> str:
        return f"Ship delivering {cargo} by sea"


def factory_method_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    create_transport = registry.define_capability("create_transport", output_type=object)

    road = registry.create_context(registry.register_variant(create_transport, Truck), name="road-logistics")
    sea = registry.create_context(registry.register_variant(create_transport, Ship), name="sea-logistics")

    lines = []
    for logistics in (road, sea):
        transport = registry.invoke(logistics)
        lines.append(transport.deliver("10 crates"))
    return lines


class WindowsWidgets:
    def create_button(self) -> str:
        return "Windows button"

    def create_checkbox(self) -> str:
        return "Windows checkbox"


class MacWidgets:
    def create_button(self) -> str:
        return "Mac button"

    def create_checkbox(self) -> str:
        return "Mac checkbox"


def abstract_factory_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    button = registry.define_capability("create_button", output_type=str)
    checkbox = registry.define_capability("create_checkbox", output_type=str)

    lines = []
    for family in (WindowsWidgets(), MacWidgets()):
        # One factory object serves the whole family of capabilities
        widgets = [
            registry.create_context(registry.register_variant(button, family)),
            registry.create_context(registry.register_variant(checkbox, family)),
        ]
        lines.extend(f"Render {registry.invoke(widget)}" for widget in widgets)
    return lines


def prototype_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    describe = registry.define_capability("describe", input_types=(dict,), output_type=str)
    variant = registry.register_variant(
        describe, lambda shape: f"{shape['color']} {shape['kind']} at {shape['position']}", name="ShapeDescription"
    )

    original = registry.create_context(variant, name="original", state={"kind": "circle", "color": "red", "position": [0, 0]})
    clone = registry.create_context(name="clone")
    registry.restore(clone, registry.snapshot(original))
    clone.state["color"] = "blue"
    clone.state["position"].append(5)

    return [
        f"Original: {registry.invoke(original, original.state)}",
        f"Clone: {registry.invoke(clone, clone.state)}",
        f"Clone shares variant: {clone.variant is original.variant}",
    ]


def builder_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    build = registry.define_capability("build", input_types=(tuple,), output_type=str)
    finish = registry.register_variant(build, lambda parts: "House with " + ", ".join(parts), name="finish")

    house = registry.create_context(finish, name="house")
    # Outside-in layers: the last applied step runs first
    for step in ("roof", "walls", "foundation"):
        house = registry.compose(wrap_before(lambda parts, step=step: parts + (step,)), house, name=f"add-{step}")

    lines = [registry.invoke(house, ())]
    try:
        registry.register_variant(build, lambda: "prefab", name="prefab")
    except SignatureMismatchError:
        lines.append("Prefab builder rejected: build expects the parts collected so far")
    return lines


DEMOS = [
    ("singleton", "Singleton", "One process-wide instance with a reset hook", singleton_demo),
    ("factory_method", "Factory Method", "Creators decide which product to build", factory_method_demo),
    ("abstract_factory", "Abstract Factory", "Families of related products", abstract_factory_demo),
    ("prototype", "Prototype", "Clone a configured object", prototype_demo),
    ("builder", "Builder", "Assemble a product step by step", builder_demo),
]
