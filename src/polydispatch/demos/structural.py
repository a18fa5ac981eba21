"""Structural patterns: adapter, bridge, composite, decorator, facade, flyweight, proxy."""
from typing import List

from polydispatch.domain.core.exceptions import SignatureMismatchError
from polydispatch.infrastructure.composition.decorator import wrap_after, wrap_before
from polydispatch.infrastructure.registry import PolymorphicBehaviorRegistry


class LegacyPrinter:
    """Existing class whose interface does not match the render capability."""

    def print_upper(self, text: str, copies: int) -> str:
        return " | ".join([text.upper()] * copies)


def adapter_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    render = registry.define_capability("render", input_types=(str,), output_type=str)
    legacy = LegacyPrinter()

    lines = []
    try:
        registry.register_variant(render, legacy.print_upper)
    except SignatureMismatchError:
        lines.append("LegacyPrinter rejected: render takes a single text argument")

    adapter = registry.register_variant(render, lambda text: legacy.print_upper(text, 1), name="LegacyPrinterAdapter")
    printer = registry.create_context(adapter)
    lines.append(f"Adapted output: {registry.invoke(printer, 'hello adapter')}")
    return lines


def bridge_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    color = registry.define_capability("color", output_type=str)
    red = registry.register_variant(color, lambda: "red", name="Red")
    blue = registry.register_variant(color, lambda: "blue", name="Blue")

    paint = registry.create_context(red, name="paint")
    circle = registry.compose(wrap_after(lambda fill: f"Circle filled with {fill}"), paint, name="circle")
    square = registry.compose(wrap_after(lambda fill: f"Square filled with {fill}"), paint, name="square")

    lines = [registry.invoke(circle), registry.invoke(square)]
    # Swapping the implementation side leaves the abstractions untouched
    registry.set_variant(paint, blue)
    lines.extend([registry.invoke(circle), registry.invoke(square)])
    return lines


def composite_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    size = registry.define_capability("size", output_type=int)

    def leaf(name: str, kilobytes: int):
        return registry.create_context(registry.register_variant(size, lambda: kilobytes, name=name), name=name)

    root = registry.create_context(name="root")
    docs = registry.create_context(name="docs")
    registry.add_child(docs, leaf("resume.pdf", 120))
    registry.add_child(docs, leaf("notes.txt", 4))
    registry.add_child(root, docs)
    registry.add_child(root, leaf("photo.jpg", 2048))

    lines = [f"{node.name}: {kilobytes} KB" for node, kilobytes in registry.traverse(root)]
    total = registry.aggregate(root, lambda own, children: (own or 0) + sum(children))
    lines.append(f"Total size: {total} KB")
    return lines


def decorator_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    cost = registry.define_capability("cost", output_type=float)

    coffee = registry.create_context(registry.register_variant(cost, lambda: 5, name="SimpleCoffee"), name="coffee")
    with_milk = registry.compose(wrap_after(lambda total: total + 1), coffee, name="milk")
    with_sugar = registry.compose(wrap_after(lambda total: total + 0.5), with_milk, name="sugar")

    return [
        f"Simple coffee: {registry.invoke(coffee)}",
        f"With milk: {registry.invoke(with_milk)}",
        f"With milk and sugar: {registry.invoke(with_sugar)}",
    ]


def facade_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    step = registry.define_capability("step", output_type=str)
    subsystems = [
        registry.create_context(registry.register_variant(step, lambda: "CPU freeze", name="cpu-freeze")),
        registry.create_context(registry.register_variant(step, lambda: "Memory load boot sector", name="memory-load")),
        registry.create_context(registry.register_variant(step, lambda: "CPU jump to boot address", name="cpu-jump")),
        registry.create_context(registry.register_variant(step, lambda: "CPU execute", name="cpu-execute")),
    ]

    start = registry.define_capability("start", output_type=list)
    computer = registry.create_context(
        registry.register_variant(start, lambda: [registry.invoke(part) for part in subsystems], name="ComputerFacade")
    )
    return ["Starting computer:"] + [f"  {action}" for action in registry.invoke(computer)]


class TreeType:
    """Intrinsic state shared by every tree of the same kind."""

    def __init__(self, kind: str, color: str):
        self.kind = kind
        self.color = color

    def draw(self, position: tuple) -> str:
        return f"{self.color} {self.kind} at {position}"


def flyweight_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    draw = registry.define_capability("draw", input_types=(tuple,), output_type=str)

    plantings = [(("oak", "green"), (1, 2)), (("pine", "dark green"), (4, 1)), (("oak", "green"), (7, 3))]
    forest = []
    for key, position in plantings:
        shared = registry.shared_variant(draw, key, lambda k: TreeType(*k))
        forest.append(registry.create_context(shared, state=position))

    lines = [registry.invoke(tree, tree.state) for tree in forest]
    lines.append(f"Trees planted: {len(forest)}, tree types created: {registry.flyweights.count}")
    lines.append(f"First and last oak share a type: {forest[0].variant is forest[2].variant}")
    return lines


def proxy_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    read = registry.define_capability("read", input_types=(str,), output_type=str)
    document = registry.create_context(
        registry.register_variant(read, lambda user: f"{user} reads the quarterly report", name="Document")
    )

    def check_access(user: str) -> str:
        if user != "admin":
            raise PermissionError(f"Access denied for {user}")
        return user

    guarded = registry.compose(wrap_before(check_access), document, name="DocumentProxy")

    lines = [registry.invoke(guarded, "admin")]
    try:
        registry.invoke(guarded, "guest")
    except PermissionError as e:
        lines.append(str(e))
    return lines


DEMOS = [
    ("adapter", "Adapter", "Fit an incompatible interface to a capability", adapter_demo),
    ("bridge", "Bridge", "Vary abstraction and implementation independently", bridge_demo),
    ("composite", "Composite", "Treat leaves and groups uniformly", composite_demo),
    ("decorator", "Decorator", "Stack behavior around a component", decorator_demo),
    ("facade", "Facade", "One entry point over several subsystems", facade_demo),
    ("flyweight", "Flyweight", "Share intrinsic state between many objects", flyweight_demo),
    ("proxy", "Proxy", "Control access before delegating", proxy_demo),
]
