"""Behavioral patterns: chain of responsibility through visitor."""
from typing import List

from polydispatch.domain.core.common_types import UNHANDLED
from polydispatch.domain.events import DomainEvent, StateChangedEvent
from polydispatch.domain.memento import Caretaker
from polydispatch.infrastructure.registry import PolymorphicBehaviorRegistry


def chain_of_responsibility_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    handle = registry.define_capability("handle", input_types=(str,), output_type=str)

    def handler(name: str, accepts: str):
        def respond(request: str):
            return f"{name} handled {request}" if request == accepts else UNHANDLED
        return registry.create_context(registry.register_variant(handle, respond, name=name), name=name)

    head = registry.build_chain(handler("Handler1", "request1"), handler("Handler2", "request2"))

    lines = []
    for request in ("request1", "request2", "request3"):
        result = registry.invoke(head, request)
        lines.append(f"{request} was not handled" if result is UNHANDLED else result)
    return lines


class AppendText:
    """Command that appends text to a document and can undo itself."""

    def __init__(self, text: str):
        self.text = text

    def execute(self, document: list) -> str:
        document.append(self.text)
        return "".join(document)

    def undo(self, document: list) -> str:
        document.pop()
        return "".join(document)


def command_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    execute = registry.define_capability("execute", input_types=(list,), output_type=str)
    undo = registry.define_capability("undo", input_types=(list,), output_type=str)

    document: list = []
    invoker = registry.create_context(name="editor", state=[])
    history = invoker.state
    for command in (AppendText("Hello"), AppendText(" World")):
        registry.set_variant(invoker, registry.register_variant(execute, command))
        registry.invoke(invoker, document)
        history.append(registry.register_variant(undo, command))

    lines = [f"After commands: {''.join(document)}"]
    reverter = registry.create_context(history.pop())
    lines.append(f"After undo: {registry.invoke(reverter, document)}")
    return lines


def iterator_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    title = registry.define_capability("title", output_type=str)

    def item(name: str):
        return registry.create_context(registry.register_variant(title, lambda: name, name=name), name=name)

    playlist = item("Road trip")
    rock = item("Rock")
    registry.add_child(rock, item("Highway Star"))
    registry.add_child(rock, item("Radar Love"))
    registry.add_child(playlist, rock)
    registry.add_child(playlist, item("Fast Car"))

    return [f"{position}. {name}" for position, (_, name) in enumerate(registry.traverse(playlist), start=1)]


class ChatMessage(DomainEvent):
    sender: str
    text: str


def mediator_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    receive = registry.define_capability("receive", input_types=(ChatMessage,), output_type=object)
    room = registry.create_context(name="chat-room")
    transcript: List[str] = []

    def participant(name: str):
        def on_message(message: ChatMessage) -> None:
            if message.sender != name:
                transcript.append(f"{name} received '{message.text}' from {message.sender}")
        registry.attach_observer(room, registry.register_variant(receive, on_message, name=name))

    for name in ("Alice", "Bob", "Carol"):
        participant(name)

    registry.notify_all(room, ChatMessage(sender="Alice", text="Hi all", source=room.name))
    registry.notify_all(room, ChatMessage(sender="Bob", text="Hello Alice", source=room.name))
    return transcript


def memento_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    originator = registry.create_context(name="originator")
    caretaker = Caretaker()

    for state, save in (("S1", False), ("S2", True), ("S3", True), ("S4", False)):
        originator.state = state
        if save:
            caretaker.save(originator)

    lines = [f"Current state: {originator.state}"]
    lines.append(f"Restored snapshot 0: {caretaker.restore(originator, 0)}")
    lines.append(f"Restored snapshot 1: {caretaker.restore(originator, 1)}")
    return lines


def observer_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    update = registry.define_capability("update", input_types=(StateChangedEvent,), output_type=object)
    subject = registry.create_context(name="subject", state="idle")
    received: List[str] = []

    for name in ("ObserverA", "ObserverB"):
        registry.attach_observer(
            subject,
            registry.register_variant(
                update, lambda event, name=name: received.append(f"{name} notified: {event.old_state} -> {event.new_state}"), name=name
            ),
        )

    old_state, subject.state = subject.state, "busy"
    report = registry.notify_all(subject, StateChangedEvent(source=subject.name, old_state=old_state, new_state=subject.state))
    return received + [f"Delivered to: {', '.join(report.delivered)}"]


def state_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    advance = registry.define_capability("advance", output_type=str)
    light = registry.create_context(name="traffic-light")

    transitions = {"Green": "Yellow", "Yellow": "Red", "Red": "Green"}
    states = {}
    for color, following in transitions.items():
        def go(color=color, following=following) -> str:
            # Each state selects its successor state on the context
            registry.set_variant(light, states[following])
            return f"{color} -> {following}"
        states[color] = registry.register_variant(advance, go, name=color)

    registry.set_variant(light, states["Green"])
    return [registry.invoke(light) for _ in range(4)]


def strategy_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    operation = registry.define_capability("operation", input_types=(int, int), output_type=int)
    strategies = [
        ("+", registry.register_variant(operation, lambda a, b: a + b, name="Add")),
        ("-", registry.register_variant(operation, lambda a, b: a - b, name="Subtract")),
        ("*", registry.register_variant(operation, lambda a, b: a * b, name="Multiply")),
    ]

    calculator = registry.create_context(name="calculator")
    lines = []
    for symbol, strategy in strategies:
        registry.set_variant(calculator, strategy)
        lines.append(f"10 {symbol} 5 = {registry.invoke(calculator, 10, 5)}")
    return lines


class Tea:
    def brew(self) -> str:
        return "Steeping the tea"

    def add_condiments(self) -> str:
        return "Adding lemon"


class Coffee:
    def brew(self) -> str:
        return "Dripping coffee through filter"

    def add_condiments(self) -> str:
        return "Adding sugar and milk"


def template_method_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    brew = registry.define_capability("brew", output_type=str)
    add_condiments = registry.define_capability("add_condiments", output_type=str)

    def prepare(beverage) -> List[str]:
        # Fixed skeleton; only the two varying steps come from the beverage
        steps = registry.create_context(registry.register_variant(brew, beverage))
        extras = registry.create_context(registry.register_variant(add_condiments, beverage))
        return ["Boiling water", registry.invoke(steps), "Pouring into cup", registry.invoke(extras)]

    lines = []
    for beverage in (Tea(), Coffee()):
        lines.append(f"Making {type(beverage).__name__.lower()}:")
        lines.extend(f"  {step}" for step in prepare(beverage))
    return lines


class Book:
    def __init__(self, title: str, price: float):
        self.title = title
        self.price = price

    def accept(self, visitor) -> float:
        return visitor.visit_book(self)


class Fruit:
    def __init__(self, name: str, price_per_kg: float, weight: float):
        self.name = name
        self.price_per_kg = price_per_kg
        self.weight = weight

    def accept(self, visitor) -> float:
        return visitor.visit_fruit(self)


class ShoppingCartVisitor:
    def __init__(self):
        self.receipt: List[str] = []

    def visit_book(self, book: Book) -> float:
        cost = book.price - 5 if book.price > 50 else book.price
        self.receipt.append(f"Book {book.title}: {cost}")
        return cost

    def visit_fruit(self, fruit: Fruit) -> float:
        cost = fruit.price_per_kg * fruit.weight
        self.receipt.append(f"Fruit {fruit.name}: {cost}")
        return cost


def visitor_demo() -> List[str]:
    registry = PolymorphicBehaviorRegistry()
    accept = registry.define_capability("accept", input_types=(object,), output_type=float)

    cart = registry.create_context(name="cart")
    for element in (Book("Design Patterns", 60), Book("Refactoring", 40), Fruit("Apple", 2, 1.5)):
        registry.add_child(cart, registry.create_context(registry.register_variant(accept, element)))

    visitor = ShoppingCartVisitor()
    total = registry.aggregate(cart, lambda own, children: (own or 0) + sum(children), visitor)
    return visitor.receipt + [f"Total: {total}"]


DEMOS = [
    ("chain_of_responsibility", "Chain of Responsibility", "Pass a request along handlers", chain_of_responsibility_demo),
    ("command", "Command", "Requests as objects that can be undone", command_demo),
    ("iterator", "Iterator", "Walk a collection without exposing it", iterator_demo),
    ("mediator", "Mediator", "Colleagues talk through one hub", mediator_demo),
    ("memento", "Memento", "Capture and restore state externally", memento_demo),
    ("observer", "Observer", "Notify dependents of a change", observer_demo),
    ("state", "State", "Behavior changes with internal state", state_demo),
    ("strategy", "Strategy", "Interchangeable algorithms", strategy_demo),
    ("template_method", "Template Method", "Fixed skeleton with varying steps", template_method_demo),
    ("visitor", "Visitor", "Operations over an object structure", visitor_demo),
]
