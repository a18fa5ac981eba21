"""Tests for the pattern demonstration catalog."""

import pytest

from polydispatch.demos import CATALOG, CATEGORIES, list_demos, render_catalog, run_demo
from polydispatch.demos.__main__ import main

EXPECTED_OUTPUT = {
    "singleton": [
        "Same instance: True",
        "Entries seen through second reference: ['application started']",
        "After reset, fresh instance: True",
    ],
    "factory_method": ["Truck delivering 10 crates by land", "Ship delivering 10 crates by sea"],
    "abstract_factory": [
        "Render Windows button",
        "Render Windows checkbox",
        "Render Mac button",
        "Render Mac checkbox",
    ],
    "prototype": [
        "Original: red circle at [0, 0]",
        "Clone: blue circle at [0, 0, 5]",
        "Clone shares variant: True",
    ],
    "builder": [
        "House with foundation, walls, roof",
        "Prefab builder rejected: build expects the parts collected so far",
    ],
    "adapter": [
        "LegacyPrinter rejected: render takes a single text argument",
        "Adapted output: HELLO ADAPTER",
    ],
    "bridge": [
        "Circle filled with red",
        "Square filled with red",
        "Circle filled with blue",
        "Square filled with blue",
    ],
    "composite": ["resume.pdf: 120 KB", "notes.txt: 4 KB", "photo.jpg: 2048 KB", "Total size: 2172 KB"],
    "decorator": ["Simple coffee: 5", "With milk: 6", "With milk and sugar: 6.5"],
    "facade": [
        "Starting computer:",
        "  CPU freeze",
        "  Memory load boot sector",
        "  CPU jump to boot address",
        "  CPU execute",
    ],
    "flyweight": [
        "green oak at (1, 2)",
        "dark green pine at (4, 1)",
        "green oak at (7, 3)",
        "Trees planted: 3, tree types created: 2",
        "First and last oak share a type: True",
    ],
    "proxy": ["admin reads the quarterly report", "Access denied for guest"],
    "chain_of_responsibility": [
        "Handler1 handled request1",
        "Handler2 handled request2",
        "request3 was not handled",
    ],
    "command": ["After commands: Hello World", "After undo: Hello"],
    "iterator": ["1. Road trip", "2. Rock", "3. Highway Star", "4. Radar Love", "5. Fast Car"],
    "mediator": [
        "Bob received 'Hi all' from Alice",
        "Carol received 'Hi all' from Alice",
        "Alice received 'Hello Alice' from Bob",
        "Carol received 'Hello Alice' from Bob",
    ],
    "memento": ["Current state: S4", "Restored snapshot 0: S2", "Restored snapshot 1: S3"],
    "observer": [
        "ObserverA notified: idle -> busy",
        "ObserverB notified: idle -> busy",
        "Delivered to: ObserverA, ObserverB",
    ],
    "state": ["Green -> Yellow", "Yellow -> Red", "Red -> Green", "Green -> Yellow"],
    "strategy": ["10 + 5 = 15", "10 - 5 = 5", "10 * 5 = 50"],
    "template_method": [
        "Making tea:",
        "  Boiling water",
        "  Steeping the tea",
        "  Pouring into cup",
        "  Adding lemon",
        "Making coffee:",
        "  Boiling water",
        "  Dripping coffee through filter",
        "  Pouring into cup",
        "  Adding sugar and milk",
    ],
    "visitor": ["Book Design Patterns: 55", "Book Refactoring: 40", "Fruit Apple: 3.0", "Total: 98.0"],
}


class TestCatalog:
    """Catalog contents and lookup."""

    def test_every_pattern_is_registered(self):
        assert set(CATALOG) == set(EXPECTED_OUTPUT)
        assert len(CATALOG) == 22

    def test_categories(self):
        assert [len(list_demos(category)) for category in CATEGORIES] == [5, 7, 10]
        assert len(list_demos()) == len(CATALOG)

    def test_unknown_demo(self):
        with pytest.raises(KeyError, match="not registered"):
            run_demo("monostate")


class TestDemoOutput:
    """Each demonstration produces its documented output."""

    @pytest.mark.parametrize("name", sorted(EXPECTED_OUTPUT))
    def test_output(self, name):
        assert run_demo(name) == EXPECTED_OUTPUT[name]

    def test_demos_are_repeatable(self):
        assert run_demo("singleton") == run_demo("singleton")
        assert run_demo("state") == run_demo("state")

    def test_render_catalog_groups_by_category(self):
        lines = render_catalog()
        headers = [line for line in lines if line.startswith("== ")]

        assert headers == ["== Creational patterns ==", "== Structural patterns ==", "== Behavioral patterns =="]
        assert "-- Decorator: Stack behavior around a component" in lines
        assert "   With milk and sugar: 6.5" in lines

    def test_main_prints_catalog(self, capsys):
        assert main() == 0
        out = capsys.readouterr().out
        assert "== Behavioral patterns ==" in out
        assert "Total: 98.0" in out
