"""Pattern catalog - every classic pattern as a thin client of the behavior registry."""
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from polydispatch.demos import behavioral, creational, structural


@dataclass(frozen=True)
class Demo:
    """A catalog entry: one pattern and the function that demonstrates it."""
    name: str
    category: str
    title: str
    summary: str
    run: Callable[[], List[str]]


def _collect() -> Dict[str, Demo]:
    catalog: Dict[str, Demo] = {}
    for category, module in (("creational", creational), ("structural", structural), ("behavioral", behavioral)):
        for name, title, summary, run in module.DEMOS:
            catalog[name] = Demo(name=name, category=category, title=title, summary=summary, run=run)
    return catalog


CATALOG: Dict[str, Demo] = _collect()

CATEGORIES = ("creational", "structural", "behavioral")


def list_demos(category: Optional[str] = None) -> List[Demo]:
    """Catalog entries in catalog order, optionally limited to one category."""
    return [demo for demo in CATALOG.values() if category is None or demo.category == category]


def run_demo(name: str) -> List[str]:
    """
    Run one demonstration and return its output lines.

    Raises:
        KeyError: If no demonstration is registered under ``name``
    """
    if name not in CATALOG:
        available = ', '.join(CATALOG)
        raise KeyError(f"Demo '{name}' is not registered. Available demos: {available}")
    return CATALOG[name].run()


def render_catalog() -> List[str]:
    """Output of every demonstration, grouped by category."""
    lines: List[str] = []
    for category in CATEGORIES:
        lines.append(f"== {category.title()} patterns ==")
        for demo in list_demos(category):
            lines.append(f"-- {demo.title}: {demo.summary}")
            lines.extend(f"   {line}" for line in demo.run())
        lines.append("")
    return lines


__all__ = ["CATALOG", "CATEGORIES", "Demo", "list_demos", "render_catalog", "run_demo"]
