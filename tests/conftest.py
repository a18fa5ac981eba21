import pytest

from polydispatch.infrastructure.patterns import SingletonRegistry
from polydispatch.infrastructure.registry import PolymorphicBehaviorRegistry


@pytest.fixture(autouse=True)
def reset_singletons():
    """Process-wide instances must not leak from one test into the next."""
    yield
    PolymorphicBehaviorRegistry.reset_instance()
    SingletonRegistry.get_instance().reset()


@pytest.fixture
def registry():
    return PolymorphicBehaviorRegistry()


@pytest.fixture
def handle(registry):
    return registry.define_capability("handle", input_types=(str,), output_type=str)


@pytest.fixture
def cost(registry):
    return registry.define_capability("cost", output_type=float)
