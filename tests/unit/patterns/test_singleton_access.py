"""Tests for process-wide singleton access."""

from polydispatch.infrastructure.patterns import SingletonRegistry, get_singleton, reset_singleton


class Settings:
    def __init__(self, name="default"):
        self.name = name


class Counter:
    def __init__(self):
        self.value = 0


class TestSingletonAccess:
    """get_singleton and the reset hook."""

    def test_same_instance_returned(self):
        assert get_singleton(Settings) is get_singleton(Settings)

    def test_constructor_arguments_used_on_first_call_only(self):
        first = get_singleton(Settings, name="custom")
        second = get_singleton(Settings, name="ignored")
        assert second is first
        assert second.name == "custom"

    def test_one_instance_per_class(self):
        assert get_singleton(Settings) is not get_singleton(Counter)

    def test_reset_single_class(self):
        settings = get_singleton(Settings)
        counter = get_singleton(Counter)

        reset_singleton(Settings)

        assert get_singleton(Settings) is not settings
        assert get_singleton(Counter) is counter

    def test_reset_all(self):
        counter = get_singleton(Counter)
        counter.value = 5

        reset_singleton()

        assert not SingletonRegistry.get_instance().has(Counter)
        assert get_singleton(Counter).value == 0

    def test_state_does_not_leak_between_tests_part_one(self):
        get_singleton(Counter).value += 1
        assert get_singleton(Counter).value == 1

    def test_state_does_not_leak_between_tests_part_two(self):
        get_singleton(Counter).value += 1
        assert get_singleton(Counter).value == 1

    def test_registry_is_itself_a_singleton(self):
        assert SingletonRegistry.get_instance() is SingletonRegistry.get_instance()
