"""Tests for fan-out notification."""

import pytest

from polydispatch.config.schemas import RegistryConfig
from polydispatch.domain.core.common_types import NotificationPolicy
from polydispatch.domain.core.exceptions import ObserverNotificationError, SignatureMismatchError
from polydispatch.domain.events import StateChangedEvent
from polydispatch.infrastructure.registry import PolymorphicBehaviorRegistry


class RecordingObserver:
    def __init__(self, name, log):
        self.name = name
        self.log = log

    def update(self, event):
        self.log.append((self.name, event))


def failing_observer(event):
    raise RuntimeError("observer broke")


class TestNotifyAll:
    """Delivery order and failure handling."""

    def setup_method(self):
        self.registry = PolymorphicBehaviorRegistry()
        self.update = self.registry.define_capability("update", input_types=(object,), output_type=object)
        self.subject = self.registry.create_context(name="subject")
        self.log = []

    def attach(self, implementation, name=None):
        observer = self.registry.register_variant(self.update, implementation, name=name)
        self.registry.attach_observer(self.subject, observer)
        return observer

    def test_two_stateless_observers_notified_once_in_order(self):
        self.attach(RecordingObserver("A", self.log))
        self.attach(RecordingObserver("B", self.log))
        event = StateChangedEvent(source="subject", old_state="idle", new_state="busy")

        report = self.registry.notify_all(self.subject, event)

        assert self.log == [("A", event), ("B", event)]
        assert report.delivered == ["RecordingObserver", "RecordingObserver"]
        assert report.succeeded
        assert report.attempted == 2

    def test_no_observers(self):
        report = self.registry.notify_all(self.subject, "event")
        assert report.delivered == []
        assert report.succeeded

    def test_failure_is_collected_and_next_observer_runs(self):
        self.attach(failing_observer)
        self.attach(RecordingObserver("after", self.log))

        report = self.registry.notify_all(self.subject, "ping")

        assert self.log == [("after", "ping")]
        assert not report.succeeded
        assert report.failures[0].observer == "failing_observer"
        assert isinstance(report.failures[0].error, RuntimeError)
        assert report.delivered == ["RecordingObserver"]

    def test_raise_aggregate_runs_all_then_raises(self):
        self.attach(failing_observer)
        self.attach(RecordingObserver("after", self.log))

        with pytest.raises(ObserverNotificationError, match="1 observer"):
            self.registry.notify_all(self.subject, "ping", policy=NotificationPolicy.RAISE_AGGREGATE)
        assert self.log == [("after", "ping")]

    def test_fail_fast_propagates_first_failure(self):
        self.attach(failing_observer)
        self.attach(RecordingObserver("after", self.log))

        with pytest.raises(RuntimeError, match="observer broke"):
            self.registry.notify_all(self.subject, "ping", policy=NotificationPolicy.FAIL_FAST)
        assert self.log == []

    def test_configured_default_policy(self):
        registry = PolymorphicBehaviorRegistry(RegistryConfig(notification_policy=NotificationPolicy.FAIL_FAST))
        update = registry.define_capability("update", input_types=(object,))
        subject = registry.create_context()
        registry.attach_observer(subject, registry.register_variant(update, failing_observer))

        with pytest.raises(RuntimeError):
            registry.notify_all(subject, "ping")

    def test_detach_observer(self):
        first = self.attach(RecordingObserver("A", self.log))
        self.attach(RecordingObserver("B", self.log))

        assert self.registry.detach_observer(self.subject, first) is True
        assert self.registry.detach_observer(self.subject, first) is False
        self.registry.notify_all(self.subject, "ping")
        assert self.log == [("B", "ping")]

    def test_observer_results_are_reported(self):
        self.attach(lambda event: event * 2, name="double")
        report = self.registry.notify_all(self.subject, 21)
        assert report.results == [42]

    def test_observers_must_share_capability(self):
        self.attach(RecordingObserver("A", self.log))
        other = self.registry.define_capability("other", input_types=(object,))
        with pytest.raises(SignatureMismatchError):
            self.registry.attach_observer(self.subject, self.registry.register_variant(other, lambda e: None))

    def test_observer_may_detach_itself_during_notification(self):
        observers = []

        def once(event):
            self.registry.detach_observer(self.subject, observers[0])
            self.log.append(("once", event))

        observers.append(self.attach(once))
        self.attach(RecordingObserver("B", self.log))

        self.registry.notify_all(self.subject, 1)
        self.registry.notify_all(self.subject, 2)
        assert self.log == [("once", 1), ("B", 1), ("B", 2)]
