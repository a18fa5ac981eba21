"""Fan-out notification - deliver one event to every observer of a context."""
from dataclasses import dataclass, field
from typing import Any, List, Sequence

from polydispatch.domain.core.common_types import NotificationPolicy
from polydispatch.domain.core.exceptions import ObserverNotificationError
from polydispatch.domain.variant import Variant
from polydispatch.infrastructure.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ObserverFailure:
    """An observer that raised while handling an event."""
    observer: str
    error: BaseException


@dataclass
class NotificationReport:
    """Outcome of a single fan-out dispatch."""
    event: Any
    delivered: List[str] = field(default_factory=list)
    results: List[Any] = field(default_factory=list)
    failures: List[ObserverFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failures

    @property
    def attempted(self) -> int:
        return len(self.delivered) + len(self.failures)


def notify(observers: Sequence[Variant],
           event: Any,
           policy: NotificationPolicy = NotificationPolicy.COLLECT) -> NotificationReport:
    """
    Invoke every observer with ``event`` in registration order.

    Under COLLECT a failing observer is recorded and the next one still runs.
    RAISE_AGGREGATE behaves the same but raises ObserverNotificationError once
    all observers ran. FAIL_FAST re-raises the first failure as-is.
    """
    report = NotificationReport(event=event)
    for observer in observers:
        try:
            result = observer.execute(event)
        except Exception as e:
            if policy is NotificationPolicy.FAIL_FAST:
                raise
            logger.warning("Observer failed", observer=observer.name, error=str(e))
            report.failures.append(ObserverFailure(observer=observer.name, error=e))
            continue
        report.delivered.append(observer.name)
        report.results.append(result)

    if report.failures and policy is NotificationPolicy.RAISE_AGGREGATE:
        raise ObserverNotificationError(report.failures)
    return report
