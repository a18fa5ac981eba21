# src/polydispatch/domain/core/exceptions.py
from typing import Any, List, Optional


class DomainException(Exception):
    """Base exception for all polydispatch errors."""
    pass


class DuplicateCapabilityError(DomainException):
    """Raised when a capability name is redefined with an incompatible signature."""
    def __init__(self, name: str, existing: Any, requested: Any):
        super().__init__(
            f"Capability '{name}' is already defined as {existing}, cannot redefine as {requested}"
        )
        self.name = name
        self.existing = existing
        self.requested = requested


class CapabilityNotFoundError(DomainException):
    """Raised when a capability is used before being defined on the registry."""
    def __init__(self, name: str):
        super().__init__(f"Capability '{name}' is not defined")
        self.name = name


class SignatureMismatchError(DomainException):
    """Raised when an implementation does not conform to a capability signature."""
    def __init__(self, capability: str, detail: str):
        super().__init__(f"Implementation does not conform to capability '{capability}': {detail}")
        self.capability = capability
        self.detail = detail


class CycleDetectedError(DomainException):
    """Raised when a chain or tree edge would make a context reach itself."""
    def __init__(self, source: str, target: str):
        super().__init__(f"Linking {source} -> {target} would create a cycle")
        self.source = source
        self.target = target


class IndexOutOfRangeError(DomainException, IndexError):
    """Raised when a caretaker is asked for a snapshot it does not hold."""
    def __init__(self, index: int, size: int):
        super().__init__(f"Snapshot index {index} out of range for {size} snapshot(s)")
        self.index = index
        self.size = size


class ObserverNotificationError(DomainException):
    """Raised after a fan-out dispatch when failures must be reported to the caller."""
    def __init__(self, failures: List[Any]):
        names = ", ".join(failure.observer for failure in failures)
        super().__init__(f"{len(failures)} observer(s) failed: {names}")
        self.failures = failures


class ConfigurationError(DomainException):
    """Raised when there's an issue with configuration."""
    def __init__(self, message: str, missing_fields: Optional[List[str]] = None):
        super().__init__(message)
        self.missing_fields = missing_fields or []
