"""Event payloads carried by fan-out notification."""
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class DomainEvent(BaseModel):
    """Base class for events delivered to observers."""
    model_config = ConfigDict(frozen=True)

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    event_type: str = ""
    source: str = ""
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def __init__(self, **data):
        # Set event_type based on class name if not provided
        if 'event_type' not in data or not data['event_type']:
            data['event_type'] = self.__class__.__name__
        super().__init__(**data)


class StateChangedEvent(DomainEvent):
    """Raised by a subject whose state moved from one value to another."""
    old_state: Optional[Any] = None
    new_state: Any = None
