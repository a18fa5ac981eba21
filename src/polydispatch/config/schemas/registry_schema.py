"""Registry behavior configuration schema."""
from pydantic import BaseModel, Field

from polydispatch.domain.core.common_types import (
    CompositionOrder,
    NotificationPolicy,
    TraversalOrder,
)


class RegistryConfig(BaseModel):
    """Defaults applied by a behavior registry when a call does not override them."""

    notification_policy: NotificationPolicy = Field(
        NotificationPolicy.COLLECT,
        description="How fan-out notification reports observer failures",
    )
    composition_order: CompositionOrder = Field(
        CompositionOrder.INSIDE_OUT,
        description="Default order for decorator layers built from a combine function",
    )
    traversal_order: TraversalOrder = Field(
        TraversalOrder.PRE_ORDER,
        description="Default depth-first order for tree traversal",
    )
