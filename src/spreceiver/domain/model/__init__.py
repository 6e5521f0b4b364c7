"""Public domain model surface."""

from __future__ import annotations

from spreceiver.domain.model.entities import (
    CollectionCreation,
    EventSubscription,
    RemoteCollection,
    SubscriptionCreation,
)
from spreceiver.domain.model.enums import (
    CollectionTemplate,
    EventKind,
    ServiceStatus,
    SubscriptionKind,
    Synchronization,
)
from spreceiver.domain.model.events import (
    EventResult,
    Failure,
    InboundEvent,
    Outcome,
    Success,
)

__all__ = [
    "CollectionCreation",
    "CollectionTemplate",
    "EventKind",
    "EventResult",
    "EventSubscription",
    "Failure",
    "InboundEvent",
    "Outcome",
    "RemoteCollection",
    "ServiceStatus",
    "SubscriptionCreation",
    "SubscriptionKind",
    "Success",
    "Synchronization",
]
