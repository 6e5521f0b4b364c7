"""Values materialised from a remote session."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import CollectionTemplate, SubscriptionKind, Synchronization


@dataclass(slots=True, frozen=True)
class EventSubscription:
    """An event receiver registered on a remote collection.

    ``event_kind`` holds the raw platform code for receiver types without a
    ``SubscriptionKind`` member, so such receivers still take part in ownership checks.
    """

    name: str
    event_kind: SubscriptionKind | int
    endpoint: str
    synchronization: Synchronization = Synchronization.SYNCHRONOUS
    receiver_id: str | None = None

    @property
    def owner_tag(self) -> str:
        """Name without its trailing event-kind segment."""

        head, sep, _tail = self.name.rpartition(".")
        return head if sep else self.name

    def is_owned_by(self, prefix: str) -> bool:
        return self.name.startswith(prefix)


@dataclass(slots=True)
class RemoteCollection:
    """A remote list, looked up by its title.

    ``subscriptions`` stays ``None`` until the receivers have been loaded.
    """

    title: str
    collection_id: str
    template: CollectionTemplate = CollectionTemplate.DOCUMENT_LIBRARY
    subscriptions: list[EventSubscription] | None = None

    @property
    def subscriptions_loaded(self) -> bool:
        return self.subscriptions is not None


@dataclass(slots=True, frozen=True)
class CollectionCreation:
    """Creation request for a new list."""

    title: str
    url: str
    template: CollectionTemplate = CollectionTemplate.DOCUMENT_LIBRARY


@dataclass(slots=True, frozen=True)
class SubscriptionCreation:
    """Creation request for a new event receiver."""

    name: str
    event_kind: SubscriptionKind
    endpoint: str
    synchronization: Synchronization = Synchronization.SYNCHRONOUS
