"""In-memory remote site and session fakes for reconciliation tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count
from typing import TYPE_CHECKING, Literal

from spreceiver.domain.errors import RemoteOperationError
from spreceiver.domain.model import (
    CollectionTemplate,
    EventSubscription,
    RemoteCollection,
    SubscriptionKind,
)
from spreceiver.domain.ports import Deferred, RemoteSession, RemoteSessionFactory

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from spreceiver.domain.model import (
        CollectionCreation,
        InboundEvent,
        SubscriptionCreation,
    )


@dataclass
class StoredList:
    list_id: str
    title: str
    template: CollectionTemplate
    url: str
    receivers: list[EventSubscription] = field(default_factory=list[EventSubscription])


class FakeRemoteSite:
    """Remote state shared by every session opened against it."""

    def __init__(self) -> None:
        self.lists: list[StoredList] = []
        self.round_trips = 0
        self.operations: list[str] = []
        self.fail_on: str | None = None
        self._ids = count(1)

    def next_id(self) -> str:
        return f"00000000-0000-0000-0000-{next(self._ids):012d}"

    def add_list(
        self,
        title: str,
        *,
        template: CollectionTemplate = CollectionTemplate.DOCUMENT_LIBRARY,
    ) -> StoredList:
        stored = StoredList(list_id=self.next_id(), title=title, template=template, url=title)
        self.lists.append(stored)
        return stored

    def add_receiver(
        self,
        stored: StoredList,
        name: str,
        kind: SubscriptionKind | int = SubscriptionKind.ITEM_ADDING,
        endpoint: str = "https://elsewhere.example/receiver",
    ) -> EventSubscription:
        receiver = EventSubscription(
            name=name,
            event_kind=kind,
            endpoint=endpoint,
            receiver_id=self.next_id(),
        )
        stored.receivers.append(receiver)
        return receiver

    def lists_titled(self, title: str) -> list[StoredList]:
        return [stored for stored in self.lists if stored.title == title]

    def get_list(self, list_id: str) -> StoredList:
        for stored in self.lists:
            if stored.list_id == list_id:
                return stored
        raise RemoteOperationError(f"List {list_id} does not exist", status=404)

    def receiver_names(self, title: str) -> list[str]:
        return [receiver.name for stored in self.lists_titled(title) for receiver in stored.receivers]


def _materialise(stored: StoredList, *, with_receivers: bool) -> RemoteCollection:
    return RemoteCollection(
        title=stored.title,
        collection_id=stored.list_id,
        template=stored.template,
        subscriptions=list(stored.receivers) if with_receivers else None,
    )


class FakeRemoteSession:
    """Queues operations and applies them to a ``FakeRemoteSite`` on commit."""

    def __init__(self, site: FakeRemoteSite) -> None:
        self.site = site
        self.closed = False
        self.commits = 0
        self._queue: list[tuple[str, Callable[[], None]]] = []

    def __enter__(self) -> FakeRemoteSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        self.close()
        return False

    @property
    def pending(self) -> int:
        return len(self._queue)

    def close(self) -> None:
        self._queue.clear()
        self.closed = True

    def query_collections(
        self,
        title: str,
        *,
        include_subscriptions: bool = True,
    ) -> Deferred[list[RemoteCollection]]:
        deferred: Deferred[list[RemoteCollection]] = Deferred(f"lists titled {title!r}")

        def run() -> None:
            deferred.resolve(
                [
                    _materialise(stored, with_receivers=include_subscriptions)
                    for stored in self.site.lists_titled(title)
                ]
            )

        self._queue.append(("query", run))
        return deferred

    def add_collection(self, creation: CollectionCreation) -> Deferred[RemoteCollection]:
        deferred: Deferred[RemoteCollection] = Deferred(f"new list {creation.title!r}")

        def run() -> None:
            stored = self.site.add_list(creation.title, template=creation.template)
            stored.url = creation.url
            deferred.resolve(_materialise(stored, with_receivers=False))

        self._queue.append(("add_collection", run))
        return deferred

    def load_subscriptions(self, collection: RemoteCollection) -> Deferred[list[EventSubscription]]:
        deferred: Deferred[list[EventSubscription]] = Deferred("receivers")

        def run() -> None:
            deferred.resolve(list(self.site.get_list(collection.collection_id).receivers))

        self._queue.append(("load_subscriptions", run))
        return deferred

    def delete_subscription(
        self,
        collection: RemoteCollection,
        subscription: EventSubscription,
    ) -> None:
        # like DeleteObject, the client-side collection shrinks as soon as the delete is queued
        if collection.subscriptions is not None and subscription in collection.subscriptions:
            collection.subscriptions.remove(subscription)

        def run() -> None:
            stored = self.site.get_list(collection.collection_id)
            stored.receivers = [
                receiver
                for receiver in stored.receivers
                if receiver.receiver_id != subscription.receiver_id
            ]

        self._queue.append((f"delete:{subscription.name}", run))

    def add_subscription(
        self,
        collection: RemoteCollection,
        creation: SubscriptionCreation,
    ) -> Deferred[EventSubscription]:
        deferred: Deferred[EventSubscription] = Deferred(f"new receiver {creation.name!r}")

        def run() -> None:
            stored = self.site.get_list(collection.collection_id)
            if any(receiver.name == creation.name for receiver in stored.receivers):
                raise RemoteOperationError(f"Receiver {creation.name} already exists", status=409)
            receiver = EventSubscription(
                name=creation.name,
                event_kind=creation.event_kind,
                endpoint=creation.endpoint,
                synchronization=creation.synchronization,
                receiver_id=self.site.next_id(),
            )
            stored.receivers.append(receiver)
            deferred.resolve(receiver)

        self._queue.append((f"add:{creation.name}", run))
        return deferred

    def commit(self) -> None:
        if self.closed:
            raise RuntimeError("Session is closed")
        if not self._queue:
            return
        operations = list(self._queue)
        self._queue.clear()
        self.site.round_trips += 1
        self.commits += 1
        for label, run in operations:
            if self.site.fail_on is not None and label.startswith(self.site.fail_on):
                raise RemoteOperationError(f"Simulated failure during {label}", status=500)
            self.site.operations.append(label)
            run()


class FakeSessionFactory:
    """Hands out sessions against one site and remembers them."""

    def __init__(self, site: FakeRemoteSite, *, available: bool = True) -> None:
        self.site = site
        self.available = available
        self.sessions: list[FakeRemoteSession] = []
        self.events: list[InboundEvent] = []

    def __call__(self, event: InboundEvent) -> FakeRemoteSession | None:
        self.events.append(event)
        if not self.available:
            return None
        session = FakeRemoteSession(self.site)
        self.sessions.append(session)
        return session


if TYPE_CHECKING:
    _session_check: RemoteSession = FakeRemoteSession(FakeRemoteSite())
    _factory_check: RemoteSessionFactory = FakeSessionFactory(FakeRemoteSite())
