"""Keep the receivers owned by this service in line with what it wants registered.

Ownership is a naming convention: every receiver this service creates is named
``{prefix}.{event kind}``, and any receiver whose name starts with the prefix is
considered ours. Receivers registered by anything else are left alone.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from spreceiver.domain.model import SubscriptionCreation, SubscriptionKind, Synchronization

if TYPE_CHECKING:
    from spreceiver.domain.model import EventSubscription, RemoteCollection
    from spreceiver.domain.ports import RemoteSession

log = getLogger(__name__)

OWNED_SUBSCRIPTION_KINDS: tuple[SubscriptionKind, ...] = (
    SubscriptionKind.ITEM_ADDING,
    SubscriptionKind.ITEM_UPDATING,
)


@dataclass(slots=True, frozen=True)
class SubscriptionReconciler:
    prefix: str
    kinds: tuple[SubscriptionKind, ...] = field(default=OWNED_SUBSCRIPTION_KINDS)
    synchronization: Synchronization = Synchronization.SYNCHRONOUS

    def __post_init__(self) -> None:
        if not self.prefix.strip():
            raise ValueError("Receiver prefix must not be blank")

    def subscription_name(self, kind: SubscriptionKind) -> str:
        return f"{self.prefix}.{kind}"

    def owned(self, collection: RemoteCollection) -> list[EventSubscription]:
        """Snapshot of the owned receivers of an already loaded collection."""

        if collection.subscriptions is None:
            raise ValueError(f"Receivers of list {collection.title!r} are not loaded")
        return [sub for sub in collection.subscriptions if sub.is_owned_by(self.prefix)]

    def purge_owned(self, session: RemoteSession, collection: RemoteCollection) -> int:
        """Delete every owned receiver from ``collection`` and return how many went."""

        if collection.subscriptions is None:
            loaded = session.load_subscriptions(collection)
            session.commit()
            collection.subscriptions = list(loaded.value)

        # the snapshot is taken before any delete is queued
        doomed = self.owned(collection)
        for subscription in doomed:
            log.debug("Deleting receiver %s from %r", subscription.name, collection.title)
            session.delete_subscription(collection, subscription)
        session.commit()

        collection.subscriptions = [
            sub for sub in collection.subscriptions if not sub.is_owned_by(self.prefix)
        ]
        if doomed:
            log.info("Removed %s owned receiver(s) from %r", len(doomed), collection.title)
        return len(doomed)

    def register_owned(
        self,
        session: RemoteSession,
        collection: RemoteCollection,
        endpoint: str,
    ) -> list[EventSubscription]:
        """Replace the owned receivers of ``collection`` with a fresh set for ``endpoint``."""

        if not endpoint:
            raise ValueError("Cannot register receivers without an endpoint")

        self.purge_owned(session, collection)

        pending = [
            session.add_subscription(
                collection,
                SubscriptionCreation(
                    name=self.subscription_name(kind),
                    event_kind=kind,
                    endpoint=endpoint,
                    synchronization=self.synchronization,
                ),
            )
            for kind in self.kinds
        ]
        session.commit()

        registered = [deferred.value for deferred in pending]
        collection.subscriptions = [*(collection.subscriptions or []), *registered]
        log.info(
            "Registered %s receiver(s) on %r pointing at %s",
            len(registered),
            collection.title,
            endpoint,
        )
        return registered
