"""Route inbound remote events to reconciliation or item annotation."""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from spreceiver.domain.locator import ensure_collection, find_collection
from spreceiver.domain.model import EventKind, Failure, Success

if TYPE_CHECKING:
    from collections.abc import Callable

    from spreceiver.domain.model import InboundEvent, Outcome
    from spreceiver.domain.ports import RemoteSession, RemoteSessionFactory
    from spreceiver.domain.reconciler import SubscriptionReconciler

log = getLogger(__name__)

EXTENDED_DESCRIPTION_FIELD = "_ExtendedDescription"
UNSUPPORTED_EVENT_MESSAGE = "Unsupported event"


class MissingSessionError(RuntimeError):
    """Raised when an event that needs the remote platform carries no context."""


def _utcnow() -> datetime:
    return datetime.now(UTC)


def describe_failure(exc: BaseException) -> str:
    """Full diagnostic text of an exception, traceback included."""

    return "".join(traceback.format_exception(exc)).rstrip()


@dataclass(slots=True)
class EventDispatcher:
    session_factory: RemoteSessionFactory
    reconciler: SubscriptionReconciler
    collection_title: str
    now_provider: Callable[[], datetime] = _utcnow

    def handle(self, event: InboundEvent) -> Outcome:
        """Process one event; failures come back as ``Failure`` instead of raising."""

        log.info("Handling %s event", event.kind)
        try:
            match event.kind:
                case EventKind.INSTALLED:
                    return self._install(event)
                case EventKind.UNINSTALLING:
                    return self._uninstall(event)
                case EventKind.ITEM_ADDING | EventKind.ITEM_UPDATING:
                    return self._annotate_item(event)
                case _:
                    log.warning("Rejecting unsupported event %s", event.kind)
                    return Failure(UNSUPPORTED_EVENT_MESSAGE)
        except Exception as exc:
            log.exception("Failed to handle %s event", event.kind)
            return Failure(describe_failure(exc))

    def _install(self, event: InboundEvent) -> Outcome:
        if not event.source_endpoint:
            raise ValueError("Install event carries no endpoint to register")
        with self._open_session(event) as session:
            collection = ensure_collection(session, self.collection_title)
            self.reconciler.register_owned(session, collection, event.source_endpoint)
        return Success()

    def _uninstall(self, event: InboundEvent) -> Outcome:
        session = self.session_factory(event)
        if session is None:
            log.info("Uninstall event has no remote context, nothing to clean up")
            return Success()
        with session:
            collection = find_collection(session, self.collection_title)
            if collection is None:
                log.info("List %r not found, nothing to clean up", self.collection_title)
                return Success()
            self.reconciler.purge_owned(session, collection)
        return Success()

    def _annotate_item(self, event: InboundEvent) -> Outcome:
        stamp = self.now_provider().isoformat()
        proposed = event.mutable_fields.get(EXTENDED_DESCRIPTION_FIELD)
        if proposed is not None:
            log.debug("Overriding proposed %s value %r", EXTENDED_DESCRIPTION_FIELD, proposed)
        return Success(changed_fields={EXTENDED_DESCRIPTION_FIELD: f"Changed from RER ({stamp})"})

    def _open_session(self, event: InboundEvent) -> RemoteSession:
        session = self.session_factory(event)
        if session is None:
            raise MissingSessionError(f"{event.kind} event carries no remote context")
        return session
