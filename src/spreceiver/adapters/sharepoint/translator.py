"""Translate SharePoint payloads into domain values and back."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from spreceiver.domain.model import (
    CollectionTemplate,
    EventSubscription,
    RemoteCollection,
    SubscriptionKind,
    Synchronization,
)

from .schema import RECEIVER_TYPE_CODES, SYNCHRONIZATION_CODES

if TYPE_CHECKING:
    from spreceiver.domain.model import CollectionCreation, SubscriptionCreation

    from .schema import EventReceiverPayload, ListPayload

_RECEIVER_KINDS = {code: SubscriptionKind(name) for name, code in RECEIVER_TYPE_CODES.items()}
_SYNCHRONIZATIONS = {code: Synchronization(name) for name, code in SYNCHRONIZATION_CODES.items()}


def parse_subscription(payload: EventReceiverPayload) -> EventSubscription:
    """Return the receiver as a domain value.

    Receiver types without a ``SubscriptionKind`` member keep their numeric code.
    """

    return EventSubscription(
        name=payload.receiver_name,
        event_kind=_RECEIVER_KINDS.get(payload.event_type, payload.event_type),
        endpoint=payload.receiver_url or "",
        synchronization=_SYNCHRONIZATIONS.get(payload.synchronization, Synchronization.DEFAULT),
        receiver_id=payload.receiver_id,
    )


def parse_subscriptions(payloads: list[EventReceiverPayload]) -> list[EventSubscription]:
    return [parse_subscription(payload) for payload in payloads]


def parse_collection(payload: ListPayload) -> RemoteCollection:
    try:
        template = CollectionTemplate(payload.base_template)
    except ValueError:
        template = CollectionTemplate.GENERIC_LIST
    subscriptions = (
        parse_subscriptions(payload.event_receivers)
        if payload.event_receivers is not None
        else None
    )
    return RemoteCollection(
        title=payload.title,
        collection_id=payload.id,
        template=template,
        subscriptions=subscriptions,
    )


def collection_creation_body(creation: CollectionCreation) -> dict[str, Any]:
    return {
        "parameters": {
            "Title": creation.title,
            "Url": creation.url,
            "TemplateType": int(creation.template),
        }
    }


def subscription_creation_body(creation: SubscriptionCreation) -> dict[str, Any]:
    return {
        "parameters": {
            "ReceiverName": creation.name,
            "EventType": RECEIVER_TYPE_CODES[str(creation.event_kind)],
            "ReceiverUrl": creation.endpoint,
            "Synchronization": SYNCHRONIZATION_CODES[str(creation.synchronization)],
        }
    }
