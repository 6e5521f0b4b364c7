"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class EventKind(StrEnum):
    """Classification of an inbound remote event."""

    INSTALLED = "AppInstalled"
    UNINSTALLING = "AppUninstalling"
    ITEM_ADDING = "ItemAdding"
    ITEM_UPDATING = "ItemUpdating"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: str | None) -> EventKind:
        """Map a wire event type onto a known kind; anything unrecognised is OTHER."""

        if not value:
            return cls.OTHER
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


class SubscriptionKind(StrEnum):
    """Event receiver types that can be attached to a list.

    The member values double as the suffix of owned receiver names.
    """

    ITEM_ADDING = "ItemAdding"
    ITEM_UPDATING = "ItemUpdating"
    ITEM_DELETING = "ItemDeleting"
    ITEM_ADDED = "ItemAdded"
    ITEM_UPDATED = "ItemUpdated"
    ITEM_DELETED = "ItemDeleted"


class Synchronization(StrEnum):
    DEFAULT = "DefaultSynchronization"
    SYNCHRONOUS = "Synchronous"
    ASYNCHRONOUS = "Asynchronous"


class CollectionTemplate(IntEnum):
    """List template identifiers understood by the remote platform."""

    GENERIC_LIST = 100
    DOCUMENT_LIBRARY = 101


class ServiceStatus(StrEnum):
    CONTINUE = "Continue"
    CANCEL_NO_ERROR = "CancelNoError"
    CANCEL_WITH_ERROR = "CancelWithError"
    CANCEL_WITH_REDIRECT_URL = "CancelWithRedirectUrl"
