"""Remote session port.

A remote session queues read and mutation operations and executes all of them in a
single round trip on ``commit``. Results of queued reads are handed out as
``Deferred`` placeholders that are filled when the commit completes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from spreceiver.domain.errors import DeferredValueError

if TYPE_CHECKING:
    from types import TracebackType

    from spreceiver.domain.model import (
        CollectionCreation,
        EventSubscription,
        InboundEvent,
        RemoteCollection,
        SubscriptionCreation,
    )


class Deferred[T]:
    """Placeholder for the result of a queued operation."""

    __slots__ = ("_description", "_resolved", "_value")

    def __init__(self, description: str) -> None:
        self._description = description
        self._resolved = False
        self._value: T | None = None

    @property
    def resolved(self) -> bool:
        return self._resolved

    @property
    def value(self) -> T:
        if not self._resolved:
            raise DeferredValueError(f"{self._description} has not been committed yet")
        return self._value  # type: ignore[return-value]

    def resolve(self, value: T) -> None:
        self._value = value
        self._resolved = True

    def __repr__(self) -> str:
        state = repr(self._value) if self._resolved else "pending"
        return f"Deferred({self._description}: {state})"


@runtime_checkable
class RemoteSession(Protocol):
    """Batched command context against the remote object graph."""

    def __enter__(self) -> RemoteSession: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    @property
    def pending(self) -> int:
        """Number of operations queued since the last commit."""
        ...

    def query_collections(
        self,
        title: str,
        *,
        include_subscriptions: bool = True,
    ) -> Deferred[list[RemoteCollection]]: ...

    def add_collection(self, creation: CollectionCreation) -> Deferred[RemoteCollection]: ...

    def load_subscriptions(
        self,
        collection: RemoteCollection,
    ) -> Deferred[list[EventSubscription]]: ...

    def delete_subscription(
        self,
        collection: RemoteCollection,
        subscription: EventSubscription,
    ) -> None: ...

    def add_subscription(
        self,
        collection: RemoteCollection,
        creation: SubscriptionCreation,
    ) -> Deferred[EventSubscription]: ...

    def commit(self) -> None: ...

    def close(self) -> None: ...


@runtime_checkable
class RemoteSessionFactory(Protocol):
    """Opens a session scoped to the security context of an inbound event.

    Returns ``None`` when the event carries no usable context.
    """

    def __call__(self, event: InboundEvent) -> RemoteSession | None: ...


__all__ = ["Deferred", "RemoteSession", "RemoteSessionFactory"]
