"""Batched SharePoint session.

Operations are queued locally and sent as one JSON batch to ``{web}/_api/$batch``
on ``commit``. Requests inside a batch run in order, so a delete queued before a
create is applied first.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any, Literal

from pydantic import ValidationError

from spreceiver.adapters.http_resilience import BearerAuth, ResilienceConfig, ResilientClient
from spreceiver.config.sharepoint import default_sharepoint_resilience
from spreceiver.domain.errors import RemoteOperationError
from spreceiver.domain.ports.session import Deferred, RemoteSession

from .schema import (
    BatchEnvelope,
    BatchRequest,
    BatchResponse,
    BatchResponseEnvelope,
    ErrorResponse,
    EventReceiverCollectionPayload,
    EventReceiverPayload,
    ListCollectionPayload,
    ListPayload,
)
from .translator import (
    collection_creation_body,
    parse_collection,
    parse_subscription,
    parse_subscriptions,
    subscription_creation_body,
)

if TYPE_CHECKING:
    from types import TracebackType

    from spreceiver.domain.model import (
        CollectionCreation,
        EventSubscription,
        RemoteCollection,
        SubscriptionCreation,
    )

log = getLogger(__name__)

ClientFactory = Callable[[ResilienceConfig], ResilientClient]
BATCH_PATH = "_api/$batch"
_LIST_SELECT = "Id,Title,BaseTemplate"


def default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _odata_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _list_path(collection: RemoteCollection) -> str:
    return f"web/lists(guid'{collection.collection_id}')"


@dataclass(slots=True)
class _QueuedOperation:
    request_id: str
    method: str
    url: str
    body: dict[str, Any] | None
    on_success: Callable[[Any], None]

    def as_request(self) -> BatchRequest:
        return BatchRequest(id=self.request_id, method=self.method, url=self.url, body=self.body)


@dataclass(slots=True)
class SharePointSession:
    """Remote session against one SharePoint web."""

    web_url: str
    access_token: str
    resilience: ResilienceConfig = field(default_factory=default_sharepoint_resilience)
    client_factory: ClientFactory = field(default=default_client_factory)
    round_trips: int = field(default=0, init=False)
    _queue: list[_QueuedOperation] = field(default_factory=list[_QueuedOperation], init=False)
    _next_id: int = field(default=1, init=False)
    _closed: bool = field(default=False, init=False)

    def __enter__(self) -> SharePointSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        self.close()
        return False  # don't swallow exceptions

    @property
    def pending(self) -> int:
        return len(self._queue)

    @property
    def batch_url(self) -> str:
        return f"{self.web_url.rstrip('/')}/{BATCH_PATH}"

    def close(self) -> None:
        if self._queue:
            log.debug("Discarding %s uncommitted operation(s)", len(self._queue))
        self._queue.clear()
        self._closed = True

    def query_collections(
        self,
        title: str,
        *,
        include_subscriptions: bool = True,
    ) -> Deferred[list[RemoteCollection]]:
        deferred: Deferred[list[RemoteCollection]] = Deferred(f"lists titled {title!r}")
        select = _LIST_SELECT
        query = f"$filter=Title eq {_odata_literal(title)}"
        if include_subscriptions:
            select += ",EventReceivers"
            query += "&$expand=EventReceivers"

        def resolve(body: Any) -> None:
            payload = ListCollectionPayload.model_validate(body)
            deferred.resolve([parse_collection(item) for item in payload.value])

        self._enqueue("GET", f"web/lists?{query}&$select={select}", None, resolve)
        return deferred

    def add_collection(self, creation: CollectionCreation) -> Deferred[RemoteCollection]:
        deferred: Deferred[RemoteCollection] = Deferred(f"new list {creation.title!r}")

        def resolve(body: Any) -> None:
            deferred.resolve(parse_collection(ListPayload.model_validate(body)))

        self._enqueue("POST", "web/lists/add", collection_creation_body(creation), resolve)
        return deferred

    def load_subscriptions(
        self,
        collection: RemoteCollection,
    ) -> Deferred[list[EventSubscription]]:
        deferred: Deferred[list[EventSubscription]] = Deferred(
            f"receivers of {collection.title!r}"
        )

        def resolve(body: Any) -> None:
            payload = EventReceiverCollectionPayload.model_validate(body)
            deferred.resolve(parse_subscriptions(payload.value))

        self._enqueue("GET", f"{_list_path(collection)}/EventReceivers", None, resolve)
        return deferred

    def delete_subscription(
        self,
        collection: RemoteCollection,
        subscription: EventSubscription,
    ) -> None:
        if subscription.receiver_id is None:
            raise ValueError(f"Receiver {subscription.name!r} has no remote id")
        url = f"{_list_path(collection)}/EventReceivers('{subscription.receiver_id}')"
        self._enqueue("DELETE", url, None, lambda _body: None)

    def add_subscription(
        self,
        collection: RemoteCollection,
        creation: SubscriptionCreation,
    ) -> Deferred[EventSubscription]:
        deferred: Deferred[EventSubscription] = Deferred(f"new receiver {creation.name!r}")

        def resolve(body: Any) -> None:
            deferred.resolve(parse_subscription(EventReceiverPayload.model_validate(body)))

        self._enqueue(
            "POST",
            f"{_list_path(collection)}/EventReceivers/add",
            subscription_creation_body(creation),
            resolve,
        )
        return deferred

    def commit(self) -> None:
        """Send every queued operation in one batch; a no-op when nothing is queued."""

        if self._closed:
            raise RuntimeError("Session is closed")
        if not self._queue:
            return
        operations = list(self._queue)
        self._queue.clear()
        responses = asyncio.run(self._send_batch(operations))
        self.round_trips += 1
        self._apply_responses(operations, responses)

    def _enqueue(
        self,
        method: str,
        url: str,
        body: dict[str, Any] | None,
        on_success: Callable[[Any], None],
    ) -> None:
        if self._closed:
            raise RuntimeError("Session is closed")
        request_id = str(self._next_id)
        self._next_id += 1
        self._queue.append(_QueuedOperation(request_id, method, url, body, on_success))

    async def _send_batch(self, operations: list[_QueuedOperation]) -> list[BatchResponse]:
        envelope = BatchEnvelope(requests=[operation.as_request() for operation in operations])
        log.debug("Committing %s operation(s) to %s", len(operations), self.batch_url)
        async with self.client_factory(self.resilience) as client:
            response = await client.post_json(
                self.batch_url,
                envelope.model_dump(mode="json", exclude_none=True),
                auth=BearerAuth(self.access_token),
            )

        if response.is_error:
            try:
                details: object = response.json()
            except ValueError:
                details = response.text
            raise RemoteOperationError(
                f"Batch request to {self.web_url} failed: {_error_text(details)}",
                status=response.status_code,
            )
        try:
            payload = BatchResponseEnvelope.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise RemoteOperationError(
                f"Unexpected batch response from {self.web_url}",
                status=response.status_code,
            ) from exc
        return payload.responses

    def _apply_responses(
        self,
        operations: list[_QueuedOperation],
        responses: list[BatchResponse],
    ) -> None:
        by_id = {response.id: response for response in responses}
        for operation in operations:
            response = by_id.get(operation.request_id)
            if response is None:
                raise RemoteOperationError(
                    f"No response for {operation.method} {operation.url}",
                    request_id=operation.request_id,
                )
            if response.status >= 400:
                log.error(
                    "SharePoint rejected %s %s with status %s",
                    operation.method,
                    operation.url,
                    response.status,
                )
                raise RemoteOperationError(
                    f"{operation.method} {operation.url} failed: {_error_text(response.body)}",
                    status=response.status,
                    request_id=operation.request_id,
                )
            operation.on_success(response.body)


def _error_text(body: object) -> str:
    if isinstance(body, dict):
        try:
            error = ErrorResponse.model_validate(body).error
        except ValidationError:
            return str(body)
        return f"{error.code}: {error.message.value}" if error.code else error.message.value
    return str(body) if body else "no details"


if TYPE_CHECKING:
    _session_check: RemoteSession = SharePointSession(web_url="", access_token="")
