"""Pydantic models describing the SharePoint REST payloads used by the session."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# SP.EventReceiverType
RECEIVER_TYPE_CODES: dict[str, int] = {
    "ItemAdding": 1,
    "ItemUpdating": 2,
    "ItemDeleting": 3,
    "ItemAdded": 10001,
    "ItemUpdated": 10002,
    "ItemDeleted": 10003,
}
# SP.EventReceiverSynchronization
SYNCHRONIZATION_CODES: dict[str, int] = {
    "DefaultSynchronization": 0,
    "Synchronous": 1,
    "Asynchronous": 2,
}


class SharePointBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class EventReceiverPayload(SharePointBaseModel):
    receiver_id: str = Field(alias="ReceiverId")
    receiver_name: str = Field(alias="ReceiverName")
    event_type: int = Field(alias="EventType")
    receiver_url: str | None = Field(default=None, alias="ReceiverUrl")
    synchronization: int = Field(default=0, alias="Synchronization")

    @field_validator("event_type", "synchronization", mode="before")
    @classmethod
    def _parse_int(cls, value: int | str) -> int:
        return int(value)


class ListPayload(SharePointBaseModel):
    id: str = Field(alias="Id")
    title: str = Field(alias="Title")
    base_template: int = Field(default=101, alias="BaseTemplate")
    event_receivers: list[EventReceiverPayload] | None = Field(
        default=None, alias="EventReceivers"
    )


class ListCollectionPayload(SharePointBaseModel):
    value: list[ListPayload]


class EventReceiverCollectionPayload(SharePointBaseModel):
    value: list[EventReceiverPayload]


class BatchRequest(SharePointBaseModel):
    id: str
    method: str
    url: str
    body: dict[str, Any] | None = None


class BatchEnvelope(SharePointBaseModel):
    requests: list[BatchRequest]


class BatchResponse(SharePointBaseModel):
    id: str
    status: int
    body: Any = None


class BatchResponseEnvelope(SharePointBaseModel):
    responses: list[BatchResponse]


class ErrorMessage(SharePointBaseModel):
    value: str = ""


class ErrorDetail(SharePointBaseModel):
    code: str = ""
    message: ErrorMessage = Field(default_factory=ErrorMessage)


class ErrorResponse(SharePointBaseModel):
    error: ErrorDetail = Field(alias="odata.error")
