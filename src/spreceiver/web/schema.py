"""Wire shapes of the remote event envelope."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from spreceiver.domain.model import EventKind, EventResult, InboundEvent, ServiceStatus


class EnvelopeModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class AppEventProperties(EnvelopeModel):
    host_web_url: str | None = Field(default=None, alias="HostWebFullUrl")


class ItemEventProperties(EnvelopeModel):
    web_url: str | None = Field(default=None, alias="WebUrl")
    after_properties: dict[str, Any] = Field(default_factory=dict, alias="AfterProperties")


class RemoteEventProperties(EnvelopeModel):
    """Body of a ProcessEvent / ProcessOneWayEvent call."""

    event_type: str | None = Field(default=None, alias="EventType")
    context_token: str | None = Field(default=None, alias="ContextToken")
    app_event_properties: AppEventProperties | None = Field(
        default=None, alias="AppEventProperties"
    )
    item_event_properties: ItemEventProperties | None = Field(
        default=None, alias="ItemEventProperties"
    )

    def to_event(self, *, source_endpoint: str) -> InboundEvent:
        app = self.app_event_properties or AppEventProperties()
        item = self.item_event_properties or ItemEventProperties()
        return InboundEvent(
            kind=EventKind.parse(self.event_type),
            source_endpoint=source_endpoint,
            mutable_fields=dict(item.after_properties),
            context_token=self.context_token,
            host_web_url=app.host_web_url or item.web_url,
        )


class RemoteEventResult(EnvelopeModel):
    status: ServiceStatus = Field(default=ServiceStatus.CONTINUE, alias="Status")
    error_message: str | None = Field(default=None, alias="ErrorMessage")
    changed_item_properties: dict[str, str] = Field(
        default_factory=dict, alias="ChangedItemProperties"
    )

    @classmethod
    def from_result(cls, result: EventResult) -> RemoteEventResult:
        return cls(
            status=result.status,
            error_message=result.error_message,
            changed_item_properties=dict(result.changed_item_properties),
        )
