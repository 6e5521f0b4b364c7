"""Inbound events and the outcomes produced for them."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .enums import EventKind, ServiceStatus

_EMPTY: Mapping[str, str] = MappingProxyType({})


@dataclass(slots=True, frozen=True)
class InboundEvent:
    """A remote event as delivered to the receiver.

    ``source_endpoint`` is the address the event was delivered to; receivers
    registered during install point back at it.
    """

    kind: EventKind
    source_endpoint: str | None = None
    mutable_fields: Mapping[str, object] = field(default_factory=dict[str, object])
    context_token: str | None = None
    host_web_url: str | None = None

    @property
    def has_context(self) -> bool:
        return bool(self.context_token) and bool(self.host_web_url)


@dataclass(slots=True, frozen=True)
class Success:
    changed_fields: Mapping[str, str] = _EMPTY


@dataclass(slots=True, frozen=True)
class Failure:
    message: str


type Outcome = Success | Failure


@dataclass(slots=True, frozen=True)
class EventResult:
    """Protocol-level answer to a ProcessEvent call."""

    status: ServiceStatus = ServiceStatus.CONTINUE
    error_message: str | None = None
    changed_item_properties: Mapping[str, str] = _EMPTY
