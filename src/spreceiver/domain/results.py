"""Shape dispatch outcomes into protocol-level results."""

from __future__ import annotations

from types import MappingProxyType

from spreceiver.domain.model import EventResult, Failure, Outcome, ServiceStatus, Success


def build_result(outcome: Outcome) -> EventResult:
    match outcome:
        case Success(changed_fields=changed):
            return EventResult(
                status=ServiceStatus.CONTINUE,
                changed_item_properties=MappingProxyType(dict(changed)),
            )
        case Failure(message=message):
            return EventResult(status=ServiceStatus.CANCEL_WITH_ERROR, error_message=message)
