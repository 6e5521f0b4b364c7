"""FastAPI app receiving SharePoint remote events."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from fastapi import APIRouter, FastAPI, Request

from spreceiver import __version__
from spreceiver.domain.results import build_result

from .schema import RemoteEventProperties, RemoteEventResult

if TYPE_CHECKING:
    from spreceiver.domain.dispatcher import EventDispatcher

log = getLogger(__name__)

router = APIRouter()


def _dispatcher(request: Request) -> EventDispatcher:
    return request.app.state.dispatcher


@router.post("/events", response_model=RemoteEventResult, response_model_by_alias=True)
def process_event(payload: RemoteEventProperties, request: Request) -> RemoteEventResult:
    # receivers registered on install point back at the address this call arrived on
    event = payload.to_event(source_endpoint=str(request.url))
    outcome = _dispatcher(request).handle(event)
    return RemoteEventResult.from_result(build_result(outcome))


@router.post("/events/one-way", status_code=204)
def process_one_way_event(payload: RemoteEventProperties) -> None:
    log.error("One-way delivery of %s is not supported", payload.event_type)
    raise NotImplementedError("One-way remote events are not handled by this receiver")


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}


def create_app(dispatcher: EventDispatcher | None = None) -> FastAPI:
    if dispatcher is None:
        from spreceiver.app import build_dispatcher

        dispatcher = build_dispatcher()
    app = FastAPI(title="spreceiver", version=__version__)
    app.state.dispatcher = dispatcher
    app.include_router(router)
    return app
