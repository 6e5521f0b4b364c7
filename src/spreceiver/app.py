"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from spreceiver.adapters.sharepoint import FixedSiteSessionFactory, SharePointSessionFactory
from spreceiver.config import (
    get_receiver_config,
    get_sharepoint_config,
    get_site_config,
)
from spreceiver.domain.dispatcher import EventDispatcher
from spreceiver.domain.model import EventKind, InboundEvent
from spreceiver.domain.reconciler import SubscriptionReconciler

if TYPE_CHECKING:
    from spreceiver.config import ReceiverConfig
    from spreceiver.domain.model import Outcome
    from spreceiver.domain.ports import RemoteSessionFactory


log = getLogger(__name__)


def build_dispatcher(
    *,
    receiver_config: ReceiverConfig | None = None,
    session_factory: RemoteSessionFactory | None = None,
) -> EventDispatcher:
    """Wire a dispatcher from configuration, opening sessions from each event's context."""

    config = receiver_config or get_receiver_config()
    effective_factory = session_factory or SharePointSessionFactory(config=get_sharepoint_config())
    log.info(
        "Receiver configured: list=%r, prefix=%r",
        config.list_title,
        config.receiver_prefix,
    )
    return EventDispatcher(
        session_factory=effective_factory,
        reconciler=SubscriptionReconciler(prefix=config.receiver_prefix),
        collection_title=config.list_title,
    )


def _site_dispatcher(
    receiver_config: ReceiverConfig | None,
    session_factory: RemoteSessionFactory | None,
) -> EventDispatcher:
    effective_factory = session_factory or FixedSiteSessionFactory(
        site=get_site_config(),
        config=get_sharepoint_config(),
    )
    return build_dispatcher(receiver_config=receiver_config, session_factory=effective_factory)


def reconcile_site(
    *,
    endpoint: str,
    receiver_config: ReceiverConfig | None = None,
    session_factory: RemoteSessionFactory | None = None,
) -> Outcome:
    """Run install reconciliation against the configured site, outside any event delivery."""

    dispatcher = _site_dispatcher(receiver_config, session_factory)
    log.info("Reconciling receivers for endpoint %s", endpoint)
    return dispatcher.handle(InboundEvent(kind=EventKind.INSTALLED, source_endpoint=endpoint))


def clean_site(
    *,
    receiver_config: ReceiverConfig | None = None,
    session_factory: RemoteSessionFactory | None = None,
) -> Outcome:
    """Remove owned receivers from the configured site."""

    dispatcher = _site_dispatcher(receiver_config, session_factory)
    log.info("Removing owned receivers")
    return dispatcher.handle(InboundEvent(kind=EventKind.UNINSTALLING))
