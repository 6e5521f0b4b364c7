"""Open SharePoint sessions for inbound events."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from spreceiver.config.sharepoint import SharePointConfig, SiteConfig, get_sharepoint_config
from spreceiver.domain.ports.session import RemoteSessionFactory

from .session import ClientFactory, SharePointSession, default_client_factory

if TYPE_CHECKING:
    from spreceiver.domain.model import InboundEvent

log = getLogger(__name__)


@dataclass(slots=True)
class SharePointSessionFactory:
    """Session factory scoped to the host web that raised the event."""

    config: SharePointConfig = field(default_factory=get_sharepoint_config)
    client_factory: ClientFactory = field(default=default_client_factory)

    def __call__(self, event: InboundEvent) -> SharePointSession | None:
        if not event.has_context or event.host_web_url is None:
            log.debug("%s event carries no remote context", event.kind)
            return None
        token = self.config.access_token or event.context_token
        if not token:
            return None
        return SharePointSession(
            web_url=event.host_web_url,
            access_token=token,
            resilience=self.config.resilience,
            client_factory=self.client_factory,
        )


@dataclass(slots=True)
class FixedSiteSessionFactory:
    """Session factory bound to one configured site, ignoring the event's context."""

    site: SiteConfig
    config: SharePointConfig = field(default_factory=get_sharepoint_config)
    client_factory: ClientFactory = field(default=default_client_factory)

    def __call__(self, event: InboundEvent) -> SharePointSession | None:  # noqa: ARG002
        return SharePointSession(
            web_url=self.site.site_url,
            access_token=self.site.access_token,
            resilience=self.config.resilience,
            client_factory=self.client_factory,
        )


if TYPE_CHECKING:
    _factory_check: RemoteSessionFactory = SharePointSessionFactory()
