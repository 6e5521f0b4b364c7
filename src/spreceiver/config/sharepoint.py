"""SharePoint connection settings."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

SHAREPOINT_TIMEOUT_SECONDS = 30.0


def default_sharepoint_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="sharepoint",
        timeout_seconds=SHAREPOINT_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        default_headers={"Accept": "application/json"},
    )


@dataclass(frozen=True, slots=True)
class SharePointConfig:
    """Holds SharePoint connection values.

    When ``access_token`` is unset, the context token delivered with each event is
    used as the bearer token.
    """

    access_token: str | None = None
    resilience: ResilienceConfig = field(default_factory=default_sharepoint_resilience)


@dataclass(frozen=True, slots=True)
class SiteConfig:
    """A fixed site and token, used when reconciling from the command line."""

    site_url: str
    access_token: str


def get_sharepoint_config(*, resilience: ResilienceConfig | None = None) -> SharePointConfig:
    return SharePointConfig(
        access_token=optional_env_var("SHAREPOINT_ACCESS_TOKEN"),
        resilience=resilience or default_sharepoint_resilience(),
    )


def get_site_config() -> SiteConfig:
    values = require_env_vars(("SHAREPOINT_SITE_URL", "SHAREPOINT_ACCESS_TOKEN"))
    return SiteConfig(
        site_url=values["SHAREPOINT_SITE_URL"].rstrip("/"),
        access_token=values["SHAREPOINT_ACCESS_TOKEN"],
    )
