"""HTTP client used for SharePoint batch commits.

Every request goes through an ``httpx_retries`` transport and, when configured,
an ``aiolimiter`` limiter shared by the requests of one client.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from aiolimiter import AsyncLimiter
from httpx_retries import Retry, RetryTransport

from spreceiver.config.http_resilience import (
    THROTTLING_STATUSES,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
)

if TYPE_CHECKING:
    from collections.abc import Generator
    from types import TracebackType

__all__ = [
    "BearerAuth",
    "RateLimit",
    "ResilienceConfig",
    "ResilientClient",
    "RetryPolicy",
    "build_retry",
]

log = getLogger(__name__)


class BearerAuth(httpx.Auth):
    """Attach an OAuth access token to each request."""

    def __init__(self, token: str) -> None:
        self._token = token

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self._token}"
        yield request


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=tuple(policy.allowed_methods),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
        backoff_jitter=policy.backoff_jitter,
    )


async def _warn_when_still_throttled(response: httpx.Response) -> None:
    # retries happen inside the transport, so this only sees the last attempt
    if response.status_code in THROTTLING_STATUSES:
        log.warning(
            "%s %s still throttled (%s) after retries",
            response.request.method,
            response.request.url,
            response.status_code,
        )


class ResilientClient:
    """Async client with retries and optional rate limiting.

    ``transport`` replaces the network transport underneath the retry layer, so
    tests can serve canned responses and still go through the retry policy.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._limiter: AsyncLimiter | None = None
        if config.ratelimit is not None:
            self._limiter = AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
        self._client = httpx.AsyncClient(
            timeout=config.timeout_seconds,
            headers=dict(config.default_headers or {}),
            event_hooks={"response": [_warn_when_still_throttled, *config.response_hooks]},
            transport=RetryTransport(transport=transport, retry=build_retry(config.retry)),
        )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def post_json(self, url: str, payload: Any, *, auth: httpx.Auth) -> httpx.Response:
        if self._limiter is None:
            return await self._client.post(url, json=payload, auth=auth)
        async with self._limiter:
            return await self._client.post(url, json=payload, auth=auth)
