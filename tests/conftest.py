from __future__ import annotations

import pytest

from spreceiver.domain.dispatcher import EventDispatcher
from spreceiver.domain.reconciler import SubscriptionReconciler
from tests.helpers.events import FIXED_NOW, TEST_LIST, TEST_PREFIX
from tests.helpers.remote_site import FakeRemoteSite, FakeSessionFactory


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "SPRECEIVER_LIST_TITLE",
        "SPRECEIVER_RECEIVER_PREFIX",
        "SPRECEIVER_HOST",
        "SPRECEIVER_PORT",
        "SHAREPOINT_ACCESS_TOKEN",
        "SHAREPOINT_SITE_URL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def site() -> FakeRemoteSite:
    return FakeRemoteSite()


@pytest.fixture
def session_factory(site: FakeRemoteSite) -> FakeSessionFactory:
    return FakeSessionFactory(site)


@pytest.fixture
def reconciler() -> SubscriptionReconciler:
    return SubscriptionReconciler(prefix=TEST_PREFIX)


@pytest.fixture
def dispatcher(
    session_factory: FakeSessionFactory,
    reconciler: SubscriptionReconciler,
) -> EventDispatcher:
    return EventDispatcher(
        session_factory=session_factory,
        reconciler=reconciler,
        collection_title=TEST_LIST,
        now_provider=lambda: FIXED_NOW,
    )
