"""Find or create the remote list that owned receivers are attached to."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from spreceiver.domain.model import CollectionCreation, CollectionTemplate

if TYPE_CHECKING:
    from spreceiver.domain.model import RemoteCollection
    from spreceiver.domain.ports import RemoteSession

log = getLogger(__name__)


def find_collection(session: RemoteSession, title: str) -> RemoteCollection | None:
    """Look up a list by exact title, loading its receivers in the same round trip."""

    query = session.query_collections(title, include_subscriptions=True)
    session.commit()
    matches = [collection for collection in query.value if collection.title == title]
    if not matches:
        log.debug("No list titled %r", title)
        return None
    if len(matches) > 1:
        log.warning("Found %s lists titled %r, using the first", len(matches), title)
    return matches[0]


def ensure_collection(
    session: RemoteSession,
    title: str,
    *,
    template: CollectionTemplate = CollectionTemplate.DOCUMENT_LIBRARY,
) -> RemoteCollection:
    """Return the list titled ``title``, creating it when it does not exist yet."""

    existing = find_collection(session, title)
    if existing is not None:
        return existing

    log.info("Creating list %r (template %s)", title, int(template))
    created = session.add_collection(CollectionCreation(title=title, url=title, template=template))
    session.commit()
    collection = created.value
    if collection.subscriptions is None:
        # a list that was just created has no receivers yet
        collection.subscriptions = []
    return collection
