"""Public interface for the SharePoint adapter."""

from __future__ import annotations

from .factory import FixedSiteSessionFactory, SharePointSessionFactory
from .session import ClientFactory, SharePointSession, default_client_factory

__all__ = [
    "ClientFactory",
    "FixedSiteSessionFactory",
    "SharePointSession",
    "SharePointSessionFactory",
    "default_client_factory",
]
