"""Domain port definitions for adapters."""

from __future__ import annotations

from .session import Deferred, RemoteSession, RemoteSessionFactory

__all__ = ["Deferred", "RemoteSession", "RemoteSessionFactory"]
