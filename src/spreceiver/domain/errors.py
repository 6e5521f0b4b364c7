"""Errors raised by the remote event core."""

from __future__ import annotations


class RemoteOperationError(RuntimeError):
    """Raised when the remote platform rejects a queued operation or a commit."""

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.request_id = request_id


class DeferredValueError(RuntimeError):
    """Raised when a deferred result is read before the commit that fills it."""
