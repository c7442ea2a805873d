"""
Custom exception types for the NSoT API client.

These exceptions allow callers to distinguish between failures
occurring on the wire, during authentication, at the HTTP status
level and inside the ``{status, data}`` response envelope.  Every
error derives from :class:`NsotError`, so a single ``except`` clause
catches anything the client raises.
"""

from __future__ import annotations

from typing import Optional


class NsotError(Exception):
    """Base exception for all NSoT client errors.

    ``operation`` and ``resource`` are filled in by the operation
    layer the first time an error crosses it, so that the rendered
    message says which call failed and on what.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: Optional[str] = None,
        resource: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.resource = resource

    def add_context(self, operation: str, resource: Optional[str] = None) -> None:
        """Record where the error surfaced unless already recorded."""
        if self.operation is None:
            self.operation = operation
            self.resource = resource

    def __str__(self) -> str:
        if self.operation is None:
            return self.message
        if self.resource is None:
            return f"{self.operation}: {self.message}"
        return f"{self.operation} {self.resource}: {self.message}"


class NsotTransportError(NsotError):
    """Raised when the server could not be reached or the connection failed."""


class NsotAuthError(NsotError):
    """Raised when authentication or token retrieval fails.

    ``reason`` is one of ``"unexpected_status"``, ``"decode"``,
    ``"rejected"`` or ``"malformed"``.
    """

    def __init__(
        self,
        message: str,
        *,
        reason: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs,
    ) -> None:
        super().__init__(message, **kwargs)
        self.reason = reason
        self.status_code = status_code


class NsotBuildError(NsotError):
    """Raised when an outgoing request cannot be prepared."""


class NsotAuthBuildError(NsotBuildError, NsotAuthError):
    """Raised when a request cannot be built because authentication failed."""


class NsotAPIError(NsotError):
    """Base for failures reported by the API after a successful round trip."""


class NsotHTTPError(NsotAPIError):
    """Raised when the HTTP status is not one of 200, 201 or 204."""

    def __init__(self, message: str, *, status_code: int = 0, reason: str = "", **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.status_code = status_code
        self.reason = reason


class NsotResponseStatusError(NsotAPIError):
    """Raised when the response envelope carries a status other than ``"ok"``."""

    def __init__(self, message: str, *, api_status: Optional[str] = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.api_status = api_status


class NsotDecodeError(NsotError):
    """Raised when a response body is unreadable, not JSON or missing fields."""


class NsotNotFoundError(NsotError):
    """Raised when a lookup by name or CIDR matches no resource."""

    def __init__(self, message: str, *, query: Optional[str] = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.query = query
