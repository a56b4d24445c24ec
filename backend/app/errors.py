"""Exceptions raised by the service layer and the access policy."""

from __future__ import annotations


class SalesTrackerError(RuntimeError):
    """Base class for errors reported to callers of the sales tracker."""


class RecordValidationError(SalesTrackerError):
    """Raised when input breaks a field rule; nothing is written."""


class RecordNotFoundError(SalesTrackerError):
    """Raised when an update, read or delete targets an unknown identifier."""


class AuthorizationError(SalesTrackerError):
    """Raised when the access policy denies an operation."""
