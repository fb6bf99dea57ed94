"""Custom exception hierarchy for drivetotal.

The aggregation engine never raises; these errors belong to the calling
layer (configuration, credential checks, record lookups, rate limiting and
imports).
"""

from __future__ import annotations


class DriveTotalError(Exception):
    """Base exception for all drivetotal errors."""


class DriveTotalConfigError(DriveTotalError):
    """Invalid or missing configuration."""


class DriveTotalAuthError(DriveTotalError):
    """Missing, malformed, expired or forged bearer token."""


class DriveTotalNotFoundError(DriveTotalError):
    """Requested record does not exist or belongs to another user."""

    def __init__(self, message: str, *, resource: str = "", record_id: str = "") -> None:
        self.resource = resource
        self.record_id = record_id
        super().__init__(message)


class DriveTotalRateLimitError(DriveTotalError):
    """Client exceeded its request budget for the current window.

    ``retry_after`` holds the number of seconds until the window resets.
    """

    def __init__(self, message: str, *, identifier: str = "", retry_after: float = 0.0) -> None:
        self.identifier = identifier
        self.retry_after = retry_after
        super().__init__(message)


class DriveTotalImportError(DriveTotalError):
    """A fuel log could not be read (missing file, no header row)."""
