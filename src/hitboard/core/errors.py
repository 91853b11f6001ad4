"""Error taxonomy shared by the counter core and the API layer."""

from __future__ import annotations


class HitboardError(RuntimeError):
    """Base exception for all counter and ranking failures."""

    status_code: int = 500


class InvalidArgumentError(HitboardError):
    """Raised for malformed or missing ids, unknown kinds and oversized bodies."""

    status_code = 400


class UnauthorizedError(HitboardError):
    """Raised when an admin operation is attempted with a wrong token."""

    status_code = 401


class ConfigurationError(HitboardError):
    """Raised when no admin secret is configured at all.

    Kept apart from UnauthorizedError so operators can tell a missing
    deployment secret from a client sending the wrong one.
    """

    status_code = 401


class StorageUnavailableError(HitboardError):
    """Raised when the persistence layer fails.

    Nothing has been committed when this is raised, so callers may retry.
    """

    status_code = 503
    retryable = True
