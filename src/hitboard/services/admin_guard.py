"""Shared-secret guard for destructive admin operations."""

from __future__ import annotations

import hmac
import logging

from hitboard.core.errors import ConfigurationError, UnauthorizedError

logger = logging.getLogger(__name__)

SECRET_MISSING_MESSAGE = "ADMIN_TOKEN secret missing"
UNAUTHORIZED_MESSAGE = "Unauthorized"


class AdminGuard:
    """Compare presented tokens against the configured admin secret."""

    def __init__(self, secret: str | None) -> None:
        self._secret = secret or ""

    @property
    def configured(self) -> bool:
        """Return True when a secret is available to compare against."""
        return bool(self._secret)

    def authorize(self, presented: str | None) -> bool:
        """Return True iff a secret is configured and ``presented`` matches it exactly."""
        if not self._secret or not presented:
            return False
        return hmac.compare_digest(presented.encode("utf-8"), self._secret.encode("utf-8"))

    def require(self, presented: str | None) -> None:
        """Raise unless ``presented`` authorizes an admin operation.

        Raises:
            ConfigurationError: If no admin secret is configured.
            UnauthorizedError: If the token is missing or wrong.
        """
        if not self.configured:
            logger.warning("Admin operation refused: no admin secret configured")
            raise ConfigurationError(SECRET_MISSING_MESSAGE)
        if not self.authorize(presented):
            logger.info("Admin operation refused: bad token")
            raise UnauthorizedError(UNAUTHORIZED_MESSAGE)
