"""Transaction scopes that translate storage failures into core errors."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hitboard.core.errors import StorageUnavailableError

logger = logging.getLogger(__name__)


@contextmanager
def atomic(session: Session) -> Iterator[Session]:
    """Run a block as one transaction: commit on success, roll back on any failure.

    Cancellation (``KeyboardInterrupt``, ``asyncio.CancelledError``) is treated
    like any other failure so a partially applied write never becomes visible.

    Raises:
        StorageUnavailableError: If the database rejects any statement or the commit.
    """
    try:
        yield session
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.warning("Rolled back counter transaction: %s", exc, exc_info=True)
        raise StorageUnavailableError("Counter storage unavailable") from exc
    except BaseException:
        session.rollback()
        raise


@contextmanager
def guarded_read(session: Session) -> Iterator[Session]:
    """Convert storage failures during a read into StorageUnavailableError."""
    try:
        yield session
    except SQLAlchemyError as exc:
        session.rollback()
        logger.warning("Counter read failed: %s", exc, exc_info=True)
        raise StorageUnavailableError("Counter storage unavailable") from exc
