"""Request-scoped transaction handling."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from trip_nick.core.settings import settings
from trip_nick.services.errors import InternalError, TripNickError

logger = logging.getLogger(__name__)


@contextmanager
def unit_of_work(db: Session, action: str) -> Iterator[Session]:
    """Run a block of reads and writes as one transaction.

    Commits when the block finishes. A domain error rolls everything back and
    propagates unchanged; a database error rolls back, is logged in full and
    surfaces as :class:`InternalError`. No retries are attempted.

    Args:
        db: Session bound to the current request.
        action: Short verb phrase used in log lines and the client message,
            e.g. ``"delete post"``.
    """
    try:
        yield db
        db.commit()
    except TripNickError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Transaction rolled back while trying to %s", action)
        extra = {"details": str(exc)} if settings.debug else {}
        raise InternalError(f"Failed to {action}. Please try again.", **extra) from exc
