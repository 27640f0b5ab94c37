"""Helpers shared by every repository store: ids, timestamps and transactions."""

import threading
import uuid
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Iterator

from logging_config import logger

_TICK = timedelta(microseconds=1)
_clock_lock = threading.Lock()
_last_timestamp = datetime.min.replace(tzinfo=timezone.utc)


def new_id() -> str:
    """Return a collision-free identifier for a new entity."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """
    Current UTC time, strictly increasing within the process.

    Two calls in the same clock tick still return distinct, ordered values,
    so creation order can be recovered from created_at.
    """
    global _last_timestamp
    with _clock_lock:
        now = datetime.now(timezone.utc)
        if now <= _last_timestamp:
            now = _last_timestamp + _TICK
        _last_timestamp = now
        return now


def advance_timestamp(previous: datetime) -> datetime:
    """Return a timestamp strictly later than ``previous``."""
    now = utcnow()
    if now <= previous:
        return previous + _TICK
    return now


@contextmanager
def transaction(session, operation_name: str) -> Iterator[None]:
    """
    Commit the work done inside the block, or roll it back and re-raise.

    The error is left for the caller to log; inside a request that is the
    application's 500 handler.

    Args:
        session: SQLAlchemy session the work runs on
        operation_name: Name of operation for logging purposes
    """
    try:
        yield
        session.commit()
    except Exception:
        session.rollback()
        logger.debug(f"Rolled back {operation_name}")
        raise
