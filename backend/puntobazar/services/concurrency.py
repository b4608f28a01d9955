# Overview: Row locking and write-conflict retry used around storage transactions.

from __future__ import annotations

import logging
import time

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm.exc import StaleDataError

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (OperationalError, StaleDataError)


def lock_for_update(query):
    """SELECT ... FOR UPDATE. A no-op on SQLite, which locks the whole file on write."""
    return query.with_for_update()


def run_with_retry(func, *, attempts: int = 3, backoff_base: float = 0.1):
    """
    Call ``func`` until it succeeds or ``attempts`` is exhausted.

    Only lock/deadlock errors are retried. ``func`` must open its own
    storage transaction so each attempt starts from a rolled back session.
    """
    attempt = 0
    while True:
        try:
            return func()
        except RETRYABLE_ERRORS as exc:
            attempt += 1
            if attempt >= attempts:
                raise
            delay = backoff_base * (2 ** (attempt - 1))
            logger.warning("Write conflict (%s), retry %d in %.2fs", type(exc).__name__, attempt, delay)
            time.sleep(delay)
