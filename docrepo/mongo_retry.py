"""Backoff retries for store reads and repository procedure calls."""

import logging
import time
from functools import wraps
from typing import Any

import pymongo.errors

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS = (pymongo.errors.ConnectionFailure, pymongo.errors.ServerSelectionTimeoutError)


def mongo_retry(
    max_attempts: int = 3,
    delay_secs: float = 0.5,
    backoff_multiplier: float = 2.0,
    exceptions: tuple = TRANSIENT_ERRORS,
):
    """Re-invoke the decorated callable while it raises one of ``exceptions``.

    The delay before attempt ``n + 1`` is ``delay_secs * backoff_multiplier ** (n - 1)``.
    The last failure propagates unchanged.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            delay = delay_secs
            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as exc:
                    if attempt == max_attempts:
                        logger.error(f"{func.__name__} gave up after {attempt} attempts: {exc}")
                        raise
                    logger.warning(f"{func.__name__} attempt {attempt}/{max_attempts} failed ({exc}), next in {delay}s")
                    time.sleep(delay)
                    delay *= backoff_multiplier

        return wrapper

    return decorator


class MongoRetryWrapper:
    """Collection proxy whose read methods go through ``mongo_retry``.

    Writes are forwarded untouched; replaying them could apply a change twice.
    """

    READ_OPERATIONS = frozenset({"find", "find_one", "count_documents"})

    def __init__(self, collection, max_attempts: int = 3, delay_secs: float = 0.5):
        self._collection = collection
        self._max_attempts = max_attempts
        self._delay_secs = delay_secs

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._collection, name)
        if name in self.READ_OPERATIONS:
            return mongo_retry(max_attempts=self._max_attempts, delay_secs=self._delay_secs)(attr)
        return attr
