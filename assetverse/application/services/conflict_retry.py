"""Bounded re-read-and-retry for optimistic commits."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeVar

from assetverse.domain.exceptions import WriteConflictException
from assetverse.shared.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


async def retry_on_conflict(
    operation: Callable[[], Awaitable[T]],
    *,
    attempts: int,
    label: str,
) -> T:
    """Run ``operation`` until its commit succeeds, at most ``attempts`` times.

    ``operation`` must re-read every document it writes, so each attempt
    validates against fresh state. Domain errors raised on a re-read (e.g. a
    request that another writer already approved) propagate immediately.

    Raises:
        WriteConflictException: If every attempt lost to a concurrent writer.
    """
    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except WriteConflictException:
            if attempt >= attempts:
                logger.warning("%s: write conflict, giving up after %s attempts", label, attempts)
                raise
            logger.warning("%s: write conflict (attempt %s/%s), retrying", label, attempt, attempts)
    raise WriteConflictException()
