"""Search and pagination helpers for list operations (applied after store queries)."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TypeVar

from assetverse.core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT

T = TypeVar("T")


def matches_search(search: str | None, *values: str | None) -> bool:
    """Case-insensitive substring match against any of ``values``; empty search matches all."""
    if not search or not search.strip():
        return True
    needle = search.strip().casefold()
    return any(v and needle in v.casefold() for v in values)


def paginate(items: Sequence[T] | Iterable[T], skip: int = 0, limit: int = DEFAULT_PAGE_LIMIT) -> list[T]:
    """Return ``items[skip:skip+limit]`` with skip >= 0 and limit clamped to MAX_PAGE_LIMIT."""
    skip = max(0, skip)
    limit = max(0, min(limit, MAX_PAGE_LIMIT))
    return list(items)[skip : skip + limit]
