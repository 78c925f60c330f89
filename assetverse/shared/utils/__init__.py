"""Shared utilities: datetime, generators."""

from assetverse.shared.utils.datetime import ensure_utc, utc_now
from assetverse.shared.utils.generators import generate_cuid, key_id

__all__ = [
    "ensure_utc",
    "generate_cuid",
    "key_id",
    "utc_now",
]
