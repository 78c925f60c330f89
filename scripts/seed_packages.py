"""Seed the default package catalog (Basic, Standard, Premium).

Packages that already exist are left untouched, so the script can be re-run.

Usage:
    python -m scripts.seed_packages

Requires: SECRET_KEY and Firestore credentials (or DATABASE_BACKEND=memory,
which only seeds a throwaway store).
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from assetverse.application.use_cases import PackageService
from assetverse.core.config import get_settings
from assetverse.core.lifespan import build_document_store
from assetverse.shared.logging import setup_logging


def _load_env() -> None:
    """Load .env from project root so get_settings() sees credentials when run as script."""
    load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=True)


async def main() -> int:
    _load_env()
    get_settings.cache_clear()
    settings = get_settings()
    setup_logging()
    store = build_document_store(settings)
    try:
        created = await PackageService(store).seed_default_packages()
    finally:
        await store.aclose()
    print(f"Packages created: {created}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
