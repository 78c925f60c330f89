"""Presentation layer: routers and dependency wiring."""

from assetverse.api.router import api_router

__all__ = ["api_router"]
