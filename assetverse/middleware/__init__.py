"""ASGI middleware (raw ASGI callables)."""

from assetverse.middleware.request_id import RequestIDMiddleware
from assetverse.middleware.timeout import TimeoutMiddleware

__all__ = ["RequestIDMiddleware", "TimeoutMiddleware"]
