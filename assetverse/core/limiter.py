"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Limit strings live here only.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from assetverse.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)

# Single source of truth for rate limit strings and decorators.
AUTH_LIMIT = "10/minute"
SIGNUP_LIMIT = "10/minute"
WRITE_ENDPOINT_LIMIT = "120/minute"

limit_auth = limiter.limit(AUTH_LIMIT)
limit_signup = limiter.limit(SIGNUP_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)


def configure_limiter() -> Limiter:
    """Apply settings.rate_limit_enabled to the shared limiter and return it."""
    limiter.enabled = get_settings().rate_limit_enabled
    return limiter
