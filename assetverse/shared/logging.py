"""Logging configuration for the application.

Every record gets ``request_id`` and ``actor`` attributes from the request
context ("-" outside a request), so one request can be followed across
modules.
"""

import logging
import sys

from assetverse.core.config import get_settings
from assetverse.shared.context import get_actor_email, get_request_id

LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s %(actor)s] %(message)s"
)

# Client libraries that log every HTTP call at INFO.
_QUIET_LOGGERS = ("httpx", "httpcore", "google.auth")


class RequestContextFilter(logging.Filter):
    """Attach the current request ID and actor email to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        record.actor = get_actor_email() or "-"
        return True


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO.
    Output goes to stdout.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    logging.basicConfig(level=log_level, format=LOG_FORMAT, handlers=[handler], force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name."""
    return logging.getLogger(name)
