"""Request-scoped context (request ID and acting account) using contextvars.

Set by RequestIDMiddleware and by the auth dependency; read by the logging
filter so every log line of a request carries the same request ID and actor.
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_actor_email: ContextVar[str | None] = ContextVar("actor_email", default=None)


def bind_request_id(request_id: str) -> Token:
    """Set the request ID for the current task. Pass the token to reset_request_id."""
    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _request_id.reset(token)


def get_request_id() -> str | None:
    return _request_id.get()


def set_actor_email(email: str | None) -> None:
    """Record the authenticated account for the rest of the request."""
    _actor_email.set(email)


def get_actor_email() -> str | None:
    return _actor_email.get()
