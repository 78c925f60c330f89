"""Bearer tokens for AssetVerse accounts (python-jose, HS256 by default).

A token carries the account email (``sub`` and ``email``) and its role at
issue time. The role claim is informational: every request reloads the
account, so role changes and deletions take effect immediately.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, cast

from jose import ExpiredSignatureError, JWTError, jwt

from assetverse.core.config import get_settings
from assetverse.shared.utils.datetime import utc_now


@dataclass(frozen=True)
class TokenClaims:
    """Verified claims of an access token."""

    email: str
    role: str | None = None


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Sign ``data`` plus an ``exp`` claim.

    Args:
        data: Claims to encode.
        expires_delta: Optional TTL; else settings.access_token_expire_minutes.
    """
    settings = get_settings()
    claims = data.copy()
    claims["exp"] = utc_now() + (
        expires_delta
        if expires_delta is not None
        else timedelta(minutes=settings.access_token_expire_minutes)
    )
    return cast(
        str,
        jwt.encode(claims, settings.secret_key.get_secret_value(), algorithm=settings.algorithm),
    )


def issue_user_token(email: str, role: str) -> str:
    """Token for a registered account."""
    return create_access_token({"sub": email, "email": email, "role": role})


def verify_token(token: str) -> TokenClaims:
    """Check signature and expiry and return the account claims.

    Raises:
        ValueError: If the token is invalid, expired, or has no subject.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except ExpiredSignatureError as e:
        raise ValueError("Token has expired") from e
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    email = payload.get("email") or payload.get("sub")
    if not email:
        raise ValueError("Token has no subject")
    return TokenClaims(email=str(email).strip().lower(), role=payload.get("role"))
