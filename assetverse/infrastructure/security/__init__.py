"""Security: JWT issue and verification."""

from assetverse.infrastructure.security.jwt import (
    TokenClaims,
    create_access_token,
    issue_user_token,
    verify_token,
)

__all__ = [
    "TokenClaims",
    "create_access_token",
    "issue_user_token",
    "verify_token",
]
