"""Auth API schemas."""

from pydantic import EmailStr

from assetverse.schemas.common import CamelModel


class TokenRequest(CamelModel):
    """Request body for POST /jwt (known email; no password)."""

    email: EmailStr


class TokenResponse(CamelModel):
    token: str
