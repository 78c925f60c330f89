"""Auth API: issue a bearer token for a registered email."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from assetverse.api.dependencies import get_user_service
from assetverse.application.use_cases import UserService
from assetverse.core.limiter import limit_auth
from assetverse.infrastructure.security.jwt import issue_user_token
from assetverse.schemas.auth import TokenRequest, TokenResponse

router = APIRouter()


@router.post("/jwt", response_model=TokenResponse)
@limit_auth
async def issue_token(
    request: Request,
    body: TokenRequest,
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> TokenResponse:
    """Return a signed token for a known email (401 if the email is not registered)."""
    user = await user_service.authenticate(body.email)
    return TokenResponse(token=issue_user_token(user.email, user.role.value))
