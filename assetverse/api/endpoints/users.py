"""User API: signup, HR account directory and self-service profile."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from assetverse.api.dependencies import CurrentUser, HRUser, get_user_service
from assetverse.application.dtos import CreateUserCommand, UpdateProfileCommand
from assetverse.application.use_cases import UserService
from assetverse.core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from assetverse.core.limiter import limit_signup, limit_writes
from assetverse.domain.enums import UserRole
from assetverse.schemas.user import UserCreateRequest, UserResponse, UserUpdateRequest

router = APIRouter()

UserServiceDep = Annotated[UserService, Depends(get_user_service)]


@router.post("", response_model=UserResponse, status_code=201)
@limit_signup
async def create_user(
    request: Request,
    body: UserCreateRequest,
    user_service: UserServiceDep,
) -> UserResponse:
    """Register an HR or employee account (public)."""
    user = await user_service.create_user(
        CreateUserCommand(
            email=body.email,
            name=body.name,
            role=body.role,
            company_name=body.company_name,
            company_logo=body.company_logo,
            profile_image=body.profile_image,
            date_of_birth=body.date_of_birth,
        )
    )
    return UserResponse.from_entity(user)


@router.get("", response_model=list[UserResponse])
async def list_users(
    current_user: HRUser,
    user_service: UserServiceDep,
    email: str | None = None,
    role: UserRole | None = None,
    search: str | None = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_LIMIT)] = DEFAULT_PAGE_LIMIT,
) -> list[UserResponse]:
    """Browse accounts (HR). ``email`` looks up a single account."""
    users = await user_service.list_users(
        current_user, email=email, role=role, search=search, skip=skip, limit=limit
    )
    return [UserResponse.from_entity(u) for u in users]


@router.get("/{email}", response_model=UserResponse)
async def get_user(email: str, current_user: CurrentUser, user_service: UserServiceDep) -> UserResponse:
    """Return the caller's own profile."""
    return UserResponse.from_entity(await user_service.get_profile(current_user, email))


@router.put("/{email}", response_model=UserResponse)
@limit_writes
async def update_user(
    request: Request,
    email: str,
    body: UserUpdateRequest,
    current_user: CurrentUser,
    user_service: UserServiceDep,
) -> UserResponse:
    """Edit the caller's own profile."""
    user = await user_service.update_profile(
        current_user,
        email,
        UpdateProfileCommand(
            name=body.name,
            profile_image=body.profile_image,
            date_of_birth=body.date_of_birth,
            company_logo=body.company_logo,
        ),
    )
    return UserResponse.from_entity(user)
