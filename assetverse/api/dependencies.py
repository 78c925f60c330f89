"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the document store, the payment gateway, the
authenticated user and the use-case services. The store and gateway are built
once in the lifespan and read from app.state here; tests override
get_document_store and get_payment_gateway via app.dependency_overrides.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from assetverse.application.interfaces import IDocumentStore, IPaymentGateway
from assetverse.application.services.access_policy import AccessPolicy
from assetverse.application.use_cases import (
    AffiliationService,
    AssetRequestService,
    AssetService,
    AssignmentService,
    PackageService,
    PaymentService,
    UserService,
)
from assetverse.core.config import get_settings
from assetverse.domain.entities import UserEntity
from assetverse.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    PaymentProviderUnavailableException,
)
from assetverse.infrastructure.security.jwt import verify_token
from assetverse.shared.context import set_actor_email

_http_bearer = HTTPBearer(auto_error=False)


def get_document_store(request: Request) -> IDocumentStore:
    """Document store built at startup (Firestore or in-memory)."""
    store = getattr(request.app.state, "document_store", None)
    if store is None:
        raise RuntimeError("Document store is not initialized")
    return store


def get_payment_gateway(request: Request) -> IPaymentGateway:
    """Payment gateway built at startup; 503 when absent."""
    gateway = getattr(request.app.state, "payment_gateway", None)
    if gateway is None:
        raise PaymentProviderUnavailableException()
    return gateway


def get_access_policy() -> AccessPolicy:
    return AccessPolicy()


StoreDep = Annotated[IDocumentStore, Depends(get_document_store)]
PolicyDep = Annotated[AccessPolicy, Depends(get_access_policy)]


def get_user_service(store: StoreDep, policy: PolicyDep) -> UserService:
    settings = get_settings()
    return UserService(
        store,
        policy,
        base_package_limit=settings.base_package_limit,
        max_attempts=settings.store_write_max_attempts,
    )


def get_asset_service(store: StoreDep, policy: PolicyDep) -> AssetService:
    return AssetService(store, policy, max_attempts=get_settings().store_write_max_attempts)


def get_request_service(store: StoreDep, policy: PolicyDep) -> AssetRequestService:
    return AssetRequestService(
        store, policy, max_attempts=get_settings().store_write_max_attempts
    )


def get_assignment_service(store: StoreDep, policy: PolicyDep) -> AssignmentService:
    return AssignmentService(
        store, policy, max_attempts=get_settings().store_write_max_attempts
    )


def get_affiliation_service(store: StoreDep, policy: PolicyDep) -> AffiliationService:
    return AffiliationService(
        store, policy, max_attempts=get_settings().store_write_max_attempts
    )


def get_package_service(store: StoreDep) -> PackageService:
    return PackageService(store)


def get_payment_service(
    store: StoreDep,
    gateway: Annotated[IPaymentGateway, Depends(get_payment_gateway)],
    policy: PolicyDep,
) -> PaymentService:
    settings = get_settings()
    return PaymentService(
        store,
        gateway,
        policy,
        base_package_limit=settings.base_package_limit,
        currency=settings.payment_currency,
        client_url=settings.client_url,
        max_attempts=settings.store_write_max_attempts,
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> UserEntity:
    """Return the account behind the bearer token; 401 if missing, invalid or unknown."""
    if credentials is None:
        raise AuthenticationException("Missing bearer token")
    try:
        claims = verify_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException(str(e)) from e
    user = await user_service.find_by_email(claims.email)
    if user is None:
        raise AuthenticationException("Account no longer exists")
    set_actor_email(user.email)
    return user


async def require_hr(
    user: Annotated[UserEntity, Depends(get_current_user)],
) -> UserEntity:
    """Return the current user if the stored account is HR; else 403."""
    if not user.is_hr():
        raise AuthorizationException("HR access required")
    return user


CurrentUser = Annotated[UserEntity, Depends(get_current_user)]
HRUser = Annotated[UserEntity, Depends(require_hr)]
