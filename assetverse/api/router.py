"""API router aggregation.

Includes all endpoint modules with their prefixes and tags. Paths are the
public paths relative to settings.api_prefix.
"""

from fastapi import APIRouter

from assetverse.api.endpoints import (
    affiliations,
    assets,
    assignments,
    auth,
    health,
    payments,
    requests,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(assets.router, tags=["assets"])
api_router.include_router(requests.router, prefix="/requests", tags=["requests"])
api_router.include_router(assignments.router, tags=["assignments"])
api_router.include_router(affiliations.router, prefix="/affiliations", tags=["affiliations"])
api_router.include_router(payments.router, tags=["payments"])
