"""
API Router Aggregator.

Combines all v1 API routers into a single router for the main app.
"""

from fastapi import APIRouter

from app.api.v1 import assessment, auth, oauth, profile, profiles

api_router = APIRouter()

# Include all v1 routers with their prefixes and tags
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
)

api_router.include_router(
    profile.router,
    prefix="/profile",
    tags=["Profile"],
)

api_router.include_router(
    profiles.router,
    prefix="/profiles",
    tags=["Public Profiles"],
)

api_router.include_router(
    assessment.router,
    prefix="/assessment",
    tags=["Assessment"],
)

api_router.include_router(
    oauth.router,
    tags=["OAuth"],
)
