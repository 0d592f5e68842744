"""
Public profile endpoints (no session required).
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import get_profile_repository
from app.core.logging import get_logger
from app.repositories import ProfileRepository
from app.schemas import UserRole
from app.services import SearchFilters, find_by_public_name, public_view, search_profiles

router = APIRouter()
logger = get_logger("profiles", "SEARCH")


@router.get("/search")
async def search(
    role: Optional[UserRole] = None,
    name: Optional[str] = None,
    location: Optional[str] = None,
    skills: Optional[str] = Query(None, description="Comma-separated, developers only"),
    experienceMin: Optional[float] = Query(None, ge=0, description="Years, developers only"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    profiles: ProfileRepository = Depends(get_profile_repository),
):
    """
    Search public profiles.

    Every given filter must match. Skills and experienceMin only apply
    when role=developer.
    """
    filters = SearchFilters(
        role=role,
        name=name.strip() if name else None,
        location=location.strip() if location else None,
        skills=skills,
        experience_min=experienceMin,
    )
    result = search_profiles(profiles.list_all(), filters, page=page, limit=limit)

    logger.info(
        "Search role=%s name=%s location=%s skills=%s experienceMin=%s -> %d match(es)",
        role.value if role else None, name, location, skills, experienceMin, result.total_profiles,
    )

    return {
        "success": True,
        "page": result.page,
        "limit": result.limit,
        "totalProfiles": result.total_profiles,
        "totalPages": result.total_pages,
        "profiles": result.profiles,
    }


@router.get("/public/{name}")
async def get_public_profile(
    name: str,
    profiles: ProfileRepository = Depends(get_profile_repository),
):
    """Look up a profile by vanity name ("jane-doe" or "Jane Doe")."""
    profile = find_by_public_name(profiles.list_all(), name)
    if profile is None:
        logger.info("No public profile for %r", name)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")

    return {"success": True, "profile": public_view(profile)}
