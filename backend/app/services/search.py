"""
Public profile search and lookup.

Filters run as independent passes over the full profile list (implicit AND).
Results are projected to a public shape so contact data never leaves the
server through these endpoints.
"""

import math
from dataclasses import dataclass
from typing import Optional

from app.schemas import Profile, UserRole


@dataclass
class SearchFilters:
    role: Optional[UserRole] = None
    name: Optional[str] = None
    location: Optional[str] = None
    skills: Optional[str] = None  # comma-separated
    experience_min: Optional[float] = None


@dataclass
class SearchPage:
    page: int
    limit: int
    total_profiles: int
    total_pages: int
    profiles: list[dict]


def _contains(value: Optional[str], needle: str) -> bool:
    return bool(value) and needle in value.lower()


def parse_skills(skills: str) -> set[str]:
    return {skill.strip().lower() for skill in skills.split(",") if skill.strip()}


def filter_profiles(profiles: list[Profile], filters: SearchFilters) -> list[Profile]:
    results = profiles

    if filters.role:
        results = [p for p in results if p.role == filters.role]

    if filters.location:
        location = filters.location.lower()
        results = [p for p in results if _contains(p.country, location) or _contains(p.city, location)]

    # Skill and experience filters only make sense for developers
    if filters.skills and filters.role == UserRole.DEVELOPER:
        wanted = parse_skills(filters.skills)
        results = [
            p for p in results
            if p.developer_info and any(skill.lower() in wanted for skill in p.developer_info.skills)
        ]

    if filters.experience_min is not None and filters.role == UserRole.DEVELOPER:
        results = [
            p for p in results
            if p.developer_info and p.developer_info.years_of_experience() >= filters.experience_min
        ]

    if filters.name:
        name = filters.name.lower()
        results = [p for p in results if _contains(p.first_name, name) or _contains(p.last_name, name)]

    return results


def project_search_result(profile: Profile) -> dict:
    """Reduced public shape used in search listings."""
    data = {
        "id": profile.id,
        "firstName": profile.first_name,
        "lastName": profile.last_name,
        "role": profile.role.value,
        "profilePic": profile.profile_pic,
        "country": profile.country,
        "city": profile.city,
        "title": profile.title,
    }

    if profile.role == UserRole.DEVELOPER:
        dev = profile.developer_info
        data["developerInfo"] = {
            "skills": dev.skills if dev else [],
            "experience": dev.years_of_experience() if dev else 0,
            "level": dev.level if dev else None,
            "reputationScore": dev.reputation_score if dev else None,
            "completedProjects": dev.completed_projects if dev else None,
            "githubProfile": dev.github_profile.to_json() if dev and dev.github_profile else None,
        }
    elif profile.role == UserRole.RECRUITER:
        rec = profile.recruiter_info
        data["recruiterInfo"] = {
            "company": rec.company if rec else None,
            "position": rec.position if rec else None,
            "industry": rec.industry if rec else None,
            "reputationScore": rec.reputation_score if rec else None,
        }

    return data


def search_profiles(profiles: list[Profile], filters: SearchFilters, page: int = 1, limit: int = 10) -> SearchPage:
    matched = filter_profiles(profiles, filters)
    start = (page - 1) * limit
    return SearchPage(
        page=page,
        limit=limit,
        total_profiles=len(matched),
        total_pages=math.ceil(len(matched) / limit),
        profiles=[project_search_result(p) for p in matched[start:start + limit]],
    )


# ============== Public Lookup ==============

PRIVATE_PROFILE_FIELDS = {"userId", "email", "phone", "dateOfBirth"}


def public_view(profile: Profile) -> dict:
    """Full profile minus private contact data."""
    data = profile.to_json(exclude_none=True)
    for field in PRIVATE_PROFILE_FIELDS:
        data.pop(field, None)
    return data


def find_by_public_name(profiles: list[Profile], name: str) -> Optional[Profile]:
    """
    Resolve a vanity name like "jane-doe" or "Jane Doe".

    Exact full-name matches (space or hyphen joined) win. Otherwise the
    first two hyphen-separated parts are compared to first and last name,
    so "mary-jane-smith" finds Mary Jane. A name without a hyphen is
    compared to first names only.
    """
    wanted = name.strip().lower()
    if not wanted:
        return None

    for profile in profiles:
        first, last = profile.first_name.lower(), profile.last_name.lower()
        if wanted in (f"{first} {last}", f"{first}-{last}"):
            return profile

    parts = wanted.split("-")
    first_name = parts[0]
    last_name = parts[1] if len(parts) > 1 else None

    for profile in profiles:
        if profile.first_name.lower() != first_name:
            continue
        if last_name is None or profile.last_name.lower() == last_name:
            return profile

    return None
