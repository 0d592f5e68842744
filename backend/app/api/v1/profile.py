"""
Profile API endpoints for the authenticated account.

One profile per account. The role is taken from the account, and only the
sub-object for that role (developerInfo / recruiterInfo) is stored.
"""

from typing import Any, Literal, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import BaseModel, ValidationError

from app.api.deps import get_current_account, get_profile_repository
from app.core.logging import get_logger
from app.repositories import DuplicateKeyError, ProfileRepository
from app.schemas import Account, Profile, UserRole
from app.services import merge_profile, validate_developer_info, validate_recruiter_info

router = APIRouter()
logger = get_logger("profile", "PROFILE")


# ============== Pydantic Schemas ==============


class ProfileCreateRequest(BaseModel):
    """Schema for profile creation. Presence checks happen in the handler."""

    firstName: Optional[str] = None
    lastName: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    dateOfBirth: Optional[str] = None
    gender: Optional[Literal["male", "female", "other"]] = None
    country: Optional[str] = None
    province: Optional[str] = None
    district: Optional[str] = None
    city: Optional[str] = None
    title: Optional[str] = None
    descriptions: Optional[str] = None
    profilePic: Optional[str] = None
    coverPic: Optional[str] = None
    developerInfo: Optional[dict[str, Any]] = None
    recruiterInfo: Optional[dict[str, Any]] = None


# ============== Helper Functions ==============


def _present(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")


# ============== API Endpoints ==============


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_profile(
    request: ProfileCreateRequest,
    current_account: Account = Depends(get_current_account),
    profiles: ProfileRepository = Depends(get_profile_repository),
):
    """
    Create the caller's profile.

    Rejects a second profile for the same account or the same email.
    """
    if not all(_present(value) for value in (request.firstName, request.lastName, request.email)):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields",
        )

    developer_info = None
    recruiter_info = None

    if current_account.role == UserRole.DEVELOPER:
        developer_info = validate_developer_info(request.developerInfo)
        if developer_info is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid or missing developer information",
            )
    else:
        recruiter_info = validate_recruiter_info(request.recruiterInfo)
        if recruiter_info is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid or missing recruiter information",
            )

    fields = request.model_dump(exclude={"developerInfo", "recruiterInfo"})
    fields["email"] = request.email.strip().lower()

    profile = Profile.model_validate({
        **fields,
        "userId": current_account.id,
        "role": current_account.role,
    })
    profile.developer_info = developer_info
    profile.recruiter_info = recruiter_info

    if not profiles.insert_if_absent(profile):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Profile already exists",
        )

    logger.info("Profile %s created for user %s", profile.id, current_account.id)

    return {
        "success": True,
        "message": "Profile created successfully",
        "profile": profile.to_json(),
    }


@router.get("/me")
async def get_my_profile(
    current_account: Account = Depends(get_current_account),
    profiles: ProfileRepository = Depends(get_profile_repository),
):
    """Return the caller's own profile, private fields included."""
    profile = profiles.get_by_user_id(current_account.id)
    if profile is None:
        raise _not_found()

    return {"success": True, "profile": profile.to_json()}


@router.put("/update")
async def update_profile(
    updates: dict[str, Any] = Body(...),
    current_account: Account = Depends(get_current_account),
    profiles: ProfileRepository = Depends(get_profile_repository),
):
    """
    Partially update the caller's profile.

    Top-level fields are replaced; developerInfo / recruiterInfo are merged
    so fields not sent keep their stored values.
    """
    profile = profiles.get_by_user_id(current_account.id)
    if profile is None:
        raise _not_found()

    if isinstance(updates.get("email"), str):
        updates["email"] = updates["email"].strip().lower()

    try:
        updated = merge_profile(profile, updates)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": "Invalid profile data",
                "errors": e.errors(include_url=False, include_context=False, include_input=False),
            },
        )

    try:
        profiles.save(updated)
    except DuplicateKeyError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already exists",
        )

    logger.info("Profile %s updated (%s)", updated.id, ", ".join(sorted(updates)) or "no fields")

    return {
        "success": True,
        "message": "Profile updated successfully",
        "profile": updated.to_json(),
    }
