"""
Profile validation and merge rules.
"""

from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from app.core.security import utcnow
from app.schemas import DeveloperInfo, Profile, RecruiterInfo, UserRole
from app.schemas.profile import IMMUTABLE_PROFILE_FIELDS

# Written by assessment grading and reputation scoring only
SERVER_OWNED_INFO_FIELDS = {"level", "reputationScore", "assessments"}


def _by_alias(model: type[BaseModel], data: dict[str, Any]) -> dict[str, Any]:
    """Rename snake_case field names to the camelCase keys stored profiles use."""
    aliases = {name: field.alias or name for name, field in model.model_fields.items()}
    return {aliases.get(key, key): value for key, value in data.items()}


def _client_fields(model: type[BaseModel], data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in _by_alias(model, data).items() if key not in SERVER_OWNED_INFO_FIELDS}


def validate_developer_info(data: Any) -> Optional[DeveloperInfo]:
    """Return the parsed developer payload, or None if the shape is wrong."""
    if not isinstance(data, dict):
        return None
    try:
        return DeveloperInfo.model_validate(_client_fields(DeveloperInfo, data))
    except ValidationError:
        return None


def validate_recruiter_info(data: Any) -> Optional[RecruiterInfo]:
    """Return the parsed recruiter payload, or None if the shape is wrong."""
    if not isinstance(data, dict):
        return None
    try:
        return RecruiterInfo.model_validate(_client_fields(RecruiterInfo, data))
    except ValidationError:
        return None


def role_info_key(role: UserRole) -> str:
    return "developerInfo" if role == UserRole.DEVELOPER else "recruiterInfo"


def merge_profile(profile: Profile, updates: dict[str, Any]) -> Profile:
    """
    Apply a partial update.

    Top-level keys replace stored values; the sub-object for the profile's
    role is merged one level deeper so untouched nested fields survive.
    Identity fields, the other role's sub-object and the server-owned
    level/reputation/assessment history are ignored.

    Raises:
        ValidationError: if the merged profile is not a valid Profile
    """
    current = profile.to_json()
    updates = _by_alias(Profile, updates)
    info_key = role_info_key(profile.role)
    other_key = "recruiterInfo" if info_key == "developerInfo" else "developerInfo"
    info_model = DeveloperInfo if profile.role == UserRole.DEVELOPER else RecruiterInfo

    merged = dict(current)
    for key, value in updates.items():
        if key in IMMUTABLE_PROFILE_FIELDS or key in (info_key, other_key):
            continue
        merged[key] = value

    nested = updates.get(info_key)
    if isinstance(nested, dict):
        merged[info_key] = {**(current.get(info_key) or {}), **_client_fields(info_model, nested)}
    elif nested is not None:
        # let validation reject non-object payloads
        merged[info_key] = nested

    merged["lastActive"] = utcnow().isoformat()
    return Profile.model_validate(merged)
