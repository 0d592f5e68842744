from app.schemas.account import Account, UserRole
from app.schemas.profile import (
    DeveloperInfo,
    GitHubProfile,
    Profile,
    RecruiterInfo,
    WorkExperience,
)

__all__ = [
    "Account",
    "UserRole",
    "DeveloperInfo",
    "GitHubProfile",
    "Profile",
    "RecruiterInfo",
    "WorkExperience",
]
