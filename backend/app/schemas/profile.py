from datetime import datetime
from typing import Annotated, Any, Literal, Optional

from pydantic import ConfigDict, Field, StringConstraints

from app.core.security import utcnow
from app.schemas.account import UserRole, new_id
from app.schemas.base import CamelModel

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


# ============== Developer ==============


class RepositoryStats(CamelModel):
    total: Optional[int] = None
    public_repos: Optional[int] = None


class PullRequestStats(CamelModel):
    merged: Optional[int] = None


class ContributionStats(CamelModel):
    total_commits: Optional[int] = None
    pull_requests: Optional[PullRequestStats] = None


class GitHubProfile(CamelModel):
    """GitHub-derived metadata attached to a developer profile."""

    model_config = ConfigDict(extra="allow")

    username: Optional[str] = None
    html_url: str = Field(alias="html_url")
    repositories: Optional[RepositoryStats] = None
    contributions: Optional[ContributionStats] = None
    languages: Optional[list[str]] = None


class CurrentRole(CamelModel):
    title: Optional[str] = None
    company: Optional[str] = None


class WorkExperience(CamelModel):
    """LinkedIn-derived work history."""

    current_role: Optional[CurrentRole] = None
    linkedin_link: str = Field(alias="linkedin_link")
    total_years_of_experience: Optional[float] = None
    skills: Optional[list[str]] = None


class DeveloperInfo(CamelModel):
    skills: list[str]
    github_profile: Optional[GitHubProfile] = None
    work_experience: Optional[WorkExperience] = None
    portfolio_url: Optional[str] = None
    bio: Optional[str] = None
    reputation_score: float = 0
    level: str = "Beginner"
    education: list[str] = Field(default_factory=list)
    experience: Optional[float] = None
    completed_projects: Optional[int] = None
    assessments: list[dict[str, Any]] = Field(default_factory=list)

    def years_of_experience(self) -> float:
        """Explicit experience wins, otherwise LinkedIn's total."""
        if self.experience is not None:
            return self.experience
        if self.work_experience and self.work_experience.total_years_of_experience is not None:
            return self.work_experience.total_years_of_experience
        return 0


# ============== Recruiter ==============


class RecruiterInfo(CamelModel):
    company: str
    position: str
    company_website: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    reputation_score: float = 50
    total_hires: int = 0
    active_job_postings: int = 0


# ============== Profile ==============


class Profile(CamelModel):
    """Public/private profile record, one per account."""

    id: str = Field(default_factory=new_id)
    user_id: str
    first_name: RequiredText
    last_name: RequiredText
    email: RequiredText
    phone: Optional[str] = None
    date_of_birth: Optional[str] = None
    gender: Optional[Literal["male", "female", "other"]] = None
    country: Optional[str] = None
    province: Optional[str] = None
    district: Optional[str] = None
    city: Optional[str] = None
    title: Optional[str] = None
    descriptions: Optional[str] = None
    profile_pic: Optional[str] = None
    cover_pic: Optional[str] = None
    role: UserRole
    developer_info: Optional[DeveloperInfo] = None
    recruiter_info: Optional[RecruiterInfo] = None
    joined_date: datetime = Field(default_factory=utcnow)
    last_active: datetime = Field(default_factory=utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


# Fields a client may never overwrite through an update
IMMUTABLE_PROFILE_FIELDS = {"id", "userId", "role", "joinedDate", "lastActive"}
