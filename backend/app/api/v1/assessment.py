"""
Assessment API endpoints.

AI-generated programming assessments, grading and reputation scoring.
Results are written back to the caller's developer profile when one exists.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import Field

from app.api.deps import get_current_account, get_generative_client, get_profile_repository
from app.core.logging import get_logger
from app.repositories import ProfileRepository
from app.schemas import Account, UserRole
from app.schemas.assessment import UserAnswer
from app.schemas.base import CamelModel
from app.services import (
    GenerationError,
    GenerativeClient,
    ParseError,
    calculate_reputation_score,
    evaluate_assessment,
    generate_assessment,
    generate_technologies,
)

router = APIRouter()
logger = get_logger("assessment_api", "ASSESSMENT")


# ============== Pydantic Schemas ==============


class TechnologiesRequest(CamelModel):
    title: str


class GenerateRequest(CamelModel):
    category: str
    title: str
    technologies: list[str] = Field(default_factory=list)


class EvaluateRequest(CamelModel):
    category: str
    title: str
    assessment_id: str
    answers: list[UserAnswer]
    cheating_detected: bool = False
    technologies: list[str] = Field(default_factory=list)


class ReputationRequest(CamelModel):
    assessment_results: Optional[dict[str, Any]] = None
    github_data: Optional[dict[str, Any]] = None
    linkedin_data: Optional[dict[str, Any]] = None


# ============== Helper Functions ==============


def _model_failure(action: str, e: Exception) -> HTTPException:
    logger.error("%s failed: %s", action, e)
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Failed to {action}",
    )


# ============== API Endpoints ==============


@router.post("/technologies")
async def technologies(
    request: TechnologiesRequest,
    current_account: Account = Depends(get_current_account),
    client: GenerativeClient = Depends(get_generative_client),
):
    """Suggest technologies to focus an assessment on for a job title."""
    try:
        result = generate_technologies(client, request.title)
    except (GenerationError, ParseError) as e:
        raise _model_failure("generate technologies", e)

    return {"success": True, "technologies": [t.to_json() for t in result]}


@router.post("/generate")
async def generate(
    request: GenerateRequest,
    current_account: Account = Depends(get_current_account),
    client: GenerativeClient = Depends(get_generative_client),
):
    """Create a five-question assessment for a level and title."""
    try:
        assessment = generate_assessment(client, request.category, request.title, request.technologies)
    except (GenerationError, ParseError) as e:
        raise _model_failure("generate assessment", e)

    return {"success": True, "assessment": assessment.to_json()}


@router.post("/evaluate")
async def evaluate(
    request: EvaluateRequest,
    current_account: Account = Depends(get_current_account),
    client: GenerativeClient = Depends(get_generative_client),
    profiles: ProfileRepository = Depends(get_profile_repository),
):
    """
    Grade submitted answers.

    The assigned level is stored on the caller's developer profile and the
    result is appended to its assessment history.
    """
    try:
        result = evaluate_assessment(
            client,
            category=request.category,
            title=request.title,
            assessment_id=request.assessment_id,
            answers=request.answers,
            cheating_detected=request.cheating_detected,
            technologies=request.technologies,
        )
    except (GenerationError, ParseError) as e:
        raise _model_failure("evaluate assessment", e)

    profile = profiles.get_by_user_id(current_account.id)
    if profile and profile.role == UserRole.DEVELOPER and profile.developer_info:
        profile.developer_info.level = result.assigned_level
        profile.developer_info.assessments.append(result.to_json())
        profiles.save(profile)
        logger.info("Profile %s level set to %s", profile.id, result.assigned_level)

    return {"success": True, "result": result.to_json()}


@router.post("/reputation")
async def reputation(
    request: ReputationRequest,
    current_account: Account = Depends(get_current_account),
    client: GenerativeClient = Depends(get_generative_client),
    profiles: ProfileRepository = Depends(get_profile_repository),
):
    """Score the caller from assessment, GitHub and LinkedIn data."""
    result = calculate_reputation_score(
        client,
        assessment_results=request.assessment_results,
        github_data=request.github_data,
        linkedin_data=request.linkedin_data,
    )

    profile = profiles.get_by_user_id(current_account.id)
    if profile and profile.role == UserRole.DEVELOPER and profile.developer_info:
        profile.developer_info.reputation_score = result.score
        profiles.save(profile)

    return {"success": True, **result.to_json()}
