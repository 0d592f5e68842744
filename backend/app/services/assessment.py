"""
AI programming assessment.

The model writes the questions and grades the answers; the level a
candidate ends up with is decided here, by fixed score thresholds, so a
generous or confused model cannot promote anyone.
"""

import json
from typing import Optional

from pydantic import ValidationError

from app.core.logging import get_logger
from app.core.security import utcnow
from app.schemas.assessment import Assessment, EvaluationResult, Resource, Technology, UserAnswer
from app.services.generative import GenerativeClient
from app.services.json_extract import ParseError

logger = get_logger("assessment", "ASSESSMENT")

PRO_THRESHOLD = 90
INTERMEDIATE_THRESHOLD = 80


# ============== Level Rules ==============


def assign_level(category: str, score: float) -> tuple[str, bool]:
    """
    Map a score to (assigned level, passed) for the chosen category.

    There is no failing level: every score lands at least on Beginner.
    """
    category = (category or "").lower()

    if category == "pro":
        if score >= PRO_THRESHOLD:
            return "Pro", True
        if score >= INTERMEDIATE_THRESHOLD:
            return "Intermediate", False
        return "Beginner", False

    if category == "intermediate":
        if score >= INTERMEDIATE_THRESHOLD:
            return "Intermediate", True
        return "Beginner", False

    return "Beginner", True


def cheating_result(title: str) -> EvaluationResult:
    return EvaluationResult(
        score=0,
        title=title,
        passed=False,
        assigned_level="Beginner",
        cheating_detected=True,
        feedback="Assessment invalidated due to detected cheating behavior.",
        strengths=[],
        weaknesses=["Academic integrity violation"],
        resources=[
            Resource(
                title="Academic Integrity Guidelines",
                url="https://example.com/academic-integrity",
            )
        ],
        timestamp=utcnow().isoformat(),
    )


# ============== Prompts ==============


def _technologies_clause(technologies: list[str], past: bool = False) -> str:
    if not technologies:
        return "" if past else "Include a balanced mix of relevant technologies for this role."
    verb = "focused" if past else "should focus"
    return f"The assessment {verb} specifically on these technologies: {', '.join(technologies)}."


def build_technologies_prompt(title: str) -> str:
    return f"""Generate a list of 8-12 relevant technologies, programming languages, or frameworks that a {title} might be proficient in.

Format the response as a JSON array with this structure:
[
  {{
    "value": "technology-name",
    "label": "Technology Name"
  }}
]

Each technology should be relevant to the {title} role. Make sure the values are lowercase, hyphenated versions of the labels."""


def build_assessment_prompt(category: str, title: str, technologies: list[str]) -> str:
    return f"""Create a programming assessment {title} for a {category} level programmer.

The assessment should include:
1. 5 programming questions appropriate {title} for {category} level
2. Each question should have a unique id
3. Some questions should include code snippets to analyze
4. The assessment should be challenging but fair
{_technologies_clause(technologies)}

Format the response as a JSON object with this structure:
{{
  "id": "unique-assessment-id",
  "level": "{category}",
  "title": "{title}",
  "timeLimit": 30,
  "questions": [
    {{
      "id": "q1",
      "text": "Question text here",
      "codeSnippet": "Code snippet if applicable, otherwise null",
      "expectedAnswer": "The expected answer or key points to look for"
    }}
  ]
}}"""


def build_evaluation_prompt(
    category: str,
    title: str,
    assessment_id: str,
    answers: list[UserAnswer],
    technologies: list[str],
) -> str:
    answers_json = json.dumps([answer.to_json() for answer in answers], indent=2)
    return f"""You are evaluating a programming assessment {title} for a {category} level programmer.

Assessment ID: {assessment_id}
{_technologies_clause(technologies, past=True)}

Here are the user's answers:
{answers_json}

Please evaluate the answers and return a JSON response with:
1. A score percentage (0-100)
2. Whether they passed based on these criteria:
   - Pro level requires 90% score
   - Intermediate level requires 80% or higher
   - Below 80% is a beginner level (all scores 0 or above result in at least beginner level)
3. Their assigned level based on their performance, {title} and the chosen category ({category})
4. Brief overall feedback
5. Strengths (list of 3-5 points)
6. Weaknesses (list of 3-5 points)
7. Learning resources (list of 3-5 relevant resources with titles and URLs)
8. Note: There is no "Failed" level - any score 0 or above should be at minimum "Beginner" level

Format the response as a JSON object with this structure:
{{
  "score": 85,
  "passed": true,
  "title": "{title}",
  "assignedLevel": "Intermediate",
  "feedback": "Good understanding of core concepts but needs improvement in...",
  "strengths": ["Strength 1", "Strength 2"],
  "weaknesses": ["Weakness 1", "Weakness 2"],
  "resources": [
    {{
      "title": "Resource title",
      "url": "https://example.com/resource"
    }}
  ]
}}"""


# ============== Operations ==============


def generate_technologies(client: GenerativeClient, title: str) -> list[Technology]:
    """
    Ask the model for technologies relevant to a job title.

    Raises:
        GenerationError / ParseError: propagated from the client
    """
    data = client.generate(build_technologies_prompt(title), expect_array=True)
    try:
        return [Technology.model_validate(item) for item in data]
    except ValidationError as e:
        raise ParseError(f"Unexpected technologies shape: {e}") from e


def generate_assessment(
    client: GenerativeClient,
    category: str,
    title: str,
    technologies: Optional[list[str]] = None,
) -> Assessment:
    """Ask the model for a five-question assessment."""
    logger.info("Generating %s assessment: %s", category, title)
    data = client.generate(build_assessment_prompt(category, title, technologies or []))
    data.setdefault("level", category)
    data.setdefault("title", title)
    try:
        return Assessment.model_validate(data)
    except ValidationError as e:
        raise ParseError(f"Unexpected assessment shape: {e}") from e


def evaluate_assessment(
    client: GenerativeClient,
    category: str,
    title: str,
    assessment_id: str,
    answers: list[UserAnswer],
    cheating_detected: bool,
    technologies: Optional[list[str]] = None,
) -> EvaluationResult:
    """
    Grade an assessment.

    Cheating short-circuits without calling the model. Otherwise the model's
    score is kept (clamped to 0-100) and the level rules decide the outcome.
    """
    if cheating_detected:
        logger.warning("Assessment %s invalidated: cheating detected", assessment_id)
        return cheating_result(title)

    data = client.generate(
        build_evaluation_prompt(category, title, assessment_id, answers, technologies or [])
    )

    try:
        score = max(0.0, min(100.0, float(data.get("score", 0))))
    except (TypeError, ValueError) as e:
        raise ParseError(f"Score is not numeric: {data.get('score')!r}") from e

    level, passed = assign_level(category, score)
    data.update(
        score=score,
        title=title,
        passed=passed,
        assignedLevel=level,
        cheatingDetected=False,
        timestamp=utcnow().isoformat(),
    )
    try:
        result = EvaluationResult.model_validate(data)
    except ValidationError as e:
        raise ParseError(f"Unexpected evaluation shape: {e}") from e

    logger.info("Assessment %s scored %.0f -> %s (passed=%s)", assessment_id, score, level, passed)
    return result
