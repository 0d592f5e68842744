"""
Developer reputation scoring.

Combines assessment results with GitHub and LinkedIn data into a 0-100
score. Gemini is asked first; when it is unavailable or answers with
something unparseable, a deterministic rule-based score is used instead.
"""

import json
from typing import Any, Optional

from app.core.logging import get_logger
from app.schemas.assessment import ReputationScore
from app.services.generative import GenerationError, GenerativeClient
from app.services.json_extract import ParseError

logger = get_logger("reputation", "REPUTATION")

BASE_SCORE = 50
MIN_SUGGESTIONS = 3

GENERIC_SUGGESTIONS = [
    "Regularly contribute to open-source projects on GitHub",
    "Create a personal portfolio website showcasing your projects",
    "Obtain relevant certifications in your technology stack",
    "Participate in coding challenges and competitions",
    "Write technical blog posts or articles to demonstrate expertise",
    "Join and contribute to developer communities",
    "Complete your developer profile with a professional photo",
    "Focus on projects that demonstrate your expertise in specific areas",
]


# ============== LinkedIn Normalization ==============


def _dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _month(date: Any) -> str:
    if not isinstance(date, dict) or not date:
        return ""
    return f"{date.get('year')}-{date.get('month') or '01'}"


def _year(date: Any) -> str:
    return f"{date.get('year')}" if isinstance(date, dict) and date else ""


def normalize_linkedin_data(raw: Optional[dict]) -> Optional[dict]:
    """
    Convert raw LinkedIn API payloads into one profile shape.

    Already-normalized data (with a `basicProfile` key) is returned as-is.
    Values of the wrong type are treated as missing.
    """
    if not isinstance(raw, dict) or not raw:
        return None
    if "basicProfile" in raw:
        return raw

    sub = raw.get("sub")
    profile_url = f"https://www.linkedin.com/in/{str(sub).split(':')[-1]}" if sub else raw.get("profileUrl", "")

    def elements(key: str, container: str = "elements") -> list[dict]:
        value = raw.get(key)
        if isinstance(value, dict):
            value = value.get(container)
        return [item for item in _list(value) if isinstance(item, dict)]

    return {
        "basicProfile": {
            "firstName": raw.get("given_name") or raw.get("firstName") or "",
            "lastName": raw.get("family_name") or raw.get("lastName") or "",
            "email": raw.get("email", ""),
            "headline": raw.get("headline", ""),
            "location": raw.get("location", ""),
            "industry": raw.get("industry", ""),
            "connectionCount": raw.get("connectionCount", 0),
            "profileUrl": profile_url,
            "pictureUrl": raw.get("picture") or raw.get("profilePicture") or "",
        },
        "experience": [
            {
                "companyName": _dict(position.get("company")).get("name", ""),
                "title": position.get("title", ""),
                "startDate": _month(position.get("startDate")),
                "endDate": _month(position.get("endDate")) or "Present",
                "description": position.get("description", ""),
            }
            for position in elements("positions")
        ],
        "education": [
            {
                "schoolName": education.get("schoolName", ""),
                "degree": education.get("degree", ""),
                "fieldOfStudy": education.get("fieldOfStudy", ""),
                "startDate": _year(education.get("startDate")),
                "endDate": _year(education.get("endDate")) or "Present",
            }
            for education in elements("education")
        ],
        "skills": [
            {"name": skill.get("name", ""), "level": skill.get("level", "Intermediate")}
            for skill in elements("skills")
        ],
        "certifications": [
            {
                "name": cert.get("name", ""),
                "authority": _dict(cert.get("authority")).get("name", ""),
                "startDate": _year(cert.get("startDate")),
                "endDate": _year(cert.get("endDate")),
            }
            for cert in elements("certifications", container="values")
        ],
    }


# ============== Scoring ==============


def build_reputation_prompt(
    assessment_results: Optional[dict],
    github_data: Optional[dict],
    linkedin_data: Optional[dict],
) -> str:
    linkedin_section = (
        f"LINKEDIN PROFILE:\n{json.dumps(linkedin_data, indent=2)}"
        if linkedin_data
        else "NO LINKEDIN DATA AVAILABLE"
    )
    linkedin_factors = (
        """5. LinkedIn profile (may be limited to basic information)
6. Professional title and headline
7. Any available career information
8. Available skills"""
        if linkedin_data
        else ""
    )
    return f"""You are a developer reputation scoring system. Analyze the provided data and calculate a reputation score (0-100) for this developer.

ASSESSMENT RESULTS:
{json.dumps(assessment_results, indent=2)}

GITHUB PROFILE:
{json.dumps(github_data, indent=2)}

{linkedin_section}

Consider the following factors:
1. Assessment performance (level assigned, strengths, weaknesses)
2. GitHub presence (repos, followers, account age, activity)
3. Portfolio completeness (bio, blog/website)
4. Skills demonstrated
{linkedin_factors}

If LinkedIn or GitHub data is limited or missing, focus more on assessment results and available data.

Return a JSON response formatted as:
{{
  "reputationScore": 75,
  "explanation": "Score based on combination of assessment results and GitHub profile...",
  "improvementSuggestions": ["Suggestion 1", "Suggestion 2", "Suggestion 3"]
}}"""


def _count(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def fallback_reputation_score(
    assessment_results: Optional[dict],
    github_data: Optional[dict],
    linkedin_data: Optional[dict],
) -> ReputationScore:
    """
    Rule-based score used when the model cannot be used.

    Starts at 50, adds capped bonuses per data source, clamps to 0-100 and
    pads suggestions to at least three.
    """
    score = BASE_SCORE
    factors: list[str] = []
    suggestions: list[str] = []

    if assessment_results:
        if assessment_results.get("passed"):
            score += 10
            factors.append("successful programming assessment")

        strengths = _list(assessment_results.get("strengths"))
        if strengths:
            score += min(len(strengths) * 2, 10)
            factors.append(f"demonstrated strengths in {len(strengths)} areas")
        else:
            suggestions.append("Complete more skill assessments to showcase your strengths")

        level = str(assessment_results.get("assignedLevel") or "").lower()
        if level in ("pro", "expert"):
            score += 15
            factors.append("expert level assessment")
        elif level == "intermediate":
            score += 10
            factors.append("intermediate level assessment")
        elif level:
            score += 5
            factors.append("beginner level assessment")
    else:
        suggestions.append("Complete the programming assessment to improve your score")

    if github_data:
        score += 5
        factors.append("GitHub profile")

        public_repos = _count(github_data.get("public_repos"))
        if public_repos > 0:
            score += min(public_repos, 10)
            factors.append(f"{public_repos} public repositories")
        else:
            suggestions.append("Create and publish more GitHub repositories")

        followers = _count(github_data.get("followers"))
        if followers > 0:
            score += min(followers, 5)
            factors.append(f"{followers} GitHub followers")

        if github_data.get("bio"):
            score += 2
            factors.append("complete GitHub bio")
        else:
            suggestions.append("Add a bio to your GitHub profile")
    else:
        suggestions.append("Connect your GitHub profile to improve your score")

    if linkedin_data:
        score += 5
        factors.append("LinkedIn profile")

        skills = _list(linkedin_data.get("skills"))
        if skills:
            score += min(len(skills), 10)
            factors.append(f"{len(skills)} listed skills")
        else:
            suggestions.append("Add more skills to your LinkedIn profile")

        experience = _list(linkedin_data.get("experience"))
        if experience:
            score += min(len(experience) * 2, 10)
            factors.append(f"professional experience ({len(experience)} positions)")
        else:
            suggestions.append("Add your work experience to your LinkedIn profile")

        if linkedin_data.get("education"):
            score += 3
            factors.append("educational background")
    else:
        suggestions.append("Connect your LinkedIn profile to improve your score")

    score = max(0, min(100, score))

    for suggestion in GENERIC_SUGGESTIONS:
        if len(suggestions) >= MIN_SUGGESTIONS:
            break
        if suggestion not in suggestions:
            suggestions.append(suggestion)

    basis = ", ".join(factors) if factors else "available profile data"
    return ReputationScore(
        score=score,
        explanation=f"Reputation score of {score} calculated based on {basis}.",
        suggestions=suggestions,
    )


def calculate_reputation_score(
    client: GenerativeClient,
    assessment_results: Optional[dict] = None,
    github_data: Optional[dict] = None,
    linkedin_data: Optional[dict] = None,
) -> ReputationScore:
    """
    Score a developer with Gemini, falling back to the rule-based score.

    Never raises for model problems.
    """
    linkedin_data = normalize_linkedin_data(linkedin_data)

    if not client.available:
        logger.warning("Gemini unavailable, using rule-based reputation score")
        return fallback_reputation_score(assessment_results, github_data, linkedin_data)

    try:
        data = client.generate(build_reputation_prompt(assessment_results, github_data, linkedin_data))
        score = max(0.0, min(100.0, float(data["reputationScore"])))
        return ReputationScore(
            score=score,
            explanation=str(data.get("explanation", "")),
            suggestions=[str(s) for s in data.get("improvementSuggestions") or []],
        )
    except (GenerationError, ParseError, KeyError, TypeError, ValueError) as e:
        logger.warning("Falling back to rule-based reputation score: %s", e)
        return fallback_reputation_score(assessment_results, github_data, linkedin_data)
