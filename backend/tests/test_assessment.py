import json

import pytest
from conftest import FakeGenerativeClient, auth, create_profile, developer_profile, signup

from app.schemas.assessment import UserAnswer
from app.services import GenerationError, GenerativeClient, ParseError, assign_level, evaluate_assessment, generate_assessment

ASSESSMENT_TEXT = """```json
{
  "id": "py-101",
  "level": "intermediate",
  "title": "Python Developer",
  "timeLimit": 30,
  "questions": [
    {"id": "q1", "text": "What does len([]) return?", "codeSnippet": null, "expectedAnswer": "0"},
    {"id": "q2", "text": "Fix the bug", "codeSnippet": "def f(): return x", "expectedAnswer": "define x"}
  ]
}
```"""


def evaluation_text(score, **extra) -> str:
    payload = {
        "score": score,
        "passed": True,
        "title": "ignored",
        "assignedLevel": "Pro",
        "feedback": "Solid fundamentals.",
        "strengths": ["Syntax", "Testing"],
        "weaknesses": ["Concurrency"],
        "resources": [{"title": "Python docs", "url": "https://docs.python.org"}],
    }
    payload.update(extra)
    return json.dumps(payload)


ANSWERS = [UserAnswer(question_id="q1", answer="0")]


@pytest.mark.parametrize(
    "category, score, expected",
    [
        ("pro", 95, ("Pro", True)),
        ("pro", 90, ("Pro", True)),
        ("pro", 85, ("Intermediate", False)),
        ("pro", 40, ("Beginner", False)),
        ("intermediate", 80, ("Intermediate", True)),
        ("intermediate", 79, ("Beginner", False)),
        ("beginner", 0, ("Beginner", True)),
        ("anything", 100, ("Beginner", True)),
    ],
)
def test_assign_level(category, score, expected):
    assert assign_level(category, score) == expected


def test_generate_assessment_parses_model_output():
    client = FakeGenerativeClient(ASSESSMENT_TEXT)

    assessment = generate_assessment(client, "intermediate", "Python Developer", ["python"])

    assert assessment.id == "py-101"
    assert assessment.time_limit == 30
    assert [q.id for q in assessment.questions] == ["q1", "q2"]
    assert assessment.questions[1].code_snippet == "def f(): return x"
    assert "python" in client.prompts[0]


def test_generate_assessment_rejects_garbage():
    with pytest.raises(ParseError):
        generate_assessment(FakeGenerativeClient("no json today"), "pro", "Go Developer")


def test_evaluation_level_is_decided_by_score_not_model():
    client = FakeGenerativeClient(evaluation_text(85))

    result = evaluate_assessment(client, "pro", "Python Developer", "py-101", ANSWERS, cheating_detected=False)

    assert result.score == 85
    assert result.assigned_level == "Intermediate"
    assert result.passed is False
    assert result.title == "Python Developer"
    assert result.timestamp
    assert result.resources[0].url == "https://docs.python.org"


def test_evaluation_score_is_clamped():
    client = FakeGenerativeClient(evaluation_text(140))

    result = evaluate_assessment(client, "pro", "T", "a", ANSWERS, cheating_detected=False)

    assert result.score == 100
    assert result.assigned_level == "Pro"


def test_cheating_skips_the_model():
    client = FakeGenerativeClient()

    result = evaluate_assessment(client, "pro", "T", "a", ANSWERS, cheating_detected=True)

    assert client.prompts == []
    assert result.score == 0
    assert result.cheating_detected is True
    assert result.assigned_level == "Beginner"
    assert result.weaknesses == ["Academic integrity violation"]


def test_unconfigured_model_raises_generation_error():
    client = GenerativeClient(api_key="")

    with pytest.raises(GenerationError):
        evaluate_assessment(client, "pro", "T", "a", ANSWERS, cheating_detected=False)


# ============== API ==============


def test_generate_endpoint(client, generator):
    token = signup(client)["sessionId"]
    generator.responses.append(ASSESSMENT_TEXT)

    response = client.post(
        "/assessment/generate",
        json={"category": "intermediate", "title": "Python Developer", "technologies": ["python"]},
        headers=auth(token),
    )

    assert response.status_code == 200
    assessment = response.json()["assessment"]
    assert assessment["timeLimit"] == 30
    assert assessment["questions"][0]["expectedAnswer"] == "0"


def test_generate_requires_session(client):
    response = client.post("/assessment/generate", json={"category": "pro", "title": "x"})

    assert response.status_code == 401


def test_generate_endpoint_reports_model_failure(client, generator):
    token = signup(client)["sessionId"]
    generator.responses.append("Sorry, I can't do that.")

    response = client.post(
        "/assessment/generate",
        json={"category": "pro", "title": "Go Developer"},
        headers=auth(token),
    )

    assert response.status_code == 502
    assert response.json() == {"success": False, "message": "Failed to generate assessment"}


def test_technologies_endpoint(client, generator):
    token = signup(client)["sessionId"]
    generator.responses.append('[{"value": "fastapi", "label": "FastAPI"}, {"value": "sql", "label": "SQL"}]')

    response = client.post("/assessment/technologies", json={"title": "Backend Developer"}, headers=auth(token))

    assert response.status_code == 200
    assert response.json()["technologies"][0] == {"value": "fastapi", "label": "FastAPI"}


def test_evaluate_endpoint_updates_developer_level(client, generator):
    token = signup(client)["sessionId"]
    create_profile(client, token, developer_profile())
    generator.responses.append(evaluation_text(92))

    response = client.post(
        "/assessment/evaluate",
        json={
            "category": "pro",
            "title": "Python Developer",
            "assessmentId": "py-101",
            "answers": [{"questionId": "q1", "answer": "0"}],
            "cheatingDetected": False,
        },
        headers=auth(token),
    )

    assert response.status_code == 200
    result = response.json()["result"]
    assert result["assignedLevel"] == "Pro"
    assert result["passed"] is True

    profile = client.get("/profile/me", headers=auth(token)).json()["profile"]
    assert profile["developerInfo"]["level"] == "Pro"
    assert profile["developerInfo"]["assessments"][0]["score"] == 92
    assert profile["developerInfo"]["skills"] == ["Python", "React"]


def test_evaluate_endpoint_without_profile_still_grades(client, generator):
    token = signup(client)["sessionId"]

    response = client.post(
        "/assessment/evaluate",
        json={
            "category": "beginner",
            "title": "Web",
            "assessmentId": "w1",
            "answers": [],
            "cheatingDetected": True,
        },
        headers=auth(token),
    )

    assert response.status_code == 200
    assert response.json()["result"]["cheatingDetected"] is True


def test_numeric_ids_from_the_model_are_accepted():
    text = json.dumps({
        "id": 7,
        "level": "beginner",
        "title": "Web",
        "questions": [{"id": 1, "text": "What is HTML?", "expectedAnswer": "Markup"}],
    })

    assessment = generate_assessment(FakeGenerativeClient(text), "beginner", "Web")

    assert assessment.id == "7"
    assert assessment.questions[0].id == "1"
    assert UserAnswer.model_validate({"questionId": 1, "answer": "Markup"}).question_id == "1"
