from typing import Annotated, Optional

from pydantic import BeforeValidator, Field

from app.schemas.base import CamelModel

# Gemini sometimes numbers ids instead of quoting them
ItemId = Annotated[str, BeforeValidator(str)]


class Technology(CamelModel):
    value: str
    label: str


class Question(CamelModel):
    id: ItemId
    text: str
    code_snippet: Optional[str] = None
    expected_answer: str = ""


class Assessment(CamelModel):
    id: ItemId
    level: str
    title: str
    time_limit: int = 30  # minutes
    questions: list[Question] = Field(default_factory=list)


class UserAnswer(CamelModel):
    question_id: ItemId
    answer: str


class Resource(CamelModel):
    title: str
    url: str


class EvaluationResult(CamelModel):
    score: float
    title: str
    passed: bool
    assigned_level: str
    cheating_detected: bool = False
    feedback: str = ""
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    resources: list[Resource] = Field(default_factory=list)
    timestamp: Optional[str] = None


class ReputationScore(CamelModel):
    score: float
    explanation: str
    suggestions: list[str] = Field(default_factory=list)
