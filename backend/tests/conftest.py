import os

# Settings are read at import time
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ["GEMINI_API_KEY"] = ""

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import (
    get_account_repository,
    get_generative_client,
    get_profile_repository,
)
from app.db.base import Base
from app.main import app
from app.repositories import InMemoryStore, SqlAccountRepository, SqlProfileRepository
from app.services import GenerativeClient


class FakeGenerativeClient(GenerativeClient):
    """Returns queued responses instead of calling Gemini."""

    def __init__(self, *responses: str, available: bool = True):
        super().__init__(api_key="test-key" if available else "", model_name="fake")
        self.responses = list(responses)
        self.prompts: list[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.responses:
            raise AssertionError("No fake response queued")
        return self.responses.pop(0)


@pytest.fixture
def sql_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Account and profile repositories for one test, per storage backend."""
    if request.param == "memory":
        return InMemoryStore()
    session = request.getfixturevalue("sql_session")
    return SimpleNamespace(
        accounts=SqlAccountRepository(session),
        profiles=SqlProfileRepository(session),
    )


@pytest.fixture
def generator():
    return FakeGenerativeClient()


@pytest.fixture
def client(store, generator):
    app.dependency_overrides[get_account_repository] = lambda: store.accounts
    app.dependency_overrides[get_profile_repository] = lambda: store.profiles
    app.dependency_overrides[get_generative_client] = lambda: generator
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def signup(client, **overrides) -> dict:
    payload = {
        "email": "a@x.com",
        "password": "p1",
        "role": "developer",
        "firstName": "A",
        "lastName": "B",
    }
    payload.update(overrides)
    response = client.post("/auth/signup", json=payload)
    assert response.status_code == 200, response.text
    return response.json()


def developer_profile(**overrides) -> dict:
    payload = {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "jane@example.com",
        "phone": "+250700000000",
        "country": "Rwanda",
        "city": "Kigali",
        "title": "Backend Engineer",
        "developerInfo": {
            "skills": ["Python", "React"],
            "bio": "Builds APIs",
            "experience": 4,
            "reputationScore": 60,
            "level": "Intermediate",
        },
    }
    payload.update(overrides)
    return payload


def recruiter_profile(**overrides) -> dict:
    payload = {
        "firstName": "Rita",
        "lastName": "Hire",
        "email": "rita@corp.com",
        "country": "Kenya",
        "city": "Nairobi",
        "recruiterInfo": {
            "company": "Corp",
            "position": "Talent Lead",
            "industry": "Fintech",
        },
    }
    payload.update(overrides)
    return payload


def create_profile(client, token: str, payload: dict) -> dict:
    response = client.post("/profile/create", json=payload, headers=auth(token))
    assert response.status_code == 201, response.text
    return response.json()["profile"]
