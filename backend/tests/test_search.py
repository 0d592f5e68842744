import pytest
from conftest import create_profile, developer_profile, recruiter_profile, signup


@pytest.fixture
def populated(client):
    """Three developers and one recruiter."""
    people = [
        ("jane@x.com", "developer", developer_profile(
            firstName="Jane", lastName="Doe", email="jane@example.com",
            developerInfo={"skills": ["Python", "React"], "experience": 4},
        )),
        ("omar@x.com", "developer", developer_profile(
            firstName="Omar", lastName="Reactson", email="omar@example.com", country="Kenya", city="Nairobi",
            developerInfo={"skills": ["Go", "Rust"], "experience": 8},
        )),
        ("li@x.com", "developer", developer_profile(
            firstName="Li", lastName="Wei", email="li@example.com",
            developerInfo={
                "skills": ["react", "TypeScript"],
                "workExperience": {"linkedin_link": "https://linkedin.com/in/li", "totalYearsOfExperience": 2},
            },
        )),
        ("rita@x.com", "recruiter", recruiter_profile()),
    ]
    for email, role, payload in people:
        token = signup(client, email=email, role=role)["sessionId"]
        create_profile(client, token, payload)
    return client


def names(body: dict) -> list[str]:
    return [p["firstName"] for p in body["profiles"]]


def test_search_without_filters_returns_everyone(populated):
    body = populated.get("/profiles/search").json()

    assert body["success"] is True
    assert body["totalProfiles"] == 4
    assert body["totalPages"] == 1
    assert names(body) == ["Jane", "Omar", "Li", "Rita"]


def test_search_by_role(populated):
    body = populated.get("/profiles/search", params={"role": "recruiter"}).json()

    assert names(body) == ["Rita"]
    assert body["profiles"][0]["recruiterInfo"] == {
        "company": "Corp",
        "position": "Talent Lead",
        "industry": "Fintech",
        "reputationScore": 50,
    }


def test_search_developers_by_skill_is_case_insensitive(populated):
    body = populated.get("/profiles/search", params={"role": "developer", "skills": "react"}).json()

    assert names(body) == ["Jane", "Li"]
    for profile in body["profiles"]:
        assert "react" in [skill.lower() for skill in profile["developerInfo"]["skills"]]


def test_search_skills_accepts_a_list(populated):
    body = populated.get("/profiles/search", params={"role": "developer", "skills": "rust, typescript"}).json()

    assert names(body) == ["Omar", "Li"]


def test_skills_ignored_without_developer_role(populated):
    body = populated.get("/profiles/search", params={"skills": "rust"}).json()

    assert body["totalProfiles"] == 4


def test_search_by_minimum_experience(populated):
    body = populated.get("/profiles/search", params={"role": "developer", "experienceMin": 3}).json()

    assert names(body) == ["Jane", "Omar"]


def test_experience_falls_back_to_linkedin_years(populated):
    body = populated.get("/profiles/search", params={"role": "developer", "experienceMin": 2}).json()

    assert "Li" in names(body)
    li = next(p for p in body["profiles"] if p["firstName"] == "Li")
    assert li["developerInfo"]["experience"] == 2


def test_search_by_location_matches_country_or_city(populated):
    by_country = populated.get("/profiles/search", params={"location": "kenya"}).json()
    by_city = populated.get("/profiles/search", params={"location": "KIG"}).json()

    assert names(by_country) == ["Omar", "Rita"]
    assert names(by_city) == ["Jane", "Li"]


def test_search_by_name_matches_first_or_last(populated):
    body = populated.get("/profiles/search", params={"name": "react"}).json()

    assert names(body) == ["Omar"]


def test_filters_combine(populated):
    body = populated.get(
        "/profiles/search",
        params={"role": "developer", "skills": "react", "location": "kigali", "experienceMin": 3},
    ).json()

    assert names(body) == ["Jane"]


def test_pagination(populated):
    body = populated.get("/profiles/search", params={"page": 2, "limit": 3}).json()

    assert body["page"] == 2
    assert body["limit"] == 3
    assert body["totalProfiles"] == 4
    assert body["totalPages"] == 2
    assert names(body) == ["Rita"]


def test_invalid_page_is_rejected(populated):
    response = populated.get("/profiles/search", params={"page": 0})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_search_results_hide_private_fields(populated):
    body = populated.get("/profiles/search", params={"role": "developer"}).json()

    for profile in body["profiles"]:
        assert "email" not in profile
        assert "phone" not in profile
        assert "userId" not in profile
        assert "bio" not in profile["developerInfo"]


def test_public_profile_by_hyphenated_name(populated):
    response = populated.get("/profiles/public/jane-doe")

    assert response.status_code == 200
    profile = response.json()["profile"]
    assert profile["firstName"] == "Jane"
    assert profile["developerInfo"]["bio"] == "Builds APIs"
    assert "email" not in profile
    assert "phone" not in profile
    assert "userId" not in profile


def test_public_profile_by_full_name_with_space(populated):
    response = populated.get("/profiles/public/Omar Reactson")

    assert response.json()["profile"]["lastName"] == "Reactson"


def test_public_profile_by_first_name_only(populated):
    response = populated.get("/profiles/public/li")

    assert response.json()["profile"]["lastName"] == "Wei"


def test_public_profile_not_found(populated):
    response = populated.get("/profiles/public/nobody-here")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Profile not found"}


def test_public_profile_compares_first_two_name_parts(client):
    token = signup(client, email="mary@x.com")["sessionId"]
    create_profile(client, token, developer_profile(firstName="Mary", lastName="Jane", email="mary@example.com"))

    response = client.get("/profiles/public/mary-jane-smith")

    assert response.status_code == 200
    assert response.json()["profile"]["lastName"] == "Jane"
