import pytest

from app.services.json_extract import ParseError, extract_json


def test_plain_json():
    assert extract_json('{"score": 80}') == {"score": 80}


def test_fenced_json_block():
    text = 'Here is the result:\n```json\n{"score": 72, "passed": false}\n```\nGood luck!'

    assert extract_json(text) == {"score": 72, "passed": False}


def test_bare_fence():
    text = "```\n[{\"value\": \"react\", \"label\": \"React\"}]\n```"

    assert extract_json(text, expect_array=True) == [{"value": "react", "label": "React"}]


def test_object_inside_prose():
    text = 'Sure! {"reputationScore": 64, "explanation": "ok"} Hope this helps.'

    assert extract_json(text)["reputationScore"] == 64


def test_echoed_prompt_comments_are_ignored():
    text = """{
      "id": "a1",
      "timeLimit": 30, // time in minutes
      "questions": [{"id": "q1", "text": "See https://example.com", "codeSnippet": "// keep me"}]
    }"""

    data = extract_json(text)

    assert data["timeLimit"] == 30
    assert data["questions"][0]["text"] == "See https://example.com"
    assert data["questions"][0]["codeSnippet"] == "// keep me"


def test_wrong_kind_is_rejected():
    with pytest.raises(ParseError):
        extract_json('{"value": "react"}', expect_array=True)


@pytest.mark.parametrize("text", ["", "   ", "I cannot help with that.", "```json\n{broken\n```"])
def test_unparseable_text_raises(text):
    with pytest.raises(ParseError):
        extract_json(text)
