"""
JSON extraction from free-text model output.

Models wrap JSON in ```json fences, bare fences, or prose. Strategies are
tried in order and the first one that parses wins.
"""

import json
import re
from typing import Any, Optional


class ParseError(ValueError):
    """No JSON of the expected kind could be extracted from model output."""


def extract_json(text: str, expect_array: bool = False) -> dict | list:
    """
    Extract a JSON object (or array) from model output.

    Args:
        text: Raw model response text
        expect_array: If True, only a JSON array is accepted

    Returns:
        The parsed dict or list

    Raises:
        ParseError: if nothing of the expected type can be parsed
    """
    if not text or not text.strip():
        raise ParseError("Empty model response")

    expected = list if expect_array else dict
    strategies = [
        _try_clean_json,
        _try_fenced_json,
        _try_fenced_any,
        _try_outer_bounds,
    ]

    for strategy in strategies:
        result = strategy(text, expect_array)
        if isinstance(result, expected):
            return result

    raise ParseError("No JSON found in model response")


def _loads(candidate: str) -> Optional[Any]:
    try:
        return json.loads(candidate.strip())
    except json.JSONDecodeError:
        return None


def _try_clean_json(text: str, expect_array: bool) -> Optional[Any]:
    return _loads(text)


def _try_fenced_json(text: str, expect_array: bool) -> Optional[Any]:
    for match in re.findall(r"```json\s*([\s\S]*?)\s*```", text, re.IGNORECASE):
        result = _loads(match)
        if result is not None:
            return result
    return None


def _try_fenced_any(text: str, expect_array: bool) -> Optional[Any]:
    for match in re.findall(r"```(?:\w*)\s*([\s\S]*?)\s*```", text):
        result = _loads(match)
        if result is not None:
            return result
    return None


def _try_outer_bounds(text: str, expect_array: bool) -> Optional[Any]:
    """Take everything between the first opening and last closing bracket."""
    opener, closer = ("[", "]") if expect_array else ("{", "}")
    start = text.find(opener)
    end = text.rfind(closer)
    if start == -1 or end <= start:
        return None
    return _loads(_strip_line_comments(text[start:end + 1]))


def _strip_line_comments(candidate: str) -> str:
    # Prompts show "// ..." annotations that models sometimes echo back
    return re.sub(r"(?m)(?<![:\"'])//[^\n\"]*$", "", candidate)
