"""
Generative model client.

Everything that talks to Gemini goes through `GenerativeClient`, which turns
free-text responses into structured JSON or raises. Callers decide whether a
failure means an error response or a rule-based fallback.
"""

import google.generativeai as genai

from app.core.config import settings
from app.core.logging import get_logger
from app.services.json_extract import ParseError, extract_json

logger = get_logger("generative", "GEMINI")


class GenerationError(RuntimeError):
    """The model is not configured or the request to it failed."""


class GenerativeClient:
    """Thin wrapper around a Gemini model: prompt in, JSON out."""

    def __init__(self, api_key: str = "", model_name: str = ""):
        self.api_key = api_key or settings.GEMINI_API_KEY
        self.model_name = model_name or settings.GEMINI_MODEL
        self._configured = False

    @property
    def available(self) -> bool:
        return bool(self.api_key)

    def _configure(self) -> None:
        if self._configured:
            return
        if not self.api_key:
            raise GenerationError("GEMINI_API_KEY not set")
        genai.configure(api_key=self.api_key)
        self._configured = True
        logger.info("Gemini API configured (model=%s)", self.model_name)

    def complete(self, prompt: str) -> str:
        """
        Send a prompt and return the raw response text.

        Raises:
            GenerationError: if the model is unavailable or the call fails
        """
        self._configure()
        try:
            model = genai.GenerativeModel(self.model_name)
            response = model.generate_content(prompt)
            return response.text.strip()
        except Exception as e:
            logger.error("Gemini request failed: %s", e)
            raise GenerationError(str(e)) from e

    def generate(self, prompt: str, expect_array: bool = False) -> dict | list:
        """
        Send a prompt and parse the JSON the model was asked to return.

        Raises:
            GenerationError: if the model call fails
            ParseError: if the response holds no usable JSON
        """
        text = self.complete(prompt)
        try:
            return extract_json(text, expect_array=expect_array)
        except ParseError:
            logger.warning("Unparseable model response: %s", text[:200])
            raise


__all__ = ["GenerativeClient", "GenerationError", "ParseError"]
