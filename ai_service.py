"""
AI Service Module for Grammar Police
====================================

Handles the single call to Google Gemini that rewrites the user's text and
lists the corrections. The call is made once per request; failures are
reported to the caller and never retried here.
"""

import logging
import threading
import time
from typing import Any, Optional, TYPE_CHECKING

from google import genai
from google.genai import types
from pydantic import ValidationError

# Use optimized JSON (orjson)
import json_utils as json

from config import config
from models import Dialect, GrammarResponse, Tone
from prompts import CORRECTION_RESPONSE_SCHEMA, build_system_instruction, build_user_prompt

if TYPE_CHECKING:
    from logging_utils import PhaseLogger


logger = logging.getLogger(__name__)

PROVIDER_NAME = "gemini"


class AIRequestError(RuntimeError):
    """Raised when the model call fails or returns unusable output."""

    def __init__(self, provider: str, model: str, cause: Exception):
        message = f"AI request failed for {model} via {provider}: {cause}"
        super().__init__(message)
        self.provider = provider
        self.model = model
        self.cause = cause


_shared_grammar_service: Optional["GrammarService"] = None
_grammar_service_init_lock = threading.Lock()


def get_grammar_service() -> "GrammarService":
    """Return the shared GrammarService instance, creating it on first use."""
    global _shared_grammar_service
    if _shared_grammar_service is None:
        with _grammar_service_init_lock:
            if _shared_grammar_service is None:
                _shared_grammar_service = GrammarService()
    return _shared_grammar_service


class GrammarService:
    """Gemini-backed grammar correction"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        client: Optional[Any] = None,
    ):
        """
        Initialize the service.

        Args:
            api_key: Gemini API key (defaults to config.GEMINI_API_KEY)
            model: Model identifier (defaults to config.GEMINI.model)
            temperature: Sampling temperature (defaults to config.GEMINI.temperature)
            client: Pre-built genai.Client, mainly for tests
        """
        self.api_key = api_key if api_key is not None else config.GEMINI_API_KEY
        self.model = model or config.GEMINI.model
        self.temperature = temperature if temperature is not None else config.GEMINI.temperature
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            if not self.api_key:
                raise ValueError("GEMINI_API_KEY is not configured")
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=config.GEMINI.request_timeout_seconds * 1000),
            )
        return self._client

    def _build_config(self, system_instruction: str) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type="application/json",
            response_schema=CORRECTION_RESPONSE_SCHEMA,
            temperature=self.temperature,
        )

    @staticmethod
    def parse_response(raw_text: Optional[str]) -> GrammarResponse:
        """
        Parse the model's JSON text into a GrammarResponse.

        Raises:
            ValueError: If the text is empty, not JSON, or does not match the schema
        """
        if not raw_text or not raw_text.strip():
            raise ValueError("No response from Gemini")
        try:
            payload = json.loads(raw_text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Gemini returned invalid JSON: {exc}") from exc
        try:
            return GrammarResponse.model_validate(payload)
        except ValidationError as exc:
            raise ValueError(f"Gemini response does not match the correction schema: {exc}") from exc

    async def correct_grammar(
        self,
        text: str,
        tone: Tone,
        dialect: Dialect,
        phase_logger: Optional["PhaseLogger"] = None,
    ) -> GrammarResponse:
        """
        Rewrite text in the requested tone and dialect.

        Args:
            text: User text as HTML
            tone: Requested tone
            dialect: Requested dialect
            phase_logger: Optional phase logger for prompt/response dumps

        Returns:
            GrammarResponse with rewrittenText, feedback and corrections

        Raises:
            AIRequestError: On any failure (configuration, transport, bad output)
        """
        system_instruction = build_system_instruction(tone, dialect)
        user_prompt = build_user_prompt(text)

        if phase_logger:
            phase_logger.log_prompt(
                self.model,
                system_instruction,
                user_prompt,
                temperature=self.temperature,
            )

        start_time = time.time()
        try:
            client = self._get_client()
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=user_prompt,
                config=self._build_config(system_instruction),
            )
            raw_text = getattr(response, "text", None)
            if phase_logger:
                phase_logger.log_response(
                    self.model,
                    raw_text or "",
                    metadata={"usage": getattr(response, "usage_metadata", None)},
                )
            result = self.parse_response(raw_text)
        except Exception as exc:
            logger.error(f"Gemini correction failed ({self.model}): {exc}")
            raise AIRequestError(PROVIDER_NAME, self.model, exc) from exc

        logger.info(
            "Gemini correction completed in %.2fs with %d corrections",
            time.time() - start_time,
            len(result.corrections),
        )
        return result
