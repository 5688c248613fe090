"""
Configuration for Grammar Police
================================

Central configuration for the model collaborator, request limits and the
FastAPI server. Values come from environment variables (a local .env file is
loaded first); anything missing keeps its default.
"""

import os
import sys
from typing import List, Optional

from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

TRUTHY_ENV_VALUES = {"1", "true", "yes", "on"}


class GeminiSettings(BaseModel):
    """Language model collaborator settings."""

    model: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model used for grammar correction",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for the rewrite",
    )
    request_timeout_seconds: int = Field(
        default=60,
        ge=1,
        description="Timeout for a single model call",
    )


class RateLimitSettings(BaseModel):
    """Per-client limits for the correction endpoint."""

    max_requests: int = Field(
        default=10,
        ge=0,
        description="Maximum correction requests per client within the window (0 disables)",
    )
    window_seconds: int = Field(
        default=60,
        ge=1,
        description="Sliding time window (seconds) used for rate limiting",
    )
    trusted_proxies: List[str] = Field(
        default_factory=lambda: ["127.0.0.1/32", "::1/128"],
        description="CIDRs whose forwarded client IP headers are honoured",
    )


def _env_int(name: str, default: int, minimum: Optional[int] = None) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        parsed = int(raw)
    except ValueError:
        print(f"[CONFIG WARNING] {name}={raw!r} is not an integer; using {default}", file=sys.stderr, flush=True)
        return default
    if minimum is not None and parsed < minimum:
        print(f"[CONFIG WARNING] {name}={parsed} is below {minimum}; using {default}", file=sys.stderr, flush=True)
        return default
    return parsed


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        print(f"[CONFIG WARNING] {name}={raw!r} is not a number; using {default}", file=sys.stderr, flush=True)
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in TRUTHY_ENV_VALUES


class Config(BaseModel):
    """Configuration settings for Grammar Police."""

    # API Keys (loaded from environment variables)
    GEMINI_API_KEY: str = Field(default="", description="Google Gemini API key")

    GEMINI: GeminiSettings = Field(default_factory=GeminiSettings, description="Model collaborator settings")
    RATE_LIMIT: RateLimitSettings = Field(default_factory=RateLimitSettings, description="Correction endpoint limits")

    # Request validation
    MAX_TEXT_LENGTH: int = Field(default=20000, description="Maximum characters accepted for correction")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Root logging level")
    EXTRA_VERBOSE: bool = Field(default=False, description="Log full prompts and model responses")

    # FastAPI Configuration
    APP_HOST: str = Field(default="0.0.0.0", description="FastAPI host")
    APP_PORT: int = Field(default=8000, description="FastAPI port")
    APP_RELOAD: bool = Field(default=False, description="FastAPI reload mode")

    def __init__(self):
        super().__init__()
        self.load_from_environment()

    def load_from_environment(self):
        """Load configuration from environment variables."""
        # GEMINI_API_KEY first; GOOGLE_API_KEY kept as second option
        self.GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "") or os.getenv("GOOGLE_API_KEY", "")

        self.GEMINI.model = os.getenv("GEMINI_MODEL", self.GEMINI.model)
        self.GEMINI.temperature = _env_float("GEMINI_TEMPERATURE", self.GEMINI.temperature)
        self.GEMINI.request_timeout_seconds = _env_int(
            "REQUEST_TIMEOUT", self.GEMINI.request_timeout_seconds, minimum=1
        )

        self.RATE_LIMIT.max_requests = _env_int("RATE_LIMIT_MAX", self.RATE_LIMIT.max_requests, minimum=0)
        self.RATE_LIMIT.window_seconds = _env_int("RATE_LIMIT_WINDOW", self.RATE_LIMIT.window_seconds, minimum=1)

        trusted_override = os.getenv("TRUSTED_PROXIES")
        if trusted_override:
            values = [value.strip() for value in trusted_override.split(",") if value.strip()]
            if values:
                self.RATE_LIMIT.trusted_proxies = values

        self.MAX_TEXT_LENGTH = _env_int("MAX_TEXT_LENGTH", self.MAX_TEXT_LENGTH, minimum=1)

        self.LOG_LEVEL = os.getenv("LOG_LEVEL", self.LOG_LEVEL).upper()
        self.EXTRA_VERBOSE = _env_bool("EXTRA_VERBOSE", self.EXTRA_VERBOSE)

        self.APP_HOST = os.getenv("APP_HOST", self.APP_HOST)
        self.APP_PORT = _env_int("APP_PORT", self.APP_PORT, minimum=1)
        self.APP_RELOAD = _env_bool("APP_RELOAD", self.APP_RELOAD)

    def validate_api_keys(self) -> bool:
        """Return True when a Gemini API key is configured."""
        return bool(self.GEMINI_API_KEY)


# Global configuration instance
config = Config()
