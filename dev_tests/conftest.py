"""Shared pytest fixtures for Grammar Police tests."""

import pytest
from unittest.mock import patch
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture
def mock_env_vars():
    """Provide test environment variables."""
    env = {
        "GEMINI_API_KEY": "test-gemini-key-12345",
        "GEMINI_MODEL": "gemini-test-model",
        "GEMINI_TEMPERATURE": "0.3",
        "REQUEST_TIMEOUT": "30",
        "MAX_TEXT_LENGTH": "500",
        "RATE_LIMIT_MAX": "3",
        "RATE_LIMIT_WINDOW": "120",
        "LOG_LEVEL": "debug",
        "APP_HOST": "127.0.0.1",
        "APP_PORT": "9000",
        "EXTRA_VERBOSE": "yes",
    }
    with patch.dict(os.environ, env, clear=False):
        yield env


@pytest.fixture
def clean_env():
    """Provide clean environment without any Grammar Police settings."""
    keys_to_remove = [
        "GEMINI_API_KEY", "GOOGLE_API_KEY", "GEMINI_MODEL", "GEMINI_TEMPERATURE",
        "REQUEST_TIMEOUT", "MAX_TEXT_LENGTH", "RATE_LIMIT_MAX", "RATE_LIMIT_WINDOW",
        "TRUSTED_PROXIES", "LOG_LEVEL", "APP_HOST", "APP_PORT", "APP_RELOAD",
        "EXTRA_VERBOSE",
    ]
    with patch.dict(os.environ, {}, clear=False):
        for key in keys_to_remove:
            os.environ.pop(key, None)
        yield


# ============================================================================
# Correction Fixtures
# ============================================================================

@pytest.fixture
def cats_original_html():
    return "<p>Their are to many cats.</p>"


@pytest.fixture
def cats_rewritten_html():
    return "<p>There are too many cats.</p>"


@pytest.fixture
def cats_corrections():
    """Corrections as the model returns them for the cats sentence."""
    return [
        {
            "original": "Their",
            "correction": "There",
            "explanation": "'There' indicates existence; 'their' is possessive.",
            "type": "grammar",
            "examples": ["There is a cat on the mat."],
        },
        {
            "original": "to",
            "correction": "too",
            "explanation": "'Too' means excessively.",
            "type": "grammar",
            "examples": ["It is too hot today."],
        },
    ]


@pytest.fixture
def model_payload(cats_rewritten_html, cats_corrections):
    """A complete structured model response."""
    return {
        "rewrittenText": cats_rewritten_html,
        "feedback": "A tidy sentence now, citizen.",
        "corrections": cats_corrections,
    }


# ============================================================================
# Shared State Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def fresh_rate_limiter():
    """Every test starts with an empty process-wide rate limiter."""
    from core.rate_limiter import reset_rate_limiter

    reset_rate_limiter()
    yield
    reset_rate_limiter()
