"""
Data Models for Grammar Police
==============================

Pydantic models for the HTTP boundary and for the JSON returned by the
language model.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List
from enum import Enum


class Tone(str, Enum):
    """Rewrite tone requested by the user"""
    ORIGINAL = "Original (Grammar Fix Only)"
    CHAT = "Chat (Casual/WhatsApp)"
    EMAIL = "Email (Professional)"
    SPEAKING = "Speaking (Natural Flow)"


class Dialect(str, Enum):
    """English dialect enforced by the rewrite"""
    BRITISH = "British"
    AMERICAN = "American"


class CorrectionRequest(BaseModel):
    """
    Request body for /api/correct.

    Fields are plain strings so that missing or unknown values can be
    reported with the service's own error messages instead of a 422.
    """
    text: str = Field(default="", description="User text as HTML")
    tone: str = Field(default="", description="One of the Tone values")
    dialect: str = Field(default="", description="One of the Dialect values")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "text": "<p>Their are to many cats.</p>",
                "tone": "Original (Grammar Fix Only)",
                "dialect": "British"
            }
        }
    )


class GrammarCorrection(BaseModel):
    """One correction as returned by the model"""
    original: str = Field(default="", description="Fragment in the user's text")
    correction: str = Field(default="", description="Fragment in the rewritten text")
    explanation: str = Field(default="", description="Why the change was made")
    type: str = Field(default="", description="spelling, grammar, tone or punctuation")
    examples: List[str] = Field(default_factory=list, description="1-2 sentences showing correct usage")


class GrammarResponse(BaseModel):
    """Structured output of the model call"""
    rewrittenText: str = Field(..., description="Rewritten text in HTML, tags preserved")
    feedback: str = Field(..., description="Short comment from the Grammar Police persona")
    corrections: List[GrammarCorrection] = Field(default_factory=list, description="Corrections in priority order")


class ErrorResponse(BaseModel):
    """Error body returned by every endpoint"""
    error: str
