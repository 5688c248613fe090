"""
Text Compare Router - FastAPI endpoints for the diff and highlight engines.

Endpoints:
- POST /diff       - Word-level diff of two HTML documents
- POST /highlight  - Decorate corrections inside rewritten HTML
- POST /compare    - Both views for one model response
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from .diff import compute_diff, tokenize
from .highlight import highlight_corrections
from .markup import Document

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Text Compare"])

# Upper bound for any single document accepted by these endpoints
MAX_DOCUMENT_LENGTH = 50_000

# Upper bound for the LCS table (original tokens x corrected tokens)
MAX_DIFF_CELLS = 4_000_000

DOCUMENTS_TOO_LARGE_MESSAGE = "Documents are too large to compare"


# =============================================================================
# REQUEST/RESPONSE MODELS
# =============================================================================


class DiffRequest(BaseModel):
    """Request for a side-by-side diff."""

    original: str = Field(default="", description="Original HTML", max_length=MAX_DOCUMENT_LENGTH)
    corrected: str = Field(default="", description="Rewritten HTML", max_length=MAX_DOCUMENT_LENGTH)


class SegmentModel(BaseModel):
    """One merged diff segment."""

    text: str
    type: str = Field(description="unchanged, added or removed")


class DiffResponse(BaseModel):
    """Both sides of a diff."""

    originalSegments: List[SegmentModel]
    correctedSegments: List[SegmentModel]


class HighlightRequest(BaseModel):
    """Request to decorate corrections in HTML."""

    html: str = Field(default="", description="Rewritten HTML", max_length=MAX_DOCUMENT_LENGTH)
    corrections: List[Any] = Field(
        default_factory=list,
        description="Corrections in priority order; malformed entries are ignored",
    )


class HighlightResponse(BaseModel):
    """Decorated HTML."""

    html: str


class CompareRequest(BaseModel):
    """A model response plus the user's original text."""

    originalText: str = Field(default="", max_length=MAX_DOCUMENT_LENGTH)
    rewrittenText: str = Field(default="", max_length=MAX_DOCUMENT_LENGTH)
    corrections: List[Any] = Field(
        default_factory=list,
        description="Corrections in priority order; malformed entries are ignored",
    )


class CompareResponse(DiffResponse):
    """Diff segments and highlighted HTML for one model response."""

    highlightedHtml: str
    processing_time_ms: int


# =============================================================================
# ENDPOINTS
# =============================================================================


def _ensure_diffable(original: Document, corrected: Document) -> None:
    """Reject document pairs whose LCS table would exceed MAX_DIFF_CELLS."""
    cells = len(tokenize(original.text)) * len(tokenize(corrected.text))
    if cells > MAX_DIFF_CELLS:
        logger.warning("Diff rejected: %d cells exceeds limit of %d", cells, MAX_DIFF_CELLS)
        raise HTTPException(status_code=400, detail=DOCUMENTS_TOO_LARGE_MESSAGE)


@router.post("/diff", response_model=DiffResponse)
async def diff_documents(request: DiffRequest) -> Dict[str, Any]:
    """Compute the word-level diff between two HTML documents."""
    original = Document.from_html(request.original)
    corrected = Document.from_html(request.corrected)
    _ensure_diffable(original, corrected)
    return compute_diff(original, corrected).to_dict()


@router.post("/highlight", response_model=HighlightResponse)
async def highlight_document(request: HighlightRequest) -> Dict[str, Any]:
    """Wrap each correction's replacement text in a marker span."""
    return {"html": highlight_corrections(request.html, request.corrections).html}


@router.post("/compare", response_model=CompareResponse)
async def compare_documents(request: CompareRequest) -> Dict[str, Any]:
    """
    Build both result views for one model response.

    The diff and the highlight are independent; neither sees the other's output.
    """
    start_time = time.time()

    original = Document.from_html(request.originalText)
    rewritten = Document.from_html(request.rewrittenText)

    _ensure_diffable(original, rewritten)
    diff = compute_diff(original, rewritten)
    highlighted = highlight_corrections(rewritten, request.corrections)

    elapsed_ms = int((time.time() - start_time) * 1000)
    logger.info(
        "Compared documents: +%d/-%d segments, %d corrections, %dms",
        diff.added_count,
        diff.removed_count,
        len(request.corrections),
        elapsed_ms,
    )

    payload = diff.to_dict()
    payload["highlightedHtml"] = highlighted.html
    payload["processing_time_ms"] = elapsed_ms
    return payload
