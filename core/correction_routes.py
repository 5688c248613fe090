"""
Grammar correction route: validates the request, applies the per-client rate
limit and forwards the text to the model collaborator.
"""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Type, TypeVar

from fastapi import Depends, HTTPException, Request, Response

from ai_service import AIRequestError, GrammarService, get_grammar_service
from logging_utils import Phase, create_phase_logger
from models import CorrectionRequest, Dialect, ErrorResponse, GrammarResponse, Tone

from .app_state import MISSING_FIELDS_MESSAGE, app, config, logger
from .rate_limiter import SimpleRateLimiter, get_rate_limiter
from .security import get_client_ip

FAILURE_MESSAGE = "Failed to process grammar correction"

E = TypeVar("E", bound=Enum)


def _parse_choice(enum_cls: Type[E], value: str, field_name: str) -> E:
    """Resolve a request string to an enum member or fail with a 400."""
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise HTTPException(
            status_code=400,
            detail=f"Invalid {field_name}: '{value}'. Expected one of: {allowed}",
        )


@app.post(
    "/api/correct",
    response_model=GrammarResponse,
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def correct_text(
    payload: CorrectionRequest,
    request: Request,
    response: Response,
    rate_limiter: SimpleRateLimiter = Depends(get_rate_limiter),
    grammar_service: GrammarService = Depends(get_grammar_service),
) -> GrammarResponse:
    """
    Rewrite the user's HTML in the requested tone and dialect.

    Returns the model's rewritten HTML, persona feedback and the list of
    corrections. Model failures are reported as 500 and never retried.
    """
    client_ip = get_client_ip(request) or "unknown"
    await rate_limiter.check(client_ip)
    remaining = await rate_limiter.remaining(client_ip)
    if remaining >= 0:
        response.headers["X-RateLimit-Remaining"] = str(remaining)

    phase_logger = create_phase_logger(
        request_id=uuid.uuid4().hex[:8],
        extra_verbose=config.EXTRA_VERBOSE,
    )

    with phase_logger.phase(Phase.REQUEST_VALIDATION):
        if not payload.text.strip() or not payload.tone or not payload.dialect:
            raise HTTPException(status_code=400, detail=MISSING_FIELDS_MESSAGE)

        tone = _parse_choice(Tone, payload.tone, "tone")
        dialect = _parse_choice(Dialect, payload.dialect, "dialect")

        if len(payload.text) > config.MAX_TEXT_LENGTH:
            raise HTTPException(
                status_code=400,
                detail=f"Text exceeds maximum length of {config.MAX_TEXT_LENGTH} characters",
            )
        phase_logger.info(f"Client {client_ip}: {len(payload.text)} chars")

    with phase_logger.phase(Phase.MODEL_CALL, sub_label=f"{dialect.value} / {tone.value}"):
        try:
            result = await grammar_service.correct_grammar(
                payload.text,
                tone,
                dialect,
                phase_logger=phase_logger,
            )
        except AIRequestError as exc:
            phase_logger.error(str(exc))
            raise HTTPException(status_code=500, detail=FAILURE_MESSAGE) from exc

    with phase_logger.phase(Phase.COMPLETION):
        phase_logger.info(f"{len(result.corrections)} corrections returned")

    phase_logger.log_timing_summary()
    logger.debug("Correction request for %s completed", client_ip)
    return result
