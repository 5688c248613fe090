"""
Grammar Police - Grammar Correction and Comparison API
=====================================================

Sends user text to Gemini for a rewrite in the requested tone and dialect,
and turns the result into a side-by-side diff and an inline-highlighted view.

Features:
- Tone-aware rewrite with British/American spelling enforcement
- Word-level, case-insensitive diff of original vs rewritten text
- Inline correction markers addressable by correction index
- Per-client rate limiting on the model endpoint
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.gzip import GZipMiddleware
import logging

from config import config

# Setup logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
    ]
)

# Silence noisy third-party loggers to avoid cluttering output
_noisy_loggers = [
    'httpcore',
    'httpx',
    'urllib3',
    'google.auth',
    'google_genai',
    'google_genai.models',
]
for _logger_name in _noisy_loggers:
    logging.getLogger(_logger_name).setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Missing required fields: text, tone, dialect"

app = FastAPI(
    title="Grammar Police",
    description="Grammar correction with side-by-side diff and inline highlights",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Add GZip compression middleware (compresses responses > 1000 bytes)
app.add_middleware(GZipMiddleware, minimum_size=1000)


# =============================================================================
# ERROR HANDLERS (every error body is {"error": "..."})
# =============================================================================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def describe_validation_error(request: Request, exc: RequestValidationError) -> str:
    """Turn a body validation failure into a single readable message."""
    if request.url.path == "/api/correct":
        return MISSING_FIELDS_MESSAGE
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return f"Invalid request: {location}: {message}" if location else f"Invalid request: {message}"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": describe_validation_error(request, exc)})


# Routers
from text_compare.router import router as text_compare_router
app.include_router(text_compare_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}
