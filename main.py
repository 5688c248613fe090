"""
Entrypoint for the Grammar Police API.
This file wires the FastAPI application together by importing the core package,
which initializes shared state and registers all routes.
"""

from __future__ import annotations

import argparse
import os

import core  # noqa: F401  # Ensure route modules are imported for side effects
from core.app_state import app, config, logger  # noqa: F401


if __name__ == "__main__":
    import uvicorn

    parser = argparse.ArgumentParser(description="Grammar Police API")
    parser.add_argument("--host", default=config.APP_HOST, help="Bind address")
    parser.add_argument("--port", type=int, default=config.APP_PORT, help="Bind port")
    parser.add_argument(
        "--reload",
        action="store_true",
        default=config.APP_RELOAD,
        help="Reload on code changes (development only)",
    )
    parser.add_argument(
        "--extra-verbose",
        action="store_true",
        help="Log full prompts and raw model responses for every request",
    )
    args = parser.parse_args()

    if args.extra_verbose:
        # Read again by the reloader subprocess through Config()
        os.environ["EXTRA_VERBOSE"] = "true"
        config.EXTRA_VERBOSE = True

    logger.info("Starting Grammar Police on %s:%d (model: %s)", args.host, args.port, config.GEMINI.model)
    if not config.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY is not set; /api/correct will fail until it is configured")

    uvicorn.run(
        "main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
