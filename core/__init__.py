"""
Core package wiring the Grammar Police FastAPI application.
Importing this package ensures all route modules are loaded so route
definitions attach to the shared FastAPI application.
"""

# Import order matters: ensure app state is initialized before routes.
from . import app_state  # noqa: F401

# Route modules register themselves upon import.
from . import correction_routes  # noqa: F401

from .app_state import app  # noqa: F401
