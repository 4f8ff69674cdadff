"""meterbill REST API module.

This module provides a FastAPI-based REST API for profiles, meter readings
and bill estimates.

To start the API server:
    python -m meterbill serve --host 0.0.0.0 --port 8000

For development with auto-reload:
    python -m meterbill serve --reload
"""

__all__ = ["app", "create_app"]

from meterbill.api.main import app, create_app
