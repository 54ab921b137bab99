"""FastAPI endpoints for programmatic access to both tools.

Endpoints:
    - GET /health: Service health status
    - POST /chat/stream: Streamed assistant reply (Server-Sent Events)
    - POST /forms/generate: Form schema from an uploaded document
"""

from clinic_assist.api.app import app, create_app

__all__ = ["app", "create_app"]
