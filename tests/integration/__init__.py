"""Integration tests for the HTTP API and the NiceGUI views.

Coverage:
    - POST /chat/stream: SSE protocol, sessions, error chunk
    - POST /forms/generate: upload validation and status codes
    - GET /health
    - Assistant and form-builder views under nicegui.testing user simulation

Requests go through httpx ASGITransport against the real app; only the
generation client dependency is overridden.
"""
