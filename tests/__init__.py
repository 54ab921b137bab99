"""Test package for the clinical assistant.

Structure:
    - unit/: Features, parsing, models and the generation client in isolation
    - integration/: HTTP endpoints over the real FastAPI app

The hosted model is never called: tests patch Agno or use FakeGenerationClient.
Leverages pytest with pytest-check for soft assertions.
"""
