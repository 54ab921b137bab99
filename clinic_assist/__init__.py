"""Clinical productivity suite - protocol assistant and smart form builder.

Combines NiceGUI for the browser interface, Agno for LLM orchestration,
FastAPI for the programmatic API, and Pydantic for data validation.

Components:
    - agent: generation client (chat sessions and structured form generation)
    - features: assistant and form-builder state machines
    - parsing: uploaded document validation
    - api: HTTP endpoints and streaming responses
    - ui: Web interface for both tools
    - models: Chat, document and form schemas
"""

__version__ = "0.1.0"
