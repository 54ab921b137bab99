"""Unit tests for individual components in isolation.

Coverage:
    - features/: Assistant and form builder state, preview, library
    - parsing/: Document validation
    - agent/: Configuration, generation client, response parsing
    - main: startup refuses to run without an API key
    - models/ and ui/formatting: Serialization and reply rendering

Uses mocks for Agno models and agents. Leverages pytest-check for multiple
assertions per test.
"""
