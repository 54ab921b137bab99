"""Shared FastAPI dependencies."""

import logging

from fastapi import HTTPException, status

from clinic_assist.agent.generation_client import GenerationClient, get_generation_client
from clinic_assist.errors import ConfigurationError

logger = logging.getLogger(__name__)


def generation_client() -> GenerationClient:
    """Provide the generation client, or 503 when the API key is missing."""
    try:
        return get_generation_client()
    except ConfigurationError as e:
        logger.error(f"Generation client unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Model API key is not configured",
        ) from e
