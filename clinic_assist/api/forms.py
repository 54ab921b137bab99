"""Form generation endpoint for clinical documents.

Handles upload, validation, and structured generation in one request.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, HTTPException, UploadFile, status

from clinic_assist.agent.generation_client import GenerationClient
from clinic_assist.api.dependencies import generation_client
from clinic_assist.errors import GenerationError, ValidationError
from clinic_assist.features.form_builder import GENERATION_FAILED_MESSAGE
from clinic_assist.models.forms import GeneratedFormSchema
from clinic_assist.parsing.documents import MAX_FILE_SIZE, TOO_LARGE_MESSAGE, load_document

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/forms", tags=["forms"])


async def _read_and_validate_size(file: UploadFile) -> bytes:
    """Read file content and validate size.

    Raises:
        HTTPException: 413 if file exceeds size limit.
    """
    content = await file.read()

    if len(content) > MAX_FILE_SIZE:
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=TOO_LARGE_MESSAGE,
        )

    return content


@router.post(
    "/generate",
    response_model=GeneratedFormSchema,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def generate_form(
    file: UploadFile,
    client: Annotated[GenerationClient, Depends(generation_client)],
    hint: Annotated[str, Form()] = "",
) -> GeneratedFormSchema:
    """Generate a structured form from an uploaded PDF or image.

    Args:
        file: The clinical document (multipart/form-data).
        client: Generation client.
        hint: Optional instructions for the model.

    Returns:
        The generated form with camelCase keys.

    Raises:
        400: Empty, unsupported or unreadable file.
        413: File exceeds 10MB limit.
        502: The model failed or answered with an invalid form.
    """
    content = await _read_and_validate_size(file)

    try:
        document = load_document(file.filename or "", file.content_type, content)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    try:
        return await client.generate_form(document.content, document.media_type, hint)
    except GenerationError as e:
        logger.error(f"Form generation failed for {document.name}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=GENERATION_FAILED_MESSAGE,
        ) from e
