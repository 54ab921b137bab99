"""Uploaded document validation using pypdf.

Checks size, media type and file signature before anything is sent to the
model, and produces the base64-encoded UploadedDocument.
"""

import base64
import io
import logging

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from clinic_assist.errors import ValidationError
from clinic_assist.models.forms import UploadedDocument

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"
PNG_MAGIC_BYTES = b"\x89PNG\r\n\x1a\n"
JPEG_MAGIC_BYTES = b"\xff\xd8\xff"

ACCEPTED_MEDIA_TYPES = {
    "application/pdf": PDF_MAGIC_BYTES,
    "image/png": PNG_MAGIC_BYTES,
    "image/jpeg": JPEG_MAGIC_BYTES,
}

_EXTENSION_MEDIA_TYPES = {
    ".pdf": "application/pdf",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}

TOO_LARGE_MESSAGE = "O arquivo é muito grande. O limite máximo é 10MB."
EMPTY_FILE_MESSAGE = "O arquivo está vazio."
UNSUPPORTED_TYPE_MESSAGE = "Formato não suportado. Envie um PDF, PNG ou JPEG."
CORRUPT_FILE_MESSAGE = "Não foi possível ler o arquivo. Verifique se o documento é válido."


def resolve_media_type(filename: str, declared: str | None) -> str:
    """Pick the media type for an upload.

    Browsers sometimes send an empty or generic type; fall back to the
    file extension in that case.
    """
    if declared and declared in ACCEPTED_MEDIA_TYPES:
        return declared
    for extension, media_type in _EXTENSION_MEDIA_TYPES.items():
        if filename.lower().endswith(extension):
            return media_type
    return declared or "application/octet-stream"


def _count_pdf_pages(content: bytes) -> int:
    """Open the PDF with pypdf and return its page count.

    Raises:
        ValidationError: If the PDF is corrupt or has no pages.
    """
    try:
        reader = PdfReader(io.BytesIO(content))
        pages = len(reader.pages)
    except PdfReadError as e:
        logger.info(f"Corrupt or invalid PDF: {e}")
        raise ValidationError(CORRUPT_FILE_MESSAGE) from e
    except Exception as e:
        logger.warning(f"Failed to read PDF: {e}")
        raise ValidationError(CORRUPT_FILE_MESSAGE) from e

    if pages == 0:
        raise ValidationError(CORRUPT_FILE_MESSAGE)
    return pages


def load_document(filename: str, media_type: str | None, content: bytes) -> UploadedDocument:
    """Validate an uploaded file and encode it for the generation call.

    Args:
        filename: Original file name.
        media_type: Media type declared by the browser, if any.
        content: Raw file bytes.

    Returns:
        UploadedDocument with base64 data, size and page count.

    Raises:
        ValidationError: If the file is empty, larger than 10MB, of an
            unsupported type or unreadable.
    """
    if not content:
        raise ValidationError(EMPTY_FILE_MESSAGE)

    if len(content) > MAX_FILE_SIZE:
        size_mb = len(content) / (1024 * 1024)
        logger.info(f"Rejected {filename}: {size_mb:.1f}MB exceeds 10MB")
        raise ValidationError(TOO_LARGE_MESSAGE)

    resolved = resolve_media_type(filename, media_type)
    magic = ACCEPTED_MEDIA_TYPES.get(resolved)
    if magic is None:
        raise ValidationError(UNSUPPORTED_TYPE_MESSAGE)

    if not content.lstrip()[:10].startswith(magic):
        logger.info(f"Rejected {filename}: content does not match {resolved}")
        raise ValidationError(CORRUPT_FILE_MESSAGE)

    pages = _count_pdf_pages(content) if resolved == "application/pdf" else None

    return UploadedDocument(
        name=filename,
        media_type=resolved,
        data=base64.b64encode(content).decode("ascii"),
        size=len(content),
        pages=pages,
    )
