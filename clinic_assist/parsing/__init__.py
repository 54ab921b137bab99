"""Uploaded document intake for the form builder.

Responsibilities:
    - Enforce the 10MB upload ceiling before any remote call
    - Accept PDF, PNG and JPEG files, checked by signature
    - Verify PDFs open with pypdf and record their page count
    - Base64-encode the content for inline transmission to the model
"""

from clinic_assist.parsing.documents import MAX_FILE_SIZE, load_document, resolve_media_type

__all__ = ["MAX_FILE_SIZE", "load_document", "resolve_media_type"]
