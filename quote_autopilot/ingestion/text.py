"""PDF text extraction backed by pdfplumber."""
from __future__ import annotations

import io
import logging

import pdfplumber

from quote_autopilot.ingestion.files import UploadedFile

logger = logging.getLogger(__name__)


class TextExtractionError(Exception):
    """Raised when a document's text layer cannot be read."""


def extract_text(file: UploadedFile) -> str:
    """Return the text of every page joined with newlines.

    Pages without a text layer (scans) contribute nothing, so an image-only
    PDF yields an empty string rather than an error.
    """

    text_parts = []
    try:
        with pdfplumber.open(io.BytesIO(file.content)) as pdf:
            for page in pdf.pages:
                page_text = page.extract_text()
                if page_text:
                    text_parts.append(page_text)
    except Exception as exc:
        raise TextExtractionError(f"Could not read text from {file.file_name}: {exc}") from exc

    logger.debug("Extracted %d page(s) of text from %s", len(text_parts), file.file_name)
    return "\n".join(text_parts)
