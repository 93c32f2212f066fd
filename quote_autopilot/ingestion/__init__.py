"""Upload handling and PDF text extraction.

``quote_autopilot.ingestion.upload`` is not re-exported here because it
depends on the processing package, which itself reads files through this one.
"""
from quote_autopilot.ingestion.files import MAX_UPLOAD_BYTES, UploadedFile, ValidationError, validate_upload
from quote_autopilot.ingestion.text import TextExtractionError, extract_text

__all__ = [
    "MAX_UPLOAD_BYTES",
    "UploadedFile",
    "ValidationError",
    "validate_upload",
    "TextExtractionError",
    "extract_text",
]
