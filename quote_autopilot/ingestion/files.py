"""Uploaded document container and upload validation rules."""
from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path

PDF_CONTENT_TYPE = "application/pdf"
MAX_UPLOAD_BYTES = 10 * 1024 * 1024

UNSUPPORTED_TYPE_MESSAGE = "PDFファイルのみサポートされています"
TOO_LARGE_MESSAGE = "ファイルサイズが大きすぎます（最大10MB）"


class ValidationError(ValueError):
    """Raised when an upload is rejected before any processing happens."""


@dataclass(frozen=True)
class UploadedFile:
    file_name: str
    content: bytes
    content_type: str = PDF_CONTENT_TYPE

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: Path) -> "UploadedFile":
        """Read a file from disk, guessing its content type from the suffix."""

        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            file_name=path.name,
            content=path.read_bytes(),
            content_type=content_type or "application/octet-stream",
        )


def validate_upload(file: UploadedFile) -> None:
    if file.content_type != PDF_CONTENT_TYPE:
        raise ValidationError(UNSUPPORTED_TYPE_MESSAGE)
    if file.size > MAX_UPLOAD_BYTES:
        raise ValidationError(TOO_LARGE_MESSAGE)
