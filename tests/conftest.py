"""Pytest configuration to make the local package importable without installation."""
import sys
from pathlib import Path
from typing import Callable

import pytest

# Ensure repository root is on sys.path for module resolution
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from quote_autopilot.storage import (
    CompanyRepository,
    InMemoryKeyValueStore,
    InvoiceRepository,
    seed_companies,
)


@pytest.fixture(autouse=True)
def disable_ai(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Disable remote model calls during tests and ignore any local secrets file."""

    monkeypatch.setenv("AI_ANALYSIS_DISABLED", "1")
    monkeypatch.setenv("AI_SECRET_FILE", str(tmp_path / "missing.env"))


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def invoice_repository(store: InMemoryKeyValueStore) -> InvoiceRepository:
    return InvoiceRepository(store)


@pytest.fixture
def company_repository(store: InMemoryKeyValueStore) -> CompanyRepository:
    return CompanyRepository(store)


@pytest.fixture
def seeded_companies(company_repository: CompanyRepository) -> CompanyRepository:
    """Company directory populated with the demo companies."""

    seed_companies(company_repository)
    return company_repository


def build_pdf(text: str) -> bytes:
    """Build a one-page PDF with an ASCII text layer in Helvetica."""

    stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R "
        b"/Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_offset)
    return bytes(out)


@pytest.fixture
def make_pdf() -> Callable[[str], bytes]:
    return build_pdf
