"""Tests for upload validation, PDF text extraction, and the upload flow."""
from functools import partial

import pytest

from quote_autopilot.core.models import CATEGORY_IT
from quote_autopilot.ingestion.files import MAX_UPLOAD_BYTES, UploadedFile, ValidationError, validate_upload
from quote_autopilot.ingestion.text import TextExtractionError, extract_text
from quote_autopilot.ingestion.upload import upload_invoice
from quote_autopilot.processing.orchestrator import ExtractionOutcome, analyze_document


def test_non_pdf_is_rejected():
    with pytest.raises(ValidationError) as excinfo:
        validate_upload(UploadedFile(file_name="scan.png", content=b"\x89PNG", content_type="image/png"))

    assert str(excinfo.value) == "PDFファイルのみサポートされています"


def test_oversized_pdf_is_rejected():
    with pytest.raises(ValidationError) as excinfo:
        validate_upload(UploadedFile(file_name="big.pdf", content=b"0" * (MAX_UPLOAD_BYTES + 1)))

    assert str(excinfo.value) == "ファイルサイズが大きすぎます（最大10MB）"


def test_pdf_at_size_limit_is_accepted():
    validate_upload(UploadedFile(file_name="max.pdf", content=b"0" * MAX_UPLOAD_BYTES))


def test_from_path_guesses_content_type(tmp_path):
    path = tmp_path / "invoice.pdf"
    path.write_bytes(b"%PDF-1.4")

    file = UploadedFile.from_path(path)

    assert file.file_name == "invoice.pdf"
    assert file.content_type == "application/pdf"
    assert file.size == 8


def test_extract_text_reads_pdf_text_layer(make_pdf):
    file = UploadedFile(file_name="hello.pdf", content=make_pdf("Hello World"))

    text = extract_text(file)

    assert "Hello" in text
    assert "World" in text


def test_extract_text_wraps_parser_errors():
    with pytest.raises(TextExtractionError):
        extract_text(UploadedFile(file_name="broken.pdf", content=b"not a pdf at all"))


def test_invalid_upload_is_not_analysed(invoice_repository):
    calls = []

    def analyzer(file):
        calls.append(file)
        return ExtractionOutcome.degraded("", "unused")

    with pytest.raises(ValidationError):
        upload_invoice(UploadedFile(file_name="a.txt", content=b"x", content_type="text/plain"), invoice_repository, analyzer=analyzer)

    assert calls == []
    assert invoice_repository.find_all() == []


def test_upload_degrades_to_heuristics_and_persists(invoice_repository):
    analyzer = partial(analyze_document, text_extractor=lambda f: "株式会社Foo 合計 ¥300,000円 Web開発")
    file = UploadedFile(file_name="foo.pdf", content=b"%PDF-1.4")

    invoice = upload_invoice(file, invoice_repository, analyzer=analyzer)

    assert invoice.company_name == "Foo"
    assert invoice.total_amount == 300000
    assert invoice.business_category == CATEGORY_IT
    assert invoice_repository.find_by_id(invoice.id) == invoice


def test_upload_persists_when_amount_text_overflows(invoice_repository):
    analyzer = partial(analyze_document, text_extractor=lambda f: "1" * 400 + ".5万円")
    file = UploadedFile(file_name="huge.pdf", content=b"%PDF-1.4")

    invoice = upload_invoice(file, invoice_repository, analyzer=analyzer)

    assert invoice.total_amount == 0
    assert invoice_repository.find_by_id(invoice.id) == invoice


def test_unreadable_pdf_still_produces_an_invoice(invoice_repository):
    file = UploadedFile(file_name="請求書_サンプル商事.pdf", content=b"not a pdf at all")

    invoice = upload_invoice(file, invoice_repository)

    assert invoice.company_name == "サンプル商事"
    assert invoice.services == ["一般業務"]
    assert "請求書_サンプル商事.pdf" in invoice.extracted_text
