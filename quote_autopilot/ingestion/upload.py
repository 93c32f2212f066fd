"""Invoice upload entry point: validate, analyse, build, persist."""
from __future__ import annotations

import logging
from typing import Callable

from quote_autopilot.core.models import Invoice
from quote_autopilot.ingestion.files import UploadedFile, validate_upload
from quote_autopilot.processing.invoices import create_invoice
from quote_autopilot.processing.orchestrator import ExtractionOutcome, analyze_document
from quote_autopilot.storage.repositories import InvoiceRepository

logger = logging.getLogger(__name__)

Analyzer = Callable[[UploadedFile], ExtractionOutcome]


def upload_invoice(
    file: UploadedFile,
    invoice_repository: InvoiceRepository,
    *,
    analyzer: Analyzer = analyze_document,
) -> Invoice:
    """Store an invoice built from ``file``.

    Rejected uploads raise ``ValidationError`` before anything is analysed.
    Extraction problems never fail the upload; storage errors do.
    """

    validate_upload(file)
    outcome = analyzer(file)
    invoice = create_invoice(file.file_name, outcome)
    invoice_repository.save(invoice)
    logger.info(
        "Stored invoice %s for %s (category=%s, ai=%s)",
        invoice.id,
        file.file_name,
        invoice.business_category,
        outcome.success,
    )
    return invoice
