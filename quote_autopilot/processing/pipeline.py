"""Pipelines behind the CLI: upload one document, or search and export companies."""
import logging
from pathlib import Path
from typing import Optional

from quote_autopilot.core.models import Invoice
from quote_autopilot.ingestion.files import UploadedFile
from quote_autopilot.ingestion.upload import upload_invoice
from quote_autopilot.matching.search import CompanySearch, SearchResult
from quote_autopilot.reporting.sinks import write_csv, write_excel
from quote_autopilot.reporting.templates import COMPANY_HEADERS, company_to_row
from quote_autopilot.storage.kv import KeyValueStore
from quote_autopilot.storage.repositories import CompanyRepository, InvoiceRepository

logger = logging.getLogger(__name__)


def run_upload(path: Path, store: KeyValueStore) -> Invoice:
    """Read a document from disk and store the invoice built from it."""

    logger.info("Uploading %s", path)
    file = UploadedFile.from_path(path)
    return upload_invoice(file, InvoiceRepository(store))


def run_search(
    store: KeyValueStore,
    category: Optional[str] = None,
    invoice_id: Optional[str] = None,
    name: Optional[str] = None,
    output_path: Optional[Path] = None,
    sink: str = "csv",
    excel_path: Optional[Path] = None,
) -> SearchResult:
    """Search the company directory and optionally export the ranked rows."""

    search = CompanySearch(CompanyRepository(store), InvoiceRepository(store))
    result = search.search(category=category, invoice_id=invoice_id, name=name)
    if result.total_found == 0:
        logger.warning("No companies matched %s", result.params)

    if output_path is None and sink != "excel":
        return result

    rows = [company_to_row(company) for company in result.companies]
    if output_path is not None:
        write_csv(rows, output_path, COMPANY_HEADERS)
        logger.info("Wrote CSV output to %s", output_path)

    if sink == "excel":
        excel_target = excel_path or (output_path or Path("output/companies.csv")).with_suffix(".xlsx")
        write_excel(rows, excel_target, sheet_title="companies")
        logger.info("Wrote Excel output to %s", excel_target)
    return result
