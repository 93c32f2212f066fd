"""Upload invoices, extract what was bought, and find companies to ask for comparable quotes."""
from quote_autopilot.core import CATEGORIES, Company, Invoice, QuoteRequest, configure_logging
from quote_autopilot.ingestion.files import UploadedFile, ValidationError
from quote_autopilot.ingestion.upload import upload_invoice
from quote_autopilot.matching import CompanySearch, SearchResult
from quote_autopilot.processing.orchestrator import ExtractionOutcome, analyze_document
from quote_autopilot.processing.pipeline import run_search, run_upload

__all__ = [
    "CATEGORIES",
    "Company",
    "CompanySearch",
    "ExtractionOutcome",
    "Invoice",
    "QuoteRequest",
    "SearchResult",
    "UploadedFile",
    "ValidationError",
    "analyze_document",
    "configure_logging",
    "run_search",
    "run_upload",
    "upload_invoice",
]
