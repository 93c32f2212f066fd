"""Row templates and file sinks for exports."""
from quote_autopilot.reporting.sinks import write_csv, write_excel
from quote_autopilot.reporting.templates import COMPANY_HEADERS, company_to_row, invoice_to_summary

__all__ = ["COMPANY_HEADERS", "company_to_row", "invoice_to_summary", "write_csv", "write_excel"]
