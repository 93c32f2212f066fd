"""Core building blocks for the quote_autopilot package."""
from quote_autopilot.core.logging import configure_logging
from quote_autopilot.core.models import (
    CATEGORIES,
    Company,
    ContactForm,
    ContactMethod,
    FormField,
    Invoice,
    QuoteRequest,
    QuoteResponse,
    QuoteSummary,
)

__all__ = [
    "configure_logging",
    "CATEGORIES",
    "Company",
    "ContactForm",
    "ContactMethod",
    "FormField",
    "Invoice",
    "QuoteRequest",
    "QuoteResponse",
    "QuoteSummary",
]
