"""Quote request lifecycle helpers."""
from quote_autopilot.quotes.workflow import (
    QuoteTransitionError,
    create_quote_request,
    mark_as_failed,
    mark_as_responded,
    mark_as_sent,
)

__all__ = [
    "QuoteTransitionError",
    "create_quote_request",
    "mark_as_failed",
    "mark_as_responded",
    "mark_as_sent",
]
