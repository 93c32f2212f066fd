"""Status transitions for quote requests. Each helper returns a new snapshot."""
from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from quote_autopilot.core.models import Company, ContactMethod, Invoice, QuoteRequest, QuoteResponse
from quote_autopilot.matching.contact import preferred_contact_method

logger = logging.getLogger(__name__)

STATUS_PENDING = "pending"
STATUS_SENT = "sent"
STATUS_RESPONDED = "responded"
STATUS_FAILED = "failed"


class QuoteTransitionError(ValueError):
    """Raised when a quote request is moved out of order."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _require_status(request: QuoteRequest, expected: str, target: str) -> None:
    if request.status != expected:
        raise QuoteTransitionError(
            f"Quote request {request.id} cannot move from {request.status} to {target}"
        )


def create_quote_request(
    invoice: Invoice,
    company: Company,
    contact_method: Optional[ContactMethod] = None,
) -> QuoteRequest:
    """Open a pending request, reaching the company through its preferred channel by default."""

    return QuoteRequest(
        id=uuid.uuid4().hex,
        invoice=invoice,
        target_company=company,
        contact_method=contact_method or preferred_contact_method(company),
        summary=invoice.quote_summary(),
        status=STATUS_PENDING,
    )


def mark_as_sent(request: QuoteRequest) -> QuoteRequest:
    _require_status(request, STATUS_PENDING, STATUS_SENT)
    return replace(request, status=STATUS_SENT, sent_at=_now())


def mark_as_responded(request: QuoteRequest, response: QuoteResponse) -> QuoteRequest:
    _require_status(request, STATUS_SENT, STATUS_RESPONDED)
    return replace(request, status=STATUS_RESPONDED, responded_at=_now(), response=response)


def mark_as_failed(request: QuoteRequest, error: str) -> QuoteRequest:
    """Record a failure from any state, keeping the error as the response."""

    logger.warning("Quote request %s failed: %s", request.id, error)
    return replace(
        request,
        status=STATUS_FAILED,
        response=QuoteResponse(type="error", content=error),
    )
