"""Derive how a company can be reached and how promising that channel is."""
from __future__ import annotations

from typing import List

from quote_autopilot.core.models import (
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    Company,
    ContactMethod,
)

METHOD_EMAIL = "email"
METHOD_FORM = "form"
METHOD_MANUAL = "manual"

PRIORITY_RANKS = {PRIORITY_HIGH: 1, PRIORITY_MEDIUM: 2, PRIORITY_LOW: 3}
UNRANKED = 999

# Addresses that reach a sales desk directly.
SALES_EMAIL_MARKERS = ("sales", "estimate")


def _is_sales_email(email: str) -> bool:
    return any(marker in email for marker in SALES_EMAIL_MARKERS)


def contact_methods(company: Company) -> List[ContactMethod]:
    """List every channel the company publishes; manual outreach when there is none."""

    methods: List[ContactMethod] = []
    if company.email:
        priority = PRIORITY_HIGH if _is_sales_email(company.email) else PRIORITY_MEDIUM
        methods.append(ContactMethod(type=METHOD_EMAIL, priority=priority, address=company.email))
    if company.contact_form:
        priority = PRIORITY_HIGH if company.contact_form.is_quote_form else PRIORITY_MEDIUM
        methods.append(ContactMethod(type=METHOD_FORM, priority=priority, form=company.contact_form))
    if not methods:
        methods.append(ContactMethod(type=METHOD_MANUAL, priority=PRIORITY_LOW))
    return methods


def preferred_contact_method(company: Company) -> ContactMethod:
    if company.email and _is_sales_email(company.email):
        return ContactMethod(type=METHOD_EMAIL, priority=PRIORITY_HIGH, address=company.email)
    if company.contact_form and company.contact_form.is_quote_form:
        return ContactMethod(type=METHOD_FORM, priority=PRIORITY_HIGH, form=company.contact_form)
    if company.email:
        return ContactMethod(type=METHOD_EMAIL, priority=PRIORITY_MEDIUM, address=company.email)
    if company.contact_form:
        return ContactMethod(type=METHOD_FORM, priority=PRIORITY_MEDIUM, form=company.contact_form)
    return ContactMethod(type=METHOD_MANUAL, priority=PRIORITY_LOW)


def contact_priority(company: Company) -> int:
    """Rank of the preferred channel: 1 is best."""

    return PRIORITY_RANKS.get(preferred_contact_method(company).priority, UNRANKED)


def is_contactable(company: Company) -> bool:
    return bool(company.email or company.contact_form)
