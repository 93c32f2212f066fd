"""Flatten companies and invoices into spreadsheet-friendly rows."""
from typing import Any, Dict, List

from quote_autopilot.core.models import CATEGORY_OTHER, Company, ContactMethod, Invoice
from quote_autopilot.matching.contact import contact_methods, contact_priority, preferred_contact_method

COMPANY_HEADERS = [
    "Company_ID",
    "Name",
    "Industry",
    "Website",
    "Email",
    "Contact_Form",
    "Quote_Form",
    "Contact_Methods",
    "Preferred_Method",
    "Contact_Priority",
    "Description",
]

INVOICE_HEADERS = [
    "Invoice_ID",
    "File_Name",
    "Company",
    "Business_Category",
    "Services",
    "Total_Amount",
    "Timeline",
    "Project_Scope",
    "Uploaded_At",
]


def _clean_text(value: str | None) -> str:
    if not value:
        return ""
    return " ".join(value.split())


def _describe_method(method: ContactMethod) -> str:
    target = method.address or (method.form.url if method.form else "")
    label = f"{method.type}:{target}" if target else method.type
    return f"{label} ({method.priority})"


def company_to_row(company: Company) -> Dict[str, Any]:
    """Convert a Company into a row of COMPANY_HEADERS, with its derived contact data."""

    methods: List[ContactMethod] = contact_methods(company)
    form = company.contact_form
    return {
        "Company_ID": company.id,
        "Name": _clean_text(company.name),
        "Industry": _clean_text(company.industry),
        "Website": company.website or "",
        "Email": company.email or "",
        "Contact_Form": form.url if form else "",
        "Quote_Form": "yes" if form and form.is_quote_form else "no",
        "Contact_Methods": "; ".join(_describe_method(method) for method in methods),
        "Preferred_Method": _describe_method(preferred_contact_method(company)),
        "Contact_Priority": contact_priority(company),
        "Description": _clean_text(company.description),
    }


def invoice_to_summary(invoice: Invoice) -> Dict[str, Any]:
    return {
        "Invoice_ID": invoice.id,
        "File_Name": invoice.file_name,
        "Company": _clean_text(invoice.company_name),
        "Business_Category": invoice.business_category or CATEGORY_OTHER,
        "Services": ", ".join(invoice.services),
        "Total_Amount": invoice.total_amount,
        "Timeline": _clean_text(invoice.timeline),
        "Project_Scope": _clean_text(invoice.project_scope),
        "Uploaded_At": invoice.uploaded_at.isoformat(),
    }
