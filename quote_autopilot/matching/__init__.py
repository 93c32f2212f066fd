"""Company matching and contact-channel ranking."""
from quote_autopilot.matching.contact import (
    contact_methods,
    contact_priority,
    is_contactable,
    preferred_contact_method,
)
from quote_autopilot.matching.search import CompanySearch, SearchResult

__all__ = [
    "CompanySearch",
    "SearchResult",
    "contact_methods",
    "contact_priority",
    "is_contactable",
    "preferred_contact_method",
]
