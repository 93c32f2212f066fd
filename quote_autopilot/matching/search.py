"""Find candidate companies for an invoice, a category, or a name fragment."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from quote_autopilot.core.models import Company
from quote_autopilot.matching.contact import contact_methods, contact_priority
from quote_autopilot.storage.repositories import CompanyRepository, InvoiceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    """Ranked companies plus the counts shown alongside them."""

    companies: List[Company]
    total_found: int
    contactable_count: int
    params: Dict[str, Optional[str]] = field(default_factory=dict)


class CompanySearch:
    def __init__(self, company_repository: CompanyRepository, invoice_repository: InvoiceRepository) -> None:
        self.company_repository = company_repository
        self.invoice_repository = invoice_repository

    def by_category(self, category: str) -> List[Company]:
        return self.company_repository.search_by_category(category)

    def by_name(self, name: str) -> List[Company]:
        return self.company_repository.search_by_name(name)

    def by_invoice_id(self, invoice_id: str) -> List[Company]:
        """Companies in the invoice's business category; [] when either is missing."""

        invoice = self.invoice_repository.find_by_id(invoice_id)
        if invoice is None:
            logger.info("Invoice %s not found", invoice_id)
            return []
        if not invoice.business_category:
            return []
        return self.by_category(invoice.business_category)

    @staticmethod
    def filter_contactable(companies: List[Company]) -> List[Company]:
        return [company for company in companies if contact_methods(company)]

    @staticmethod
    def sort_by_priority(companies: List[Company]) -> List[Company]:
        return sorted(companies, key=contact_priority)

    def search(
        self,
        category: Optional[str] = None,
        invoice_id: Optional[str] = None,
        name: Optional[str] = None,
    ) -> SearchResult:
        """Run one lookup, preferring invoice id, then category, then name."""

        if invoice_id:
            found = self.by_invoice_id(invoice_id)
        elif category:
            found = self.by_category(category)
        elif name:
            found = self.by_name(name)
        else:
            raise ValueError("one of category, invoice_id, or name is required")

        contactable = self.filter_contactable(found)
        result = SearchResult(
            companies=self.sort_by_priority(contactable),
            total_found=len(found),
            contactable_count=len(contactable),
            params={"category": category, "invoice_id": invoice_id, "name": name},
        )
        logger.info(
            "Search %s matched %d companies (%d contactable)",
            result.params,
            result.total_found,
            result.contactable_count,
        )
        return result
