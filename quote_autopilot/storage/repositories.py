"""Repositories mapping invoices, companies, and quote requests onto a KeyValueStore."""
from __future__ import annotations

import json
import logging
from typing import List, Optional

from quote_autopilot.core.models import Company, Invoice, QuoteRequest
from quote_autopilot.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)

INVOICE_PREFIX = "invoice:"
COMPANY_PREFIX = "company:"
COMPANY_INDEX_KEY = "company:index"
COMPANY_CATEGORY_PREFIX = "company:category:"
QUOTE_PREFIX = "quote:"


def _dump(data: dict) -> str:
    return json.dumps(data, ensure_ascii=False)


class InvoiceRepository:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def save(self, invoice: Invoice) -> None:
        self.store.put(f"{INVOICE_PREFIX}{invoice.id}", _dump(invoice.to_dict()))
        logger.debug("Saved invoice %s", invoice.id)

    def find_by_id(self, invoice_id: str) -> Optional[Invoice]:
        raw = self.store.get(f"{INVOICE_PREFIX}{invoice_id}")
        return Invoice.from_dict(json.loads(raw)) if raw else None

    def find_all(self) -> List[Invoice]:
        invoices = []
        for key in self.store.list(INVOICE_PREFIX):
            invoice = self.find_by_id(key[len(INVOICE_PREFIX):])
            if invoice:
                invoices.append(invoice)
        return invoices

    def delete(self, invoice_id: str) -> None:
        self.store.delete(f"{INVOICE_PREFIX}{invoice_id}")


class CompanyRepository:
    """Company records plus two id indexes: all companies and per-category.

    Index updates are read-modify-write without locking, so two concurrent
    writers can drop each other's index entry.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def _read_index(self, key: str) -> List[str]:
        raw = self.store.get(key)
        return list(json.loads(raw)) if raw else []

    def _append_to_index(self, key: str, company_id: str) -> None:
        ids = self._read_index(key)
        if company_id not in ids:
            ids.append(company_id)
            self.store.put(key, json.dumps(ids))

    def _load_many(self, ids: List[str]) -> List[Company]:
        companies = []
        for company_id in ids:
            company = self.find_by_id(company_id)
            if company:
                companies.append(company)
        return companies

    def save(self, company: Company) -> None:
        self.store.put(f"{COMPANY_PREFIX}{company.id}", _dump(company.to_dict()))
        if company.industry:
            self._append_to_index(f"{COMPANY_CATEGORY_PREFIX}{company.industry}", company.id)
        self._append_to_index(COMPANY_INDEX_KEY, company.id)

    def find_by_id(self, company_id: str) -> Optional[Company]:
        raw = self.store.get(f"{COMPANY_PREFIX}{company_id}")
        return Company.from_dict(json.loads(raw)) if raw else None

    def find_all(self) -> List[Company]:
        return self._load_many(self._read_index(COMPANY_INDEX_KEY))

    def search_by_category(self, category: str) -> List[Company]:
        return self._load_many(self._read_index(f"{COMPANY_CATEGORY_PREFIX}{category}"))

    def search_by_name(self, name: str) -> List[Company]:
        return [company for company in self.find_all() if name in company.name]


class QuoteRequestRepository:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def save(self, request: QuoteRequest) -> None:
        self.store.put(f"{QUOTE_PREFIX}{request.id}", _dump(request.to_dict()))

    def find_by_id(self, request_id: str) -> Optional[QuoteRequest]:
        raw = self.store.get(f"{QUOTE_PREFIX}{request_id}")
        return QuoteRequest.from_dict(json.loads(raw)) if raw else None

    def find_all(self) -> List[QuoteRequest]:
        found = []
        for key in self.store.list(QUOTE_PREFIX):
            request = self.find_by_id(key[len(QUOTE_PREFIX):])
            if request:
                found.append(request)
        return found

    def find_by_invoice_id(self, invoice_id: str) -> List[QuoteRequest]:
        return [request for request in self.find_all() if request.invoice.id == invoice_id]

    def find_by_status(self, status: str) -> List[QuoteRequest]:
        return [request for request in self.find_all() if request.status == status]
