"""Key-value persistence for invoices, companies, and quote requests."""
from quote_autopilot.storage.kv import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore
from quote_autopilot.storage.repositories import CompanyRepository, InvoiceRepository, QuoteRequestRepository
from quote_autopilot.storage.seed import DEFAULT_COMPANIES, seed_companies

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "CompanyRepository",
    "InvoiceRepository",
    "QuoteRequestRepository",
    "DEFAULT_COMPANIES",
    "seed_companies",
]
