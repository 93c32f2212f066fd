"""Tests for the key-value stores, repositories, and demo seeding."""
import json

import pytest

from quote_autopilot.core.models import CATEGORY_IT, Company
from quote_autopilot.processing.invoices import invoice_from_text
from quote_autopilot.quotes.workflow import create_quote_request, mark_as_sent
from quote_autopilot.storage import (
    CompanyRepository,
    InMemoryKeyValueStore,
    InvoiceRepository,
    JsonFileKeyValueStore,
    QuoteRequestRepository,
    seed_companies,
)
from quote_autopilot.storage.seed import DEFAULT_COMPANIES


def test_in_memory_store_lists_by_prefix():
    store = InMemoryKeyValueStore()
    store.put("invoice:2", "b")
    store.put("invoice:1", "a")
    store.put("company:1", "c")

    assert store.list("invoice:") == ["invoice:1", "invoice:2"]

    store.delete("invoice:1")
    assert store.get("invoice:1") is None
    store.delete("invoice:1")


def test_json_file_store_persists_between_instances(tmp_path):
    path = tmp_path / "data" / "store.json"
    JsonFileKeyValueStore(path).put("invoice:1", "payload")

    reopened = JsonFileKeyValueStore(path)

    assert reopened.get("invoice:1") == "payload"
    assert json.loads(path.read_text(encoding="utf-8")) == {"invoice:1": "payload"}


def test_json_file_store_rejects_non_object(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(ValueError):
        JsonFileKeyValueStore(path)


def test_invoice_repository_round_trip(invoice_repository):
    invoice = invoice_from_text("web.pdf", "株式会社Foo 合計 ¥300,000円 Web開発")

    invoice_repository.save(invoice)

    assert invoice_repository.find_by_id(invoice.id) == invoice
    assert invoice_repository.find_all() == [invoice]
    invoice_repository.delete(invoice.id)
    assert invoice_repository.find_by_id(invoice.id) is None


def test_company_indexes_append_only_once(store, company_repository):
    company = Company(id="x1", name="Xテック株式会社", email="sales@x.example", industry=CATEGORY_IT)

    company_repository.save(company)
    company_repository.save(company)

    assert json.loads(store.get("company:index")) == ["x1"]
    assert json.loads(store.get(f"company:category:{CATEGORY_IT}")) == ["x1"]
    assert company_repository.search_by_category(CATEGORY_IT) == [company]


def test_company_without_industry_skips_category_index(store, company_repository):
    company_repository.save(Company(id="x2", name="No Industry"))

    assert store.list("company:category:") == []
    assert [company.id for company in company_repository.find_all()] == ["x2"]


def test_company_round_trip_keeps_contact_form(company_repository):
    company = DEFAULT_COMPANIES[2]

    company_repository.save(company)

    assert company_repository.find_by_id(company.id) == company


def test_seed_only_populates_empty_directory(company_repository):
    assert seed_companies(company_repository) == len(DEFAULT_COMPANIES)
    assert seed_companies(company_repository) == 0
    assert len(company_repository.find_all()) == 8


def test_quote_request_repository_queries(store):
    repository = QuoteRequestRepository(store)
    invoice = invoice_from_text("web.pdf", "Web開発")
    first = create_quote_request(invoice, DEFAULT_COMPANIES[0])
    second = mark_as_sent(create_quote_request(invoice, DEFAULT_COMPANIES[1]))
    repository.save(first)
    repository.save(second)

    assert repository.find_by_id(second.id) == second
    assert {request.id for request in repository.find_by_invoice_id(invoice.id)} == {first.id, second.id}
    assert [request.id for request in repository.find_by_status("sent")] == [second.id]
    assert repository.find_by_invoice_id("other") == []


def test_repositories_share_one_store(store):
    invoices = InvoiceRepository(store)
    companies = CompanyRepository(store)
    companies.save(DEFAULT_COMPANIES[0])
    invoices.save(invoice_from_text("a.pdf", "Web開発"))

    assert len(invoices.find_all()) == 1
    assert len(companies.find_all()) == 1
