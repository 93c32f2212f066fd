"""Tests for building invoices from AI analyses and degraded outcomes."""
from quote_autopilot.core.models import CATEGORY_DESIGN, CATEGORY_IT, CATEGORY_OTHER
from quote_autopilot.processing.ai import AiAnalysis
from quote_autopilot.processing.invoices import (
    create_invoice,
    generate_id,
    invoice_from_ai_analysis,
    invoice_from_text,
)
from quote_autopilot.processing.orchestrator import ExtractionOutcome


def test_successful_outcome_uses_model_fields():
    analysis = AiAnalysis(
        company_name="株式会社Foo",
        business_category=CATEGORY_DESIGN,
        services=["ロゴデザイン"],
        total_amount=250000,
        project_scope="ロゴ一式",
        timeline="1ヶ月",
        requirements=["AI形式で納品"],
        contact_info="info@foo.jp",
    )
    outcome = ExtractionOutcome.succeeded("本文", analysis)

    invoice = create_invoice("foo.pdf", outcome)

    assert invoice.file_name == "foo.pdf"
    assert invoice.company_name == "株式会社Foo"
    assert invoice.business_category == CATEGORY_DESIGN
    assert invoice.services == ["ロゴデザイン"]
    assert invoice.total_amount == 250000
    assert invoice.timeline == "1ヶ月"
    assert invoice.requirements == ["AI形式で納品"]


def test_empty_ai_category_is_classified_locally():
    analysis = AiAnalysis(business_category="", services=["システム開発"])

    invoice = invoice_from_ai_analysis("a.pdf", "システム開発の請求", analysis)

    assert invoice.business_category == CATEGORY_IT


def test_degraded_outcome_runs_heuristics_over_text():
    outcome = ExtractionOutcome.degraded("株式会社Foo 合計 ¥300,000円 Web開発", "AI analysis is disabled")

    invoice = create_invoice("foo.pdf", outcome)

    assert invoice.company_name == "Foo"
    assert invoice.total_amount == 300000
    assert invoice.services == ["Web開発"]
    assert invoice.business_category == CATEGORY_IT
    assert invoice.timeline == "不明"
    assert invoice.project_scope.startswith("詳細な分析情報なし")
    assert invoice.extracted_text == "株式会社Foo 合計 ¥300,000円 Web開発"


def test_degraded_outcome_without_text_uses_file_name():
    outcome = ExtractionOutcome.degraded("", "no text could be extracted")

    invoice = create_invoice("請求書_サンプル商事.pdf", outcome)

    assert invoice.company_name == "サンプル商事"
    assert invoice.services == ["一般業務"]
    assert invoice.total_amount == 0
    assert invoice.business_category == CATEGORY_OTHER
    assert "請求書_サンプル商事.pdf" in invoice.extracted_text
    assert "フォールバック" in invoice.extracted_text


def test_heuristic_invoice_defaults():
    invoice = invoice_from_text("memo.pdf", "連絡先 info@foo.jp")

    assert invoice.project_scope == "詳細な分析情報なし"
    assert invoice.services == ["一般業務"]
    assert invoice.contact_info == "info@foo.jp"
    assert invoice.requirements == []


def test_generated_ids_are_unique():
    assert len({generate_id() for _ in range(50)}) == 50
