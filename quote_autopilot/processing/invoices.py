"""Build Invoice entities from AI analyses or from the heuristic fallback."""
from __future__ import annotations

import logging
import uuid
from typing import Optional

from quote_autopilot.core.models import DEFAULT_SERVICE, UNKNOWN_COMPANY, Invoice
from quote_autopilot.processing import heuristics
from quote_autopilot.processing.ai import AiAnalysis
from quote_autopilot.processing.classifier import classify
from quote_autopilot.processing.orchestrator import ExtractionOutcome

logger = logging.getLogger(__name__)

NO_DETAIL_SCOPE = "詳細な分析情報なし"
UNKNOWN_TIMELINE = "不明"


def generate_id() -> str:
    return uuid.uuid4().hex


def invoice_from_ai_analysis(file_name: str, extracted_text: str, analysis: AiAnalysis) -> Invoice:
    """Trust the model's fields; only an empty category is re-derived locally."""

    category = analysis.business_category or classify(extracted_text, analysis.services)
    return Invoice(
        id=generate_id(),
        file_name=file_name,
        extracted_text=extracted_text,
        company_name=analysis.company_name or UNKNOWN_COMPANY,
        business_category=category,
        services=list(analysis.services),
        total_amount=analysis.total_amount,
        project_scope=analysis.project_scope,
        timeline=analysis.timeline,
        requirements=list(analysis.requirements),
        contact_info=analysis.contact_info,
    )


def invoice_from_text(
    file_name: str,
    extracted_text: str,
    *,
    project_scope: str = NO_DETAIL_SCOPE,
    analysed_text: Optional[str] = None,
) -> Invoice:
    """Build an invoice with the deterministic heuristics only.

    ``analysed_text`` lets callers store one text while running the
    heuristics over another (used when the stored text is a fallback note).
    """

    result = heuristics.extract(extracted_text if analysed_text is None else analysed_text, file_name)
    return Invoice(
        id=generate_id(),
        file_name=file_name,
        extracted_text=extracted_text,
        company_name=result.company_name,
        business_category=result.business_category,
        services=result.services or [DEFAULT_SERVICE],
        total_amount=result.total_amount,
        project_scope=project_scope,
        timeline=UNKNOWN_TIMELINE,
        requirements=[],
        contact_info=result.contact_info.as_text(),
    )


def _fallback_note(file_name: str, reason: Optional[str]) -> str:
    lines = [
        "【フォールバック分析データ】",
        f"ファイル名: {file_name}",
        "※AI分析が利用できないため、ファイル名からの限定的な推測データです。",
    ]
    if reason:
        lines.append(f"理由: {reason}")
    return "\n".join(lines)


def create_invoice(file_name: str, outcome: ExtractionOutcome) -> Invoice:
    """Turn an extraction outcome into an invoice; degraded outcomes use the heuristics."""

    if outcome.success:
        analysis = AiAnalysis(
            company_name=outcome.company_name,
            business_category=outcome.business_category,
            services=list(outcome.services),
            total_amount=outcome.total_amount,
            project_scope=outcome.project_scope or "",
            timeline=outcome.timeline or "",
            requirements=list(outcome.requirements),
            contact_info=outcome.contact_info or "",
        )
        return invoice_from_ai_analysis(file_name, outcome.extracted_text, analysis)

    logger.warning("Falling back to heuristic extraction for %s: %s", file_name, outcome.error)
    scope = f"{NO_DETAIL_SCOPE}（AI分析不可: {outcome.error}）" if outcome.error else NO_DETAIL_SCOPE
    if outcome.extracted_text.strip():
        return invoice_from_text(file_name, outcome.extracted_text, project_scope=scope)

    return invoice_from_text(
        file_name,
        _fallback_note(file_name, outcome.error),
        project_scope=scope,
        analysed_text="",
    )
