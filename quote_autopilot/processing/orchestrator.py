"""Runs text extraction and AI analysis, turning every failure into a degraded outcome."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from quote_autopilot.core.models import CATEGORY_OTHER
from quote_autopilot.ingestion.files import UploadedFile
from quote_autopilot.ingestion.text import TextExtractionError, extract_text
from quote_autopilot.processing.ai import AiAnalysis, AiExtractor, ExtractionError

logger = logging.getLogger(__name__)

TextExtractor = Callable[[UploadedFile], str]


@dataclass(frozen=True)
class ExtractionOutcome:
    """Result of analysing one document.

    ``success`` distinguishes the two shapes: a successful outcome carries the
    model's structured fields, a degraded one carries ``error`` and whatever
    text was recovered before the failure.
    """

    success: bool
    extracted_text: str = ""
    company_name: str = ""
    business_category: str = CATEGORY_OTHER
    services: List[str] = field(default_factory=list)
    total_amount: int = 0
    project_scope: Optional[str] = None
    timeline: Optional[str] = None
    requirements: List[str] = field(default_factory=list)
    contact_info: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def succeeded(cls, text: str, analysis: AiAnalysis) -> "ExtractionOutcome":
        return cls(
            success=True,
            extracted_text=text,
            company_name=analysis.company_name,
            business_category=analysis.business_category,
            services=list(analysis.services),
            total_amount=analysis.total_amount,
            project_scope=analysis.project_scope,
            timeline=analysis.timeline,
            requirements=list(analysis.requirements),
            contact_info=analysis.contact_info,
        )

    @classmethod
    def degraded(cls, text: str, reason: str) -> "ExtractionOutcome":
        return cls(success=False, extracted_text=text or "", error=reason or "analysis failed")


def analyze_document(
    file: UploadedFile,
    *,
    text_extractor: Optional[TextExtractor] = None,
    ai_extractor: Optional[AiExtractor] = None,
) -> ExtractionOutcome:
    """Extract text from ``file`` and ask the model to structure it. Never raises."""

    text = ""
    try:
        text = (text_extractor or extract_text)(file) or ""
        if not text.strip():
            logger.warning("No text extracted from %s; skipping AI analysis", file.file_name)
            return ExtractionOutcome.degraded(text, "no text could be extracted")

        analysis = (ai_extractor or AiExtractor()).analyze(text)
    except Exception as exc:
        if isinstance(exc, (ExtractionError, TextExtractionError)):
            logger.warning("Analysis of %s degraded: %s", file.file_name, exc)
        else:
            logger.exception("Unexpected error while analysing %s", file.file_name)
        return ExtractionOutcome.degraded(text, str(exc))

    logger.info("AI analysis succeeded for %s", file.file_name)
    return ExtractionOutcome.succeeded(text, analysis)
