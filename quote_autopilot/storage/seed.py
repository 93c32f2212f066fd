"""Demo company directory used to populate an empty store."""
from __future__ import annotations

import logging
from typing import Iterable, Tuple

from quote_autopilot.core.models import (
    CATEGORY_CONSULTING,
    CATEGORY_DESIGN,
    CATEGORY_IT,
    CATEGORY_MARKETING,
    CATEGORY_OTHER,
    Company,
    ContactForm,
    FormField,
)
from quote_autopilot.storage.repositories import CompanyRepository

logger = logging.getLogger(__name__)


def _form(url: str, fields: Iterable[Tuple[str, str, bool]], is_quote_form: bool) -> ContactForm:
    return ContactForm(
        url=url,
        fields=[FormField(name=name, type=kind, required=required) for name, kind, required in fields],
        is_quote_form=is_quote_form,
    )


DEFAULT_COMPANIES = (
    Company(
        id="comp1",
        name="テックソリューション株式会社",
        website="https://techsolution.example.com",
        email="sales@techsolution.example.com",
        contact_form=_form(
            "https://techsolution.example.com/contact",
            [("name", "text", True), ("email", "email", True), ("message", "textarea", True)],
            is_quote_form=False,
        ),
        industry=CATEGORY_IT,
        description="Webアプリケーション開発を専門とする企業",
    ),
    Company(
        id="comp2",
        name="株式会社デザインスタジオ",
        website="https://design-studio.example.com",
        email="info@design-studio.example.com",
        industry=CATEGORY_DESIGN,
        description="UI/UXデザイン、ブランディングを手がける",
    ),
    Company(
        id="comp3",
        name="マーケティングプラス株式会社",
        website="https://marketing-plus.example.com",
        email="contact@marketing-plus.example.com",
        contact_form=_form(
            "https://marketing-plus.example.com/quote",
            [("company", "text", True), ("budget", "number", True), ("description", "textarea", True)],
            is_quote_form=True,
        ),
        industry=CATEGORY_MARKETING,
        description="デジタルマーケティング、SNS運用",
    ),
    Company(
        id="comp4",
        name="総合ビジネスサポート株式会社",
        website="https://business-support.example.com",
        email="inquiry@business-support.example.com",
        contact_form=_form(
            "https://business-support.example.com/contact",
            [
                ("name", "text", True),
                ("company", "text", True),
                ("phone", "tel", False),
                ("email", "email", True),
                ("service_type", "select", True),
                ("description", "textarea", True),
            ],
            is_quote_form=True,
        ),
        industry=CATEGORY_OTHER,
        description="様々な業務に対応する総合ビジネスサポート企業",
    ),
    Company(
        id="comp5",
        name="株式会社オールインワン",
        website="https://allinone.example.com",
        email="sales@allinone.example.com",
        industry=CATEGORY_OTHER,
        description="イベント運営、メディア制作、コンサルティングなど幅広く対応",
    ),
    Company(
        id="comp6",
        name="プロフェッショナル・サービス合同会社",
        website="https://pro-service.example.com",
        email="contact@pro-service.example.com",
        contact_form=_form(
            "https://pro-service.example.com/estimate",
            [
                ("project_type", "select", True),
                ("timeline", "text", True),
                ("budget_range", "select", True),
                ("details", "textarea", True),
            ],
            is_quote_form=True,
        ),
        industry=CATEGORY_OTHER,
        description="専門性を活かした各種サービス提供",
    ),
    Company(
        id="comp7",
        name="株式会社コンサルティングワークス",
        website="https://consulting-works.example.com",
        email="hello@consulting-works.example.com",
        industry=CATEGORY_CONSULTING,
        description="経営・財務・人事コンサルティング専門",
    ),
    Company(
        id="comp8",
        name="メディア・クリエイト株式会社",
        website="https://media-create.example.com",
        email="info@media-create.example.com",
        contact_form=_form(
            "https://media-create.example.com/quote-form",
            [
                ("media_type", "select", True),
                ("duration", "text", True),
                ("target_audience", "text", False),
                ("description", "textarea", True),
            ],
            is_quote_form=True,
        ),
        industry=CATEGORY_OTHER,
        description="動画制作、SNS運営、イベント企画・運営",
    ),
)


def seed_companies(repository: CompanyRepository, companies: Iterable[Company] = DEFAULT_COMPANIES) -> int:
    """Save the demo directory unless the store already knows some company.

    Returns the number of companies written.
    """

    if repository.find_all():
        logger.info("Company directory already populated; skipping seed")
        return 0

    count = 0
    for company in companies:
        repository.save(company)
        count += 1
    logger.info("Seeded %d companies", count)
    return count
