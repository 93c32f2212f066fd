"""Keyword-bucket business category classifier shared by both extraction paths."""
from __future__ import annotations

from typing import Iterable, Tuple

from quote_autopilot.core.models import (
    CATEGORY_CONSTRUCTION,
    CATEGORY_CONSULTING,
    CATEGORY_DESIGN,
    CATEGORY_IT,
    CATEGORY_MANUFACTURING,
    CATEGORY_MARKETING,
    CATEGORY_OTHER,
)

# Order matters: the first category with any hit wins, and keywords are
# tried in the order listed. Keywords are compared as written against the
# lower-cased text, so upper-case entries such as "IT" or "UI" never match.
CATEGORY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (
        CATEGORY_IT,
        (
            "システム", "アプリ", "web", "api", "データベース", "サーバー",
            "プログラム", "コーディング", "開発", "エンジニア", "IT",
            "react", "vue", "angular", "javascript", "typescript", "python", "java",
        ),
    ),
    (
        CATEGORY_DESIGN,
        (
            "デザイン", "UI", "UX", "ロゴ", "ブランド", "グラフィック",
            "イラスト", "動画", "映像", "クリエイティブ", "アート",
        ),
    ),
    (
        CATEGORY_MARKETING,
        (
            "マーケティング", "広告", "SEO", "SEM", "SNS", "プロモーション",
            "宣伝", "PR", "ブランディング", "キャンペーン",
        ),
    ),
    (
        CATEGORY_CONSULTING,
        (
            "コンサル", "戦略", "経営", "業務改善", "DX", "組織", "人事",
            "財務", "会計", "プロセス", "最適化",
        ),
    ),
    (CATEGORY_MANUFACTURING, ("製造", "生産", "工場", "品質", "製品", "部品", "組立")),
    (CATEGORY_CONSTRUCTION, ("建設", "工事", "施工", "設計", "建築", "土木", "リフォーム")),
)


def classify(text: str, services: Iterable[str] = ()) -> str:
    """Return the first category whose keyword appears in the text or services."""

    haystack = f"{text or ''} {' '.join(services or ())}".lower()
    for category, keywords in CATEGORY_KEYWORDS:
        for keyword in keywords:
            if keyword in haystack:
                return category
    return CATEGORY_OTHER
