"""Deterministic, network-free extraction of business fields from invoice text.

Every helper here is total: for any string (including empty or binary
garbage) it returns a default instead of raising, so the upload path always
has something to build an invoice from.
"""
from __future__ import annotations

import logging
import math
import re
import unicodedata
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import List, Optional

from quote_autopilot.core.models import UNKNOWN_COMPANY
from quote_autopilot.core.utils import unique
from quote_autopilot.processing.classifier import classify

logger = logging.getLogger(__name__)

MAX_COMPANY_NAME_LENGTH = 50
MIN_PLAUSIBLE_AMOUNT = 1_000
MAX_PLAUSIBLE_AMOUNT = 10_000_000_000
MAN_UNIT = 10_000

_JP_ENTITY = r"(?:株式会社|有限会社|合同会社|合資会社|一般社団法人|一般財団法人)"
_EN_ENTITY = r"(?:Inc|Ltd|Co|Corp|Corporation)\b\.?"
_NAME_TOKEN = r"([^\s。、,，:：]{1,20})"

COMPANY_PATTERNS = (
    re.compile(_NAME_TOKEN + r"[ \t]*" + _JP_ENTITY),
    re.compile(_JP_ENTITY + r"[ \t]*" + _NAME_TOKEN),
    re.compile(r"([A-Za-z0-9&][A-Za-z0-9&'\-]{0,30})[ \t]+" + _EN_ENTITY),
    re.compile(r"請求書?\s*発行者?[:：][ \t]*([^\n\r]{1,30})"),
    re.compile(r"発行者?[:：][ \t]*([^\n\r]{1,30})"),
    re.compile(r"会社名[:：][ \t]*([^\n\r]{1,30})"),
    re.compile(r"(?:\bTO\b|\bFROM\b|宛先)[ \t]*[:：][ \t]*([^\n\r]{1,30})", re.IGNORECASE),
)

LABEL_NOISE = re.compile(
    r"(?:株式会社|有限会社|合同会社|合資会社|請求書|発行者|宛先|代表取締役|代表者|担当者|御中|様)[:：\s]*"
)
POSTCODE = re.compile(r"^(?:〒|\d{3}-\d{4})")

FILENAME_NOISE = re.compile(r"請求書|invoice|見積|estimate|契約|contract", re.IGNORECASE)
FILENAME_DATES = re.compile(r"\d{4}[/_\-]?\d{1,2}[/_\-]?\d{1,2}|\d{1,2}[/_\-]?\d{1,2}[/_\-]?\d{4}")

# Canonical labels, matched case-insensitively. Overlapping labels are all
# reported ("UI/UXデザイン" also yields "デザイン").
SERVICE_KEYWORDS = (
    "システム開発", "Web開発", "Webアプリケーション開発", "アプリ開発", "モバイルアプリ開発",
    "ソフトウェア開発", "フロントエンド開発", "バックエンド開発", "API開発", "管理画面開発",
    "デザイン", "UI/UXデザイン", "ロゴデザイン", "グラフィックデザイン", "Webデザイン",
    "コンサルティング", "ITコンサルティング", "戦略コンサルティング", "経営コンサルティング",
    "マーケティング", "デジタルマーケティング", "SNS運用", "SEO対策", "広告運用",
    "ホームページ制作", "動画制作", "コンテンツ制作", "資料制作",
    "データベース設計", "システム設計", "インフラ設計",
    "システム運用", "サーバー運用", "保守", "テスト", "品質管理",
    "施工", "建設", "製造",
)

# Group 1 is the number; group 2, when present and non-empty, is a 万 marker.
_AMOUNT = r"([0-9][0-9,]*(?:\.[0-9]+)?)\s*(万)?"
AMOUNT_PATTERNS = (
    re.compile(r"合計(?:金額)?[:\s]*¥?\s*" + _AMOUNT),
    re.compile(r"総額[:\s]*¥?\s*" + _AMOUNT),
    re.compile(r"請求(?:金)?額[:\s]*¥?\s*" + _AMOUNT),
    re.compile(r"金額[:\s]*¥?\s*" + _AMOUNT),
    re.compile(r"¥\s*" + _AMOUNT),
    re.compile(r"([0-9][0-9,]*(?:\.[0-9]+)?)\s*(万)円"),
    re.compile(r"([0-9][0-9,]*)\s*円"),
)

DATE_PATTERNS = (
    re.compile(r"\d{4}[年/\-]\d{1,2}[月/\-]\d{1,2}日?"),
    re.compile(r"\d{1,2}[月/\-]\d{1,2}[日/\-]\d{4}"),
    re.compile(r"\d{4}/\d{1,2}/\d{1,2}"),
)

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_PATTERN = re.compile(r"(?:\+81[-\s]?|0)\d{1,4}[-\s]?\d{1,4}[-\s]?\d{4}")
URL_PATTERN = re.compile(r"https?://[^\s]+")


@dataclass(frozen=True)
class ContactDetails:
    emails: List[str] = field(default_factory=list)
    phones: List[str] = field(default_factory=list)
    urls: List[str] = field(default_factory=list)

    def as_text(self) -> str:
        """Render the details as the free-text contact line stored on invoices."""

        parts = [*self.emails, *self.phones, *self.urls]
        return " / ".join(parts)


@dataclass(frozen=True)
class HeuristicResult:
    """Everything the heuristic path can recover from a document."""

    company_name: str
    services: List[str] = field(default_factory=list)
    total_amount: int = 0
    dates: List[str] = field(default_factory=list)
    contact_info: ContactDetails = field(default_factory=ContactDetails)
    business_category: str = ""


def _clean_company_candidate(raw: str) -> str:
    cleaned = LABEL_NOISE.sub("", raw).strip(" \t:：-・")
    if POSTCODE.match(cleaned):
        return ""
    return cleaned


def company_name_from_file_name(file_name: Optional[str]) -> str:
    """Guess a company name from an upload's file name, or return ''."""

    if not file_name:
        return ""
    stem = PurePath(file_name).stem if "." in file_name else file_name
    cleaned = FILENAME_NOISE.sub("", stem)
    cleaned = FILENAME_DATES.sub("", cleaned)
    cleaned = re.sub(r"[_\-\s]+", " ", cleaned)
    return cleaned.strip()


def extract_company_name(text: str, file_name: Optional[str] = None) -> str:
    """Find the issuing company near a legal-entity suffix, a label, or in the file name."""

    for pattern in COMPANY_PATTERNS:
        for match in pattern.finditer(text or ""):
            candidate = _clean_company_candidate(match.group(1))
            if 0 < len(candidate) <= MAX_COMPANY_NAME_LENGTH:
                return candidate

    from_file = company_name_from_file_name(file_name)
    if 0 < len(from_file) <= MAX_COMPANY_NAME_LENGTH:
        return from_file
    return UNKNOWN_COMPANY


def extract_services(text: str) -> List[str]:
    lowered = (text or "").lower()
    return unique(label for label in SERVICE_KEYWORDS if label.lower() in lowered)


def _parse_amount(raw: str, multiplier: int) -> Optional[int]:
    digits = raw.replace(",", "")
    try:
        value = float(digits) if "." in digits else int(digits)
        # Very long digit runs parse to inf, or overflow float conversion.
        if not math.isfinite(value):
            return None
        return int(round(value * multiplier))
    except (ValueError, OverflowError):
        return None


def extract_amount(text: str) -> int:
    """Return the first plausible yen amount, preferring labelled totals; 0 if none."""

    normalized = unicodedata.normalize("NFKC", text or "")
    for pattern in AMOUNT_PATTERNS:
        for match in pattern.finditer(normalized):
            scaled = pattern.groups > 1 and match.group(2)
            amount = _parse_amount(match.group(1), MAN_UNIT if scaled else 1)
            if amount is not None and MIN_PLAUSIBLE_AMOUNT <= amount <= MAX_PLAUSIBLE_AMOUNT:
                return amount
    return 0


def extract_dates(text: str) -> List[str]:
    found: List[str] = []
    for pattern in DATE_PATTERNS:
        found.extend(pattern.findall(text or ""))
    return unique(found)


def extract_contact_info(text: str) -> ContactDetails:
    text = text or ""
    return ContactDetails(
        emails=unique(EMAIL_PATTERN.findall(text)),
        phones=unique(PHONE_PATTERN.findall(text)),
        urls=unique(URL_PATTERN.findall(text)),
    )


def extract(text: str, file_name: Optional[str] = None) -> HeuristicResult:
    """Run every heuristic over the document text and classify the result."""

    text = text if isinstance(text, str) else ""
    services = extract_services(text)
    result = HeuristicResult(
        company_name=extract_company_name(text, file_name),
        services=services,
        total_amount=extract_amount(text),
        dates=extract_dates(text),
        contact_info=extract_contact_info(text),
        business_category=classify(text, services),
    )
    logger.debug(
        "Heuristic extraction: company=%s services=%d amount=%d",
        result.company_name,
        len(result.services),
        result.total_amount,
    )
    return result
