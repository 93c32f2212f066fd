"""Model-backed structured analysis of invoice and contract text."""
from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import requests

from quote_autopilot.core.models import CATEGORIES, CATEGORY_OTHER, DEFAULT_SERVICE, UNKNOWN_COMPANY
from quote_autopilot.core.utils import get_config_value, get_int_config, load_env_file

logger = logging.getLogger(__name__)

DEFAULT_SECRET_FILE = Path("secrets") / "ai.env"
DEFAULT_MODEL = "o4-mini"
DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MAX_TOKENS = 1200
DEFAULT_TIMEOUT_SECONDS = 30
TEMPERATURE = 0.1
_AI_ENV_LOADED = False

# A flat object followed by end of text or by a new line of prose.
_TRAILING_OBJECT = re.compile(r"\{[\s\S]*?\}(?=\s*$|\s*\n\s*\w)")
_ANY_OBJECT = re.compile(r"\{[\s\S]*?\}")

SYSTEM_PROMPT = (
    "業務委託・請求書の内容分析専門AIです。文書から見積もりに必要な業務詳細を"
    "論理的に抽出・分類します。"
)

PROMPT_TEMPLATE = """【分析タスク】請求書・契約書から見積もり用業務情報を抽出

**分析対象文書:**
---
{text}
---

**出力形式（JSONオブジェクトを1つだけ返してください）:**
{{
  "companyName": "企業名（発注者優先、不明の場合は受注者）",
  "businessCategory": "{categories}",
  "services": ["具体的サービス内容（技術スタック含む）"],
  "totalAmount": 金額数値,
  "projectScope": "プロジェクト範囲・成果物詳細",
  "timeline": "期間・スケジュール・納期",
  "requirements": ["技術要件・制約・条件"],
  "contactInfo": "連絡先情報（あれば）"
}}
"""


class ExtractionError(Exception):
    """Raised when the model could not be reached or its answer could not be read."""

    TRANSPORT = "transport"
    UNPARSEABLE = "unparseable"

    def __init__(self, kind: str, message: str = "") -> None:
        super().__init__(message or kind)
        self.kind = kind


@dataclass(frozen=True)
class AiAnalysis:
    company_name: str = UNKNOWN_COMPANY
    business_category: str = CATEGORY_OTHER
    services: List[str] = field(default_factory=lambda: [DEFAULT_SERVICE])
    total_amount: int = 0
    project_scope: str = ""
    timeline: str = ""
    requirements: List[str] = field(default_factory=list)
    contact_info: str = ""


def _ensure_ai_env() -> None:
    """Load AI credentials from a local secrets file once per process."""

    global _AI_ENV_LOADED
    if _AI_ENV_LOADED:
        return

    _AI_ENV_LOADED = True
    secret_location = os.getenv("AI_SECRET_FILE")
    path = Path(secret_location).expanduser() if secret_location else DEFAULT_SECRET_FILE
    load_env_file(path)


def _json_candidates(text: str) -> Iterator[str]:
    anchored = _TRAILING_OBJECT.search(text)
    if anchored:
        yield anchored.group(0)
    yield from reversed(_ANY_OBJECT.findall(text))
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        yield text[start : end + 1]


def parse_ai_response(text: str) -> Dict[str, Any]:
    """Locate and decode the JSON object embedded in a model answer.

    Models often wrap the object in prose or reasoning, so the object
    closest to the end of the text is preferred, then earlier objects, then
    the widest brace-delimited span (which handles nested objects).
    """

    for candidate in _json_candidates(text or ""):
        try:
            payload = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(payload, dict):
            return payload
    raise ExtractionError(ExtractionError.UNPARSEABLE, "no JSON object found in model response")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value.strip() if isinstance(value, str) else str(value)


def _as_amount(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        value = value.replace(",", "").replace("¥", "").replace("円", "").strip()
    try:
        amount = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    if amount != amount or amount in (float("inf"), float("-inf")):
        return 0
    return max(0, int(round(amount)))


def _as_text_list(value: Any) -> Optional[List[str]]:
    if not isinstance(value, list):
        return None
    return [_as_text(item) for item in value if _as_text(item)]


def normalize_analysis(payload: Dict[str, Any]) -> AiAnalysis:
    """Coerce a decoded model answer into an AiAnalysis; never rejects."""

    category = _as_text(payload.get("businessCategory"))
    if category not in CATEGORIES:
        category = CATEGORY_OTHER

    services = _as_text_list(payload.get("services"))
    requirements = _as_text_list(payload.get("requirements"))

    return AiAnalysis(
        company_name=_as_text(payload.get("companyName")) or UNKNOWN_COMPANY,
        business_category=category,
        services=services if services is not None else [DEFAULT_SERVICE],
        total_amount=_as_amount(payload.get("totalAmount")),
        project_scope=_as_text(payload.get("projectScope")),
        timeline=_as_text(payload.get("timeline")),
        requirements=requirements or [],
        contact_info=_as_text(payload.get("contactInfo")),
    )


class AiExtractor:
    """Thin client for an OpenAI-compatible chat completions endpoint."""

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        _ensure_ai_env()
        self.api_key = get_config_value("API_KEY")
        self.model = get_config_value("MODEL_NAME", DEFAULT_MODEL) or DEFAULT_MODEL
        self.base_url = get_config_value("AI_BASE_URL", DEFAULT_BASE_URL).rstrip("/")
        self.max_tokens = get_int_config("MAX_TOKENS", DEFAULT_MAX_TOKENS)
        self.timeout = get_int_config("AI_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
        self.disabled = get_config_value("AI_ANALYSIS_DISABLED", "0") == "1"
        self.session = session or (requests.Session() if self.api_key else None)

    def analyze(self, document_text: str) -> AiAnalysis:
        """Ask the model for a structured analysis of the document."""

        content = self._call_model(document_text)
        return normalize_analysis(parse_ai_response(content))

    def _call_model(self, document_text: str) -> str:
        if self.disabled:
            raise ExtractionError(ExtractionError.TRANSPORT, "AI analysis is disabled")
        if not self.api_key or self.session is None:
            raise ExtractionError(ExtractionError.TRANSPORT, "API_KEY is not configured")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": self._prompt(document_text)},
            ],
            "temperature": TEMPERATURE,
            "max_tokens": self.max_tokens,
        }

        try:
            response = self.session.post(
                f"{self.base_url}/chat/completions",
                headers={"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"},
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("AI request failed: %s", exc)
            raise ExtractionError(ExtractionError.TRANSPORT, str(exc)) from exc

        if not response.ok:
            logger.warning("AI endpoint returned HTTP %s", response.status_code)
            raise ExtractionError(ExtractionError.TRANSPORT, f"AI endpoint returned HTTP {response.status_code}")

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise ExtractionError(ExtractionError.UNPARSEABLE, "response has no message content") from exc
        if not isinstance(content, str) or not content.strip():
            raise ExtractionError(ExtractionError.UNPARSEABLE, "response has no message content")
        return content

    def _prompt(self, document_text: str) -> str:
        return PROMPT_TEMPLATE.format(text=document_text, categories="|".join(CATEGORIES))
