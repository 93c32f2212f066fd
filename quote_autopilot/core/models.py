"""Data models for invoices, candidate companies, and quote requests."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

CATEGORY_IT = "IT・システム開発"
CATEGORY_DESIGN = "デザイン・クリエイティブ"
CATEGORY_MARKETING = "マーケティング・広告"
CATEGORY_CONSULTING = "コンサルティング"
CATEGORY_MANUFACTURING = "製造・生産"
CATEGORY_CONSTRUCTION = "建設・工事"
CATEGORY_OTHER = "その他"

CATEGORIES = (
    CATEGORY_IT,
    CATEGORY_DESIGN,
    CATEGORY_MARKETING,
    CATEGORY_CONSULTING,
    CATEGORY_MANUFACTURING,
    CATEGORY_CONSTRUCTION,
    CATEGORY_OTHER,
)

DEFAULT_SERVICE = "一般業務"
UNKNOWN_COMPANY = "不明"

PRIORITY_HIGH = "high"
PRIORITY_MEDIUM = "medium"
PRIORITY_LOW = "low"

QUOTE_STATUSES = ("pending", "sent", "responded", "failed")
RESPONSE_TYPES = ("quote", "rejection", "request_more_info", "error")

TECH_KEYWORDS = (
    "React", "Vue", "Angular", "JavaScript", "TypeScript", "Node.js",
    "Python", "Java", "PHP", "Ruby", "Go", "Rust",
    "AWS", "Azure", "GCP", "Docker", "Kubernetes",
    "API", "REST", "GraphQL", "データベース", "MySQL", "PostgreSQL",
    "AI", "機械学習", "データ分析", "BI", "DX",
    "UI", "UX", "デザイン", "ブランディング",
    "マーケティング", "SEO", "SEM", "SNS", "広告",
    "コンサルティング", "業務改善", "プロセス",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_datetime(raw: Optional[str]) -> Optional[datetime]:
    if not raw:
        return None
    return datetime.fromisoformat(raw)


def _format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class QuoteSummary:
    """What a candidate company needs to know to prepare a quote."""

    business_category: str
    services: List[str] = field(default_factory=list)
    estimated_amount: Optional[int] = None
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuoteSummary":
        return cls(
            business_category=data.get("business_category") or CATEGORY_OTHER,
            services=list(data.get("services") or []),
            estimated_amount=data.get("estimated_amount"),
            description=data.get("description") or "",
        )


@dataclass(frozen=True)
class Invoice:
    """One uploaded document and the business information derived from it."""

    id: str
    file_name: str
    extracted_text: str
    company_name: str
    business_category: Optional[str] = None
    services: List[str] = field(default_factory=list)
    total_amount: int = 0
    uploaded_at: datetime = field(default_factory=_utcnow)
    project_scope: Optional[str] = None
    timeline: Optional[str] = None
    requirements: List[str] = field(default_factory=list)
    contact_info: Optional[str] = None

    def __post_init__(self) -> None:
        if self.total_amount is None or self.total_amount < 0:
            raise ValueError(f"total_amount must be non-negative, got {self.total_amount!r}")
        if self.services is None:
            object.__setattr__(self, "services", [])
        if self.requirements is None:
            object.__setattr__(self, "requirements", [])

    def detailed_business_info(self) -> Dict[str, Any]:
        """Summarize the fields that matter when asking for a comparable quote."""

        return {
            "category": self.business_category or CATEGORY_OTHER,
            "services": list(self.services),
            "scope": self.project_scope or "スコープ情報なし",
            "requirements": list(self.requirements),
            "estimated_budget": self.total_amount,
        }

    def matching_keywords(self) -> List[str]:
        """Collect keywords from services, requirements, and the project scope."""

        keywords: List[str] = [*self.services, *self.requirements]
        if self.project_scope:
            lowered = self.project_scope.lower()
            keywords.extend(keyword for keyword in TECH_KEYWORDS if keyword.lower() in lowered)
        return list(dict.fromkeys(keywords))

    def quote_summary(self) -> QuoteSummary:
        services_text = "、".join(self.services) if self.services else DEFAULT_SERVICE
        description = self.project_scope or f"{self.company_name}向け {services_text}"
        return QuoteSummary(
            business_category=self.business_category or CATEGORY_OTHER,
            services=list(self.services),
            estimated_amount=self.total_amount or None,
            description=description,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["uploaded_at"] = _format_datetime(self.uploaded_at)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Invoice":
        return cls(
            id=data["id"],
            file_name=data.get("file_name") or "",
            extracted_text=data.get("extracted_text") or "",
            company_name=data.get("company_name") or UNKNOWN_COMPANY,
            business_category=data.get("business_category"),
            services=list(data.get("services") or []),
            total_amount=int(data.get("total_amount") or 0),
            uploaded_at=_parse_datetime(data.get("uploaded_at")) or _utcnow(),
            project_scope=data.get("project_scope"),
            timeline=data.get("timeline"),
            requirements=list(data.get("requirements") or []),
            contact_info=data.get("contact_info"),
        )


@dataclass(frozen=True)
class FormField:
    name: str
    type: str
    required: bool = False
    placeholder: Optional[str] = None


@dataclass(frozen=True)
class ContactForm:
    """A web contact form published by a company."""

    url: str
    fields: List[FormField] = field(default_factory=list)
    is_quote_form: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContactForm":
        return cls(
            url=data["url"],
            fields=[FormField(**item) for item in data.get("fields") or []],
            is_quote_form=bool(data.get("is_quote_form")),
        )


@dataclass(frozen=True)
class Company:
    """A candidate quote recipient and its published contact channels."""

    id: str
    name: str
    website: Optional[str] = None
    email: Optional[str] = None
    contact_form: Optional[ContactForm] = None
    industry: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["contact_form"] = self.contact_form.to_dict() if self.contact_form else None
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Company":
        form = data.get("contact_form")
        return cls(
            id=data["id"],
            name=data["name"],
            website=data.get("website"),
            email=data.get("email"),
            contact_form=ContactForm.from_dict(form) if form else None,
            industry=data.get("industry"),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class ContactMethod:
    """A derived way of reaching a company; recomputed on every query."""

    type: str
    priority: str
    address: Optional[str] = None
    form: Optional[ContactForm] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "priority": self.priority,
            "address": self.address,
            "form": self.form.to_dict() if self.form else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContactMethod":
        form = data.get("form")
        return cls(
            type=data["type"],
            priority=data["priority"],
            address=data.get("address"),
            form=ContactForm.from_dict(form) if form else None,
        )


@dataclass(frozen=True)
class QuoteResponse:
    type: str
    content: str
    amount: Optional[int] = None
    deadline: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["deadline"] = _format_datetime(self.deadline)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuoteResponse":
        return cls(
            type=data["type"],
            content=data.get("content") or "",
            amount=data.get("amount"),
            deadline=_parse_datetime(data.get("deadline")),
        )


@dataclass(frozen=True)
class QuoteRequest:
    """One outreach attempt linking an invoice to a target company.

    Instances are snapshots: the transition helpers in
    ``quote_autopilot.quotes.workflow`` return new objects.
    """

    id: str
    invoice: Invoice
    target_company: Company
    contact_method: ContactMethod
    summary: QuoteSummary
    status: str = "pending"
    sent_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None
    response: Optional[QuoteResponse] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "invoice": self.invoice.to_dict(),
            "target_company": self.target_company.to_dict(),
            "contact_method": self.contact_method.to_dict(),
            "summary": self.summary.to_dict(),
            "status": self.status,
            "sent_at": _format_datetime(self.sent_at),
            "responded_at": _format_datetime(self.responded_at),
            "response": self.response.to_dict() if self.response else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuoteRequest":
        response = data.get("response")
        return cls(
            id=data["id"],
            invoice=Invoice.from_dict(data["invoice"]),
            target_company=Company.from_dict(data["target_company"]),
            contact_method=ContactMethod.from_dict(data["contact_method"]),
            summary=QuoteSummary.from_dict(data["summary"]),
            status=data.get("status") or "pending",
            sent_at=_parse_datetime(data.get("sent_at")),
            responded_at=_parse_datetime(data.get("responded_at")),
            response=QuoteResponse.from_dict(response) if response else None,
        )
