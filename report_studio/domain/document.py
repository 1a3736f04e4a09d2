"""
Document domain models - the report + invoice aggregate

Represents everything an operator fills in for one monthly audit report:
    - Meta / Summary / Roadmap singletons
    - Threat statistics (pie chart input) and resource statistics (bar charts)
    - Asset inventory, evidence, change log and news lists
    - The invoice with its line items

All models are frozen. A Document is never edited in place; the editing
session (see session.py) publishes a new snapshot for every mutation and
shares untouched sub-trees with the previous one.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum

Number = int | float | Decimal


class HealthScore(StrEnum):
    """Overall health grade shown on the executive summary."""

    S = "S"
    A = "A"
    B = "B"
    C = "C"


class AssetStatus(StrEnum):
    HEALTHY = "Healthy"
    WARNING = "Warning"
    CRITICAL = "Critical"


class EvidenceCategory(StrEnum):
    STORAGE = "storage"
    SECURITY = "security"
    ACTIVITY = "activity"


class Currency(StrEnum):
    """Invoice currencies. JPY has no minor unit; USD and PHP use two decimals."""

    JPY = "JPY"
    USD = "USD"
    PHP = "PHP"


# ── Singletons ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Meta:
    """
    Reporting period and authorship.

    Attributes:
        year: Reporting year (e.g. "2025")
        month: Reporting month, zero padded (e.g. "05")
        client_name: Client the report is addressed to
        issue_date: Free-form issue date as printed on the cover
        author: Consultant who prepared the report
        company_name: Issuing organization
    """

    year: str
    month: str
    client_name: str
    issue_date: str
    author: str
    company_name: str

    @property
    def period(self) -> str:
        """Reporting period as "YYYY / MM"."""
        return f"{self.year} / {self.month}"


@dataclass(frozen=True)
class Summary:
    score: HealthScore
    uptime: str
    threats_blocked: str
    backup_status: str
    comment: str


@dataclass(frozen=True)
class SecurityAnalysis:
    global_ip_title: str
    global_ip_comment: str
    bot_defense_title: str
    bot_defense_comment: str


@dataclass(frozen=True)
class Performance:
    storage_analysis: str
    device_analysis: str
    web_analysis: str


@dataclass(frozen=True)
class Roadmap:
    next_month_plan: str
    strategic_advice: str


# ── Chart series ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ThreatStat:
    """
    One attack category in the threat breakdown.

    Order in Document.threat_stats is display order for both the legend and
    the pie slices.

    Attributes:
        name: Category label (e.g. "Port Scan")
        count: Blocked attempts, non-negative
        color: CSS color used for slice and legend swatch
    """

    name: str
    count: int
    color: str


@dataclass(frozen=True)
class ResourceStat:
    """A monthly utilisation value. ``month`` is a read-only axis label."""

    month: str
    value: Number


@dataclass(frozen=True)
class ResourceStats:
    storage: tuple[ResourceStat, ...] = ()
    cpu: tuple[ResourceStat, ...] = ()


# ── Identity-bearing list entities ──────────────────────────────────────


@dataclass(frozen=True)
class Asset:
    """
    A monitored host or device.

    Example:
        asset = Asset(
            id="NAS-01",
            host_name="Re:NAS-Main",
            role="Secure NAS",
            os="Debian 12 (Hardened)",
            status=AssetStatus.HEALTHY,
            detail="ZFS Pool Status: ONLINE",
        )
    """

    id: str
    host_name: str
    role: str
    os: str
    status: AssetStatus = AssetStatus.HEALTHY
    detail: str = ""

    @property
    def kind(self) -> str:
        """Icon family derived from the identifier prefix: storage, mobile or web."""
        if "NAS" in self.id:
            return "storage"
        if "MOB" in self.id:
            return "mobile"
        return "web"


@dataclass(frozen=True)
class EvidenceItem:
    id: str
    title: str
    status: str
    date: str
    description: str
    category: EvidenceCategory = EvidenceCategory.ACTIVITY


@dataclass(frozen=True)
class ChangeLogEntry:
    id: str
    date: str
    type: str
    content: str
    result: str
    owner: str


@dataclass(frozen=True)
class NewsItem:
    id: str
    title: str
    date: str
    source: str = ""
    content: str = ""
    impact: str = ""


# ── Invoice ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class LineItem:
    """
    A single invoice line.

    Attributes:
        id: Identifier, unique within the invoice
        description: What is being billed
        quantity: Non-negative whole quantity
        unit_price: Non-negative price in the invoice currency's major unit
    """

    id: str
    description: str
    quantity: int = 1
    unit_price: Number = 0

    @property
    def amount(self) -> Number:
        """quantity × unit_price, non-negative whenever both inputs are."""
        return self.quantity * self.unit_price


@dataclass(frozen=True)
class Party:
    """Sender or bill-to block: a name plus free-form multi-line details."""

    name: str
    details: str = ""


@dataclass(frozen=True)
class BankInfo:
    name: str
    branch: str
    swift: str = ""
    account_type: str = ""
    account_number: str = ""
    holder: str = ""


@dataclass(frozen=True)
class Invoice:
    """
    The invoice printed as the last page of the report.

    ``logo_src`` is an opaque image reference (usually a data URI) stored
    verbatim; the core never decodes it.
    """

    invoice_number: str
    issue_date: str
    due_date: str
    sender: Party
    client: Party
    bank: BankInfo
    currency: Currency = Currency.USD
    tax_rate_percent: Number = 0
    logo_src: str | None = None
    notes: str = ""
    items: tuple[LineItem, ...] = ()


# ── Aggregate root ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class Document:
    """
    Root aggregate for one editing session.

    Created from a template (see defaults.default_document), replaced
    wholesale on each mutation and discarded when the session ends.
    """

    meta: Meta
    summary: Summary
    security_analysis: SecurityAnalysis
    performance: Performance
    roadmap: Roadmap
    invoice: Invoice
    threat_stats: tuple[ThreatStat, ...] = ()
    resource_stats: ResourceStats = field(default_factory=ResourceStats)
    assets: tuple[Asset, ...] = ()
    evidence: tuple[EvidenceItem, ...] = ()
    changes: tuple[ChangeLogEntry, ...] = ()
    news: tuple[NewsItem, ...] = ()
