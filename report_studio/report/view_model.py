"""
Report view model - everything the templates need, fully derived

The presentation layer performs no business computation: chart geometry,
invoice figures and the page sequence are all computed here from one
Document snapshot. Building the view model twice from the same snapshot
yields equal results.
"""

from dataclasses import dataclass

from ..config import ReportConfig, get_config
from ..domain.charts import BarChart, PieChart, bar_chart, pie_chart
from ..domain.document import AssetStatus, Document, HealthScore
from ..domain.finance import InvoiceSummary, summarize_invoice
from .pagination import TOTAL_PAGES, Page, TocEntry, paginate, table_of_contents

SCORE_LABELS: dict[HealthScore, str] = {
    HealthScore.S: "Excellent - stable, exemplary state",
    HealthScore.A: "Good - stable, minor follow-up",
    HealthScore.B: "Caution - improvement recommended",
    HealthScore.C: "Critical - immediate action required",
}

STATUS_CLASSES: dict[AssetStatus, str] = {
    AssetStatus.HEALTHY: "status-healthy",
    AssetStatus.WARNING: "status-warning",
    AssetStatus.CRITICAL: "status-critical",
}


@dataclass(frozen=True)
class ReportViewModel:
    """
    Derived, render-ready view of a Document.

    Attributes:
        document: The snapshot everything below was derived from
        threat_chart: Pie geometry and legend for the threat breakdown
        storage_chart: Bar geometry for storage utilisation
        cpu_chart: Bar geometry for CPU load
        invoice: Invoice totals and formatted amounts
        pages: The fixed page sequence
        toc: Table of contents entries
        score_label: Description of the health score
    """

    document: Document
    threat_chart: PieChart
    storage_chart: BarChart
    cpu_chart: BarChart
    invoice: InvoiceSummary
    pages: tuple[Page, ...]
    toc: tuple[TocEntry, ...]
    score_label: str

    @property
    def total_pages(self) -> int:
        return TOTAL_PAGES


def build_view_model(document: Document, config: ReportConfig | None = None) -> ReportViewModel:
    """
    Run every derivation against one Document snapshot.

    Args:
        document: Current snapshot
        config: Chart conventions (scale floor, minimum bar height, pie
            rotation); the global configuration is used when omitted

    Returns:
        ReportViewModel
    """
    config = config or get_config()

    def bars(series) -> BarChart:
        return bar_chart(
            series,
            reference_floor=config.bar_reference_floor,
            min_visible_fraction=config.bar_min_visible_fraction,
        )

    return ReportViewModel(
        document=document,
        threat_chart=pie_chart(document.threat_stats, rotation=config.pie_rotation),
        storage_chart=bars(document.resource_stats.storage),
        cpu_chart=bars(document.resource_stats.cpu),
        invoice=summarize_invoice(document.invoice),
        pages=paginate(document),
        toc=table_of_contents(),
        score_label=SCORE_LABELS[document.summary.score],
    )
