"""
Domain Models - the report document and its derivations

This package contains:
    - document: Frozen dataclasses for the report + invoice aggregate
    - defaults: The sample document a session starts from
    - session: EditingSession, the single writer of a Document
    - charts: Pie slice and bar geometry derived from statistics
    - finance: Invoice totals and currency formatting
    - errors: Structural editing errors

Usage:
    from report_studio.domain import EditingSession, pie_chart, summarize_invoice

    session = EditingSession()
    session.update("invoice.tax_rate_percent", 10)
    summary = summarize_invoice(session.snapshot.invoice)
    print(summary.total_display)
"""

from .charts import BarChart, PieChart, PieSlice, bar_chart, pie_chart
from .defaults import default_document
from .document import (
    Asset,
    AssetStatus,
    ChangeLogEntry,
    Currency,
    Document,
    EvidenceItem,
    HealthScore,
    Invoice,
    LineItem,
    NewsItem,
    ThreatStat,
)
from .errors import DocumentError, IndexOutOfRangeError, InvalidPathError, UnsupportedOperationError
from .finance import InvoiceSummary, InvoiceTotals, calculate_totals, format_money, summarize_invoice
from .session import EditingSession

__all__ = [
    # Document
    "Document",
    "Asset",
    "AssetStatus",
    "ChangeLogEntry",
    "Currency",
    "EvidenceItem",
    "HealthScore",
    "Invoice",
    "LineItem",
    "NewsItem",
    "ThreatStat",
    "default_document",
    # Editing
    "EditingSession",
    "DocumentError",
    "IndexOutOfRangeError",
    "InvalidPathError",
    "UnsupportedOperationError",
    # Derivations
    "PieChart",
    "PieSlice",
    "BarChart",
    "pie_chart",
    "bar_chart",
    "InvoiceTotals",
    "InvoiceSummary",
    "calculate_totals",
    "format_money",
    "summarize_invoice",
]
