"""
Report Generation - the printable page sequence

This package contains:
    - pagination: Static page table, page headers, table of contents
    - view_model: All derivations for one Document snapshot
    - renderer: Jinja2 template rendering
    - components: Chart markup from geometry descriptors
    - generator: End-to-end HTML generation

Usage:
    from report_studio.report import generate_report

    html = generate_report(session.snapshot)
"""

from .generator import generate_report
from .pagination import TOTAL_PAGES, paginate
from .view_model import ReportViewModel, build_view_model

__all__ = [
    "generate_report",
    "build_view_model",
    "ReportViewModel",
    "paginate",
    "TOTAL_PAGES",
]
