"""
Report Generator

Renders the printable monthly audit report + invoice:
    - View model derived from the current Document snapshot
    - Chart components (inline SVG / HTML)
    - Jinja2 templates, one per physical page

Usage:
    from pathlib import Path
    from report_studio.domain import EditingSession
    from report_studio.report.generator import generate_report

    session = EditingSession()
    html = generate_report(session.snapshot, Path(".tmp/reports/report-2025-05.html"))
"""

from datetime import datetime
from pathlib import Path

from ..config import ReportConfig
from ..core.logging_config import get_logger
from ..domain.document import Document
from .components.charts import bar_chart_html, pie_chart_svg
from .renderer import render_template
from .view_model import ReportViewModel, build_view_model

logger = get_logger(__name__)

STORAGE_BAR_COLOR = "#6366f1"
CPU_BAR_COLOR = "#3b82f6"


def generate_report(
    document: Document,
    output_path: Path | None = None,
    generated_at: datetime | None = None,
    config: ReportConfig | None = None,
) -> str:
    """
    Generate the report HTML.

    Follows a 3-stage pipeline:
    1. Derive the view model (charts, invoice figures, pages)
    2. Build template context
    3. Render HTML template

    :param document: Document snapshot to render
    :param output_path: Optional path to write HTML file (creates parent directories if needed)
    :param generated_at: Timestamp printed in the footer; pin it for reproducible output
    :param config: Chart conventions; the global configuration is used when omitted
    :returns: Fully rendered HTML string

    Example:
        >>> html = generate_report(default_document(), generated_at=datetime(2025, 6, 1))
        >>> html.count('class="page-break"')
        10
    """
    logger.info("Generating report", extra={"period": document.meta.period})

    logger.info("Deriving view model")
    view = build_view_model(document, config)
    logger.info(
        "View model derived",
        extra={
            "page_count": len(view.pages),
            "threat_total": view.threat_chart.total,
            "invoice_total": view.invoice.total_display,
        },
    )

    context = _build_context(view)
    if generated_at is not None:
        context["generation_date"] = generated_at.strftime("%Y-%m-%d %H:%M:%S")

    logger.info("Rendering HTML template")
    html = render_template("report.html", context)

    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        logger.info("Report written to file", extra={"path": str(output_path)})

    logger.info("Report generated", extra={"html_size": len(html)})
    return html


def _build_context(view: ReportViewModel) -> dict:
    """
    Build template context from the view model.

    Chart markup is produced here so the templates only place it.
    """
    return {
        "view": view,
        "doc": view.document,
        "pie_svg": pie_chart_svg(view.threat_chart),
        "storage_bars": bar_chart_html(view.storage_chart, color=STORAGE_BAR_COLOR),
        "cpu_bars": bar_chart_html(view.cpu_chart, color=CPU_BAR_COLOR),
    }


def default_output_path(document: Document, output_dir: Path) -> Path:
    """File name for a rendered report: report-<year>-<month>.html inside ``output_dir``."""
    return output_dir / f"report-{document.meta.year}-{document.meta.month}.html"
