"""
Report Components - Reusable HTML building blocks

    - charts: Pie chart SVG and bar chart HTML from geometry descriptors

Usage:
    from report_studio.report.components import pie_chart_svg

    svg = pie_chart_svg(view.threat_chart)
"""

from .charts import bar_chart_html, pie_chart_svg, pie_slice_path

__all__ = [
    "pie_chart_svg",
    "pie_slice_path",
    "bar_chart_html",
]
