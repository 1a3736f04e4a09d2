"""
Chart components for the printed report

Turns the geometry descriptors from report_studio.domain.charts into
inline SVG / HTML. No values are computed here beyond coordinates.
"""

import html as html_module
import math

from ...domain.charts import BarChart, PieChart, PieSlice

PIE_VIEWBOX = 100
_CENTER = PIE_VIEWBOX / 2
_RADIUS = PIE_VIEWBOX / 2


def _point(angle: float) -> tuple[float, float]:
    radians = math.radians(angle)
    return _CENTER + _RADIUS * math.cos(radians), _CENTER + _RADIUS * math.sin(radians)


def pie_slice_path(pie_slice: PieSlice) -> str:
    """
    Build the SVG path data for one wedge.

    A full-circle slice is drawn as two half arcs closing on themselves;
    a single arc command cannot express 360 degrees because its start and
    end points coincide.

    Args:
        pie_slice: Slice descriptor

    Returns:
        Path data string for the ``d`` attribute

    Example:
        path = pie_slice_path(chart.slices[0])
        # "M 50 50 L 100.00 50.00 A 50 50 0 1 1 ... Z"
    """
    if pie_slice.full_circle:
        return f"M {_CENTER:g} {_CENTER:g} m -{_RADIUS:g}, 0 a {_RADIUS:g},{_RADIUS:g} 0 1,0 {PIE_VIEWBOX:g},0 a {_RADIUS:g},{_RADIUS:g} 0 1,0 -{PIE_VIEWBOX:g},0"

    x1, y1 = _point(pie_slice.start_angle)
    x2, y2 = _point(pie_slice.end_angle)
    large_arc = 1 if pie_slice.large_arc else 0
    return (
        f"M {_CENTER:g} {_CENTER:g} L {x1:.2f} {y1:.2f} "
        f"A {_RADIUS:g} {_RADIUS:g} 0 {large_arc} 1 {x2:.2f} {y2:.2f} Z"
    )


def pie_chart_svg(chart: PieChart, size: int = 192) -> str:
    """
    Generate an inline SVG pie chart.

    Zero-span slices are skipped. An empty chart (all counts zero) renders
    as a plain grey ring so the page layout stays intact.

    Args:
        chart: PieChart descriptor
        size: Rendered width and height in pixels

    Returns:
        HTML string with inline SVG
    """
    if chart.is_empty:
        content = (
            f'<circle cx="{_CENTER:g}" cy="{_CENTER:g}" r="{_RADIUS - 1:g}" '
            'fill="none" stroke="#cbd5e1" stroke-width="2"/>'
        )
    else:
        paths = [
            f'<path d="{pie_slice_path(pie_slice)}" fill="{html_module.escape(pie_slice.color)}" '
            'stroke="white" stroke-width="1"/>'
            for pie_slice in chart.slices
            if pie_slice.span > 0
        ]
        content = "\n        ".join(paths)

    return f"""
    <svg class="pie-chart" width="{size}" height="{size}"
         viewBox="0 0 {PIE_VIEWBOX} {PIE_VIEWBOX}"
         xmlns="http://www.w3.org/2000/svg">
      <g transform="rotate({chart.rotation:g} {_CENTER:g} {_CENTER:g})">
        {content}
      </g>
    </svg>
    """


def bar_chart_html(chart: BarChart, color: str = "#3b82f6", unit: str = "%") -> str:
    """
    Generate a vertical bar chart with month labels.

    Bar heights come straight from the descriptor's fractions, so a zero
    month still shows the minimum visible sliver.

    Args:
        chart: BarChart descriptor
        color: Bar fill color
        unit: Unit appended to the value tooltip

    Returns:
        HTML string for the chart

    Example:
        html = bar_chart_html(bar_chart(document.resource_stats.cpu), color="#3b82f6")
    """
    if not chart.bars:
        return ""

    fill = html_module.escape(color)
    columns = []
    labels = []
    for bar in chart.bars:
        columns.append(
            f'<div class="bar-column" title="{bar.value:g}{html_module.escape(unit)}">'
            f'<div class="bar" style="height: {bar.height_percent:.2f}%; background-color: {fill}"></div>'
            "</div>"
        )
        labels.append(f'<div class="bar-label">{html_module.escape(bar.label)}</div>')

    return f"""
    <div class="bar-chart">
        <div class="bar-area">{"".join(columns)}</div>
        <div class="bar-labels">{"".join(labels)}</div>
    </div>
    """
