"""
Chart geometry - drawing instructions derived from numeric series

Turns threat statistics into pie-slice descriptors and resource statistics
into bar height fractions. The descriptors are plain data; any renderer
(the SVG components in report/components/charts.py, a PDF canvas, ...) can
draw them without further computation.

Usage:
    from report_studio.domain.charts import bar_chart, pie_chart

    pie = pie_chart(document.threat_stats)
    for entry in pie.legend:
        print(entry.label, entry.percentage)

    storage = bar_chart(document.resource_stats.storage)
    heights = [bar.fraction for bar in storage.bars]
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from ..core.logging_config import get_logger
from .document import ResourceStat, ThreatStat

logger = get_logger(__name__)

FULL_TURN = 360.0
DEFAULT_ROTATION = -90.0  # first slice starts at twelve o'clock
DEFAULT_REFERENCE_FLOOR = 100.0
DEFAULT_MIN_VISIBLE_FRACTION = 0.02


@dataclass(frozen=True)
class PieSlice:
    """
    One wedge of the pie, in degrees measured from the chart's reference
    direction (before the chart-wide rotation is applied).

    Attributes:
        label: Category name
        count: Raw count the wedge represents
        color: Fill color
        start_angle: Where the wedge begins
        end_angle: Where the wedge ends (start_angle <= end_angle <= 360)
        full_circle: True when this entry holds the whole total; draw a closed
            circle instead of an arc whose start and end points coincide
    """

    label: str
    count: int
    color: str
    start_angle: float
    end_angle: float
    full_circle: bool = False

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def large_arc(self) -> bool:
        """SVG large-arc flag: the wedge covers more than half the circle."""
        return self.span > FULL_TURN / 2


@dataclass(frozen=True)
class LegendEntry:
    label: str
    count: int
    color: str
    percentage: int


@dataclass(frozen=True)
class PieChart:
    """
    Derived pie chart.

    Legend percentages are rounded independently per entry, so they may not
    add up to exactly 100.
    """

    slices: tuple[PieSlice, ...]
    legend: tuple[LegendEntry, ...]
    total: int
    rotation: float = DEFAULT_ROTATION

    @property
    def is_empty(self) -> bool:
        """True for an all-zero (or empty) series: nothing to draw."""
        return not self.slices


@dataclass(frozen=True)
class Bar:
    label: str
    value: float
    fraction: float

    @property
    def height_percent(self) -> float:
        return self.fraction * 100


@dataclass(frozen=True)
class BarChart:
    bars: tuple[Bar, ...]
    reference_max: float
    min_visible_fraction: float


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values (2.5 -> 3)."""
    return math.floor(value + 0.5)


def pie_chart(stats: Sequence[ThreatStat], rotation: float = DEFAULT_ROTATION) -> PieChart:
    """
    Derive pie slices and legend entries from a threat breakdown.

    Entries are walked in input order. Each slice starts where the previous
    one ended; boundaries are computed from cumulative counts so the last
    slice always ends at exactly 360 degrees.

    Args:
        stats: Threat categories in display order (counts must be non-negative)
        rotation: Chart-wide rotation in degrees, a rendering convention

    Returns:
        PieChart. When the counts sum to zero the slice tuple is empty and
        every legend percentage is 0.

    Example:
        >>> chart = pie_chart([ThreatStat("Scan", 3, "#000"), ThreatStat("XSS", 1, "#f00")])
        >>> [(s.start_angle, s.end_angle) for s in chart.slices]
        [(0.0, 270.0), (270.0, 360.0)]
        >>> [e.percentage for e in chart.legend]
        [75, 25]
    """
    total = sum(stat.count for stat in stats)

    if total == 0:
        logger.debug("Degenerate pie series, no slices emitted", extra={"entries": len(stats)})
        legend = tuple(LegendEntry(stat.name, stat.count, stat.color, 0) for stat in stats)
        return PieChart(slices=(), legend=legend, total=0, rotation=rotation)

    slices = []
    legend = []
    cumulative = 0
    for stat in stats:
        start = FULL_TURN * cumulative / total
        cumulative += stat.count
        end = FULL_TURN * cumulative / total

        slices.append(
            PieSlice(
                label=stat.name,
                count=stat.count,
                color=stat.color,
                start_angle=start,
                end_angle=end,
                full_circle=stat.count == total,
            )
        )
        legend.append(LegendEntry(stat.name, stat.count, stat.color, round_half_up(stat.count / total * 100)))

    return PieChart(slices=tuple(slices), legend=tuple(legend), total=total, rotation=rotation)


def bar_chart(
    stats: Sequence[ResourceStat],
    reference_floor: float = DEFAULT_REFERENCE_FLOOR,
    min_visible_fraction: float = DEFAULT_MIN_VISIBLE_FRACTION,
) -> BarChart:
    """
    Derive normalized bar heights from a monthly series.

    The scale is the larger of the series maximum and ``reference_floor``,
    so a series of low percentages reads as mostly empty rather than full
    scale. Every bar is at least ``min_visible_fraction`` tall, which keeps
    zero and near-zero months visible.

    Args:
        stats: Monthly values in axis order
        reference_floor: Lower bound for the scale (must be positive)
        min_visible_fraction: Minimum height fraction, 0-1

    Returns:
        BarChart with one Bar per input entry
    """
    values = [float(stat.value) for stat in stats]
    reference_max = max([*values, float(reference_floor)])

    bars = tuple(
        Bar(label=stat.month, value=value, fraction=max(value / reference_max, min_visible_fraction))
        for stat, value in zip(stats, values)
    )
    return BarChart(bars=bars, reference_max=reference_max, min_visible_fraction=min_visible_fraction)
