"""
Tests for chart components (SVG / HTML markup)
"""

from report_studio.domain.charts import PieSlice, bar_chart, pie_chart
from report_studio.domain.document import ResourceStat, ThreatStat
from report_studio.report.components import bar_chart_html, pie_chart_svg, pie_slice_path


class TestPieSlicePath:
    """Tests for pie_slice_path()"""

    def test_quarter(self):
        """Test a 90 degree wedge from the reference direction"""
        path = pie_slice_path(PieSlice("a", 1, "#000", 0.0, 90.0))
        assert path == "M 50 50 L 100.00 50.00 A 50 50 0 0 1 50.00 100.00 Z"

    def test_large_arc_flag(self):
        """Test wedges above 180 degrees set the large-arc flag"""
        path = pie_slice_path(PieSlice("a", 3, "#000", 0.0, 270.0))
        assert " A 50 50 0 1 1 " in path

    def test_full_circle(self):
        """Test a full-circle slice is drawn as two half arcs"""
        path = pie_slice_path(PieSlice("a", 5, "#000", 0.0, 360.0, full_circle=True))
        assert path == "M 50 50 m -50, 0 a 50,50 0 1,0 100,0 a 50,50 0 1,0 -100,0"


class TestPieChartSvg:
    """Tests for pie_chart_svg()"""

    def test_one_path_per_slice(self, sample_threat_stats):
        """Test each non-empty slice becomes a path"""
        svg = pie_chart_svg(pie_chart(sample_threat_stats))

        assert "<svg" in svg
        assert svg.count("<path") == 5
        assert 'fill="#ef4444"' in svg
        assert 'rotate(-90 50 50)' in svg

    def test_zero_span_slices_skipped(self):
        """Test zero-count entries are not drawn"""
        chart = pie_chart([ThreatStat("a", 0, "#000"), ThreatStat("b", 4, "#111")])
        svg = pie_chart_svg(chart)
        assert svg.count("<path") == 1
        assert "m -50, 0" in svg

    def test_empty_chart(self):
        """Test an all-zero chart renders a placeholder ring"""
        svg = pie_chart_svg(pie_chart([ThreatStat("a", 0, "#000")]))
        assert "<path" not in svg
        assert "<circle" in svg

    def test_color_escaped(self):
        """Test operator-entered colors cannot break out of the attribute"""
        svg = pie_chart_svg(pie_chart([ThreatStat("a", 1, '"><script>')]))
        assert "<script>" not in svg


class TestBarChartHtml:
    """Tests for bar_chart_html()"""

    def test_bars_and_labels(self, cpu_series):
        """Test one column and one label per month"""
        html = bar_chart_html(bar_chart(cpu_series), color="#3b82f6")

        assert html.count('class="bar-column"') == 5
        assert html.count('class="bar-label"') == 5
        assert "height: 65.00%" in html
        assert "4月" in html
        assert "background-color: #3b82f6" in html

    def test_minimum_height(self):
        """Test a zero month keeps a visible sliver"""
        html = bar_chart_html(bar_chart([ResourceStat("Jan", 0)]))
        assert "height: 2.00%" in html

    def test_empty(self):
        """Test an empty series renders nothing"""
        assert bar_chart_html(bar_chart([])) == ""
