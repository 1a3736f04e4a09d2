"""
Template Rendering Utilities

Provides Jinja2-based template rendering for the printed report with:
    - Auto-escaping (operator-entered text is never interpreted as HTML)
    - Custom filters for numbers, percentages and status badges
    - Templates shipped inside the package (report_studio/templates)

Usage:
    from report_studio.report.renderer import render_template

    html = render_template("report.html", {"view": view_model})
"""

from datetime import datetime
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..domain.document import AssetStatus
from .view_model import STATUS_CLASSES

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"

# Initialize Jinja2 environment (singleton)
_jinja_env: Environment | None = None


def get_jinja_environment() -> Environment:
    """
    Get or create the Jinja2 environment (singleton pattern).

    - Auto-escaping enabled for HTML/XML
    - Custom filters for number formatting and status badges
    - Trim blocks and lstrip for clean output

    :returns: Configured Jinja2 Environment with custom filters registered

    Example:
        >>> env = get_jinja_environment()
        >>> template = env.get_template("report.html")
    """
    global _jinja_env

    if _jinja_env is None:
        _jinja_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

        _jinja_env.filters["format_number"] = format_number
        _jinja_env.filters["format_percent"] = format_percent
        _jinja_env.filters["status_class"] = status_class

    return _jinja_env


def render_template(template_name: str, context: dict[str, Any], inject_defaults: bool = True) -> str:
    """
    Render a template with context data.

    :param template_name: Template file name relative to the templates directory
    :param context: Dictionary of template variables
    :param inject_defaults: Whether to inject ``generation_date`` (default: True);
        a ``generation_date`` in ``context`` takes precedence
    :returns: Rendered HTML string
    :raises jinja2.TemplateNotFound: If template file doesn't exist
    :raises jinja2.TemplateSyntaxError: If template has syntax errors
    """
    env = get_jinja_environment()
    template = env.get_template(template_name)

    if inject_defaults:
        defaults = {"generation_date": datetime.now().strftime("%Y-%m-%d %H:%M:%S")}
        final_context = {**defaults, **context}
    else:
        final_context = context

    rendered: str = template.render(**final_context)
    return rendered


# Custom Jinja2 filters


def format_number(value: Any, decimals: int = 0) -> str:
    """
    Format number with thousand separators (Jinja2 filter).

    :param value: Numeric value to format
    :param decimals: Number of decimal places (default: 0)
    :returns: Formatted string, or ``str(value)`` for non-numeric input

    Example:
        >>> format_number(8500)
        '8,500'
        >>> format_number(1234.5, 2)
        '1,234.50'
    """
    try:
        num = float(value)
        if decimals == 0:
            return f"{int(num):,}"
        else:
            return f"{num:,.{decimals}f}"
    except (ValueError, TypeError):
        return str(value)


def format_percent(value: Any, decimals: int = 0) -> str:
    """
    Format number as percentage string (Jinja2 filter).

    Example:
        >>> format_percent(59)
        '59%'
        >>> format_percent(65.432, 1)
        '65.4%'
    """
    try:
        num = float(value)
        return f"{num:.{decimals}f}%"
    except (ValueError, TypeError):
        return str(value)


def status_class(status: AssetStatus | str) -> str:
    """CSS class for an asset status badge; unknown statuses fall back to neutral."""
    try:
        return STATUS_CLASSES[AssetStatus(status)]
    except ValueError:
        return "status-unknown"
