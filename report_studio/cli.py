#!/usr/bin/env python3
"""
Command-line entry point

Renders the monthly report + invoice to a print-ready HTML file. Field
edits are applied to the default document with repeated ``--set`` options
before rendering.

Usage:
    report-studio render --output .tmp/reports/report.html
    report-studio render --set meta.month=06 --set invoice.currency=JPY \\
        --set "invoice.items[1].quantity=3" --logo logo.png
    report-studio pages
"""

import argparse
import mimetypes
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from .config import ConfigurationError, get_config
from .core.logging_config import get_logger, setup_logging
from .domain.errors import DocumentError
from .domain.session import EditingSession, read_field
from .report.generator import default_output_path, generate_report
from .report.pagination import PAGE_TABLE

logger = get_logger(__name__)

WHOLE_NUMBER_FIELDS = frozenset({"quantity", "count"})


def load_logo(path: Path) -> tuple[bytes, str]:
    """
    Read an image file for the invoice logo.

    Args:
        path: Image file

    Returns:
        (raw bytes, media type guessed from the file extension)

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not recognisably an image
    """
    mime_type, _ = mimetypes.guess_type(path.name)
    if not mime_type or not mime_type.startswith("image/"):
        raise ValueError(f"Not an image file: {path}")
    return path.read_bytes(), mime_type


def coerce_value(current: Any, raw: str, whole: bool = False) -> Any:
    """
    Convert a command-line string to the type of the field it replaces.

    Numeric fields reject non-numeric and negative input here, before the
    value reaches the document. ``whole`` additionally rejects fractions
    (quantities and counts).

    Raises:
        ValueError: If ``raw`` cannot be converted
    """
    if isinstance(current, bool):
        raise ValueError("boolean fields are not editable")
    if isinstance(current, (int, float, Decimal)):
        try:
            number = Decimal(raw)
        except InvalidOperation:
            raise ValueError(f"expected a number, got {raw!r}") from None
        if not number.is_finite() or number < 0:
            raise ValueError(f"expected a non-negative number, got {raw!r}")
        if number == number.to_integral_value() and "." not in raw:
            return int(number)
        if whole:
            raise ValueError(f"expected a whole number, got {raw!r}")
        return float(number) if isinstance(current, float) else number
    return raw


def apply_edits(session: EditingSession, assignments: list[str]) -> None:
    """
    Apply ``PATH=VALUE`` assignments to the session in order.

    Raises:
        ValueError: If an assignment is malformed or its value has the wrong type
        DocumentError: If a path does not name an editable field
    """
    for assignment in assignments:
        path, sep, raw = assignment.partition("=")
        if not sep or not path:
            raise ValueError(f"expected PATH=VALUE, got {assignment!r}")
        path = path.strip()
        current = read_field(session.snapshot, path)
        whole = path.rsplit(".", 1)[-1] in WHOLE_NUMBER_FIELDS
        session.update(path, coerce_value(current, raw, whole=whole))


def _render(args: argparse.Namespace) -> int:
    config = get_config()
    session = EditingSession()

    try:
        apply_edits(session, args.set or [])
        if args.logo:
            payload, mime_type = load_logo(Path(args.logo))
            session.set_logo(payload, mime_type)
    except (ValueError, FileNotFoundError, DocumentError) as e:
        logger.error("Invalid input", extra={"error": str(e)})
        print(f"error: {e}", file=sys.stderr)
        return 2

    document = session.snapshot
    output_path = Path(args.output) if args.output else default_output_path(document, config.output_dir)
    generate_report(document, output_path, config=config)
    print(output_path)
    return 0


def _pages(args: argparse.Namespace) -> int:
    for number, spec in enumerate(PAGE_TABLE, start=1):
        print(f"{number:>2}  {spec.key:<12} {spec.title:<24} {', '.join(spec.sections)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="report-studio",
        description="Generate the monthly security audit report and invoice as print-ready HTML",
    )
    parser.add_argument("--log-level", help="Override REPORT_LOG_LEVEL (DEBUG, INFO, ...)")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Render the report to an HTML file")
    render.add_argument("--output", "-o", help="Output HTML path (default: REPORT_OUTPUT_DIR/report-YYYY-MM.html)")
    render.add_argument(
        "--set",
        action="append",
        metavar="PATH=VALUE",
        help='Edit a field before rendering, e.g. "meta.month=06" or "assets[NAS-01].status=Warning"',
    )
    render.add_argument("--logo", help="Image file to embed as the invoice logo")
    render.set_defaults(handler=_render)

    pages = subparsers.add_parser("pages", help="List the fixed page layout")
    pages.set_defaults(handler=_pages)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = get_config()
    except ConfigurationError as e:
        print(f"configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(level=args.log_level or config.log_level, json_output=args.json_logs or config.json_logs)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
