"""
Report Studio - monthly security audit report and invoice generator

Packages:
    - domain: Document schema, editing session, chart geometry, invoice arithmetic
    - report: Pagination, view model, Jinja2 rendering
    - core: Logging and configuration

Usage:
    from report_studio.domain import EditingSession
    from report_studio.report import generate_report

    session = EditingSession()
    session.update("meta.month", "06")
    html = generate_report(session.snapshot)
"""

__version__ = "0.1.0"
