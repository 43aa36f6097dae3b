"""
Reporting module for Miljödataportalen.

Exports search results as JSON report documents.

Usage:
    from core.search import search_property
    from reporting import write_report

    result = search_property("Stockholm 1:1")
    path = write_report(result, "reports/")
"""

from .export import (
    ReportFormatError,
    build_report,
    export_report_json,
    report_filename,
    write_report,
    parse_report,
    load_report,
)

__all__ = [
    "ReportFormatError",
    "build_report",
    "export_report_json",
    "report_filename",
    "write_report",
    "parse_report",
    "load_report",
]
