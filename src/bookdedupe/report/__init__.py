"""Report rendering for scan and targeted results."""

from bookdedupe.report.formatters import (
    format_scan_markdown,
    format_scan_text,
    format_summary_text,
    format_targeted_markdown,
    scan_to_json,
    summarize_groups,
)

__all__ = [
    "format_scan_markdown",
    "format_scan_text",
    "format_summary_text",
    "format_targeted_markdown",
    "scan_to_json",
    "summarize_groups",
]
