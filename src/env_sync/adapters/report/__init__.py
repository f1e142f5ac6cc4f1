"""Snapshot renderers for the report and state sinks."""

from env_sync.adapters.report.json_state import JsonStateRenderer
from env_sync.adapters.report.markdown_report import MarkdownReportRenderer

__all__ = ["JsonStateRenderer", "MarkdownReportRenderer"]
