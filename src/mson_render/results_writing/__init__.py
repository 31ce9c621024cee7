"""Results writing domain exports."""

from .render_report_writer import (
    PAYLOAD_COLUMNS,
    PAYLOADS_SHEET_NAME,
    RUN_INFO_SHEET_NAME,
    write_render_report,
)
from .report_models import PayloadReportRow, RenderReportMetadata

__all__ = [
    "PAYLOAD_COLUMNS",
    "PAYLOADS_SHEET_NAME",
    "RUN_INFO_SHEET_NAME",
    "PayloadReportRow",
    "RenderReportMetadata",
    "write_render_report",
]
