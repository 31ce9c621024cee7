"""Render report workbook writer service."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from .report_models import PayloadReportRow, RenderReportMetadata

PAYLOADS_SHEET_NAME = "Payloads"
RUN_INFO_SHEET_NAME = "RunInfo"

PAYLOAD_COLUMNS: tuple[str, ...] = ("Payload", "Direction", "Schema", "Example", "Errors")

_COLUMN_WIDTHS: tuple[int, ...] = (60, 12, 12, 12, 80)


def write_render_report(
    output_path: Path | str,
    rows: Sequence[PayloadReportRow],
    metadata: RenderReportMetadata,
) -> Path:
    """Write the render report workbook and return its resolved path."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = PAYLOADS_SHEET_NAME
    _write_payload_rows(sheet, rows)
    _write_run_info_sheet(workbook, rows, metadata)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def _write_payload_rows(sheet, rows: Sequence[PayloadReportRow]) -> None:
    for column, header in enumerate(PAYLOAD_COLUMNS, start=1):
        cell = sheet.cell(row=1, column=column, value=header)
        cell.font = Font(bold=True)
    for column, width in enumerate(_COLUMN_WIDTHS, start=1):
        sheet.column_dimensions[get_column_letter(column)].width = width
    sheet.freeze_panes = "A2"

    for row_number, row in enumerate(rows, start=2):
        values = (
            row.label,
            row.direction,
            row.schema_status,
            row.example_status,
            "\n".join(row.errors) or None,
        )
        for column, value in enumerate(values, start=1):
            sheet.cell(row=row_number, column=column, value=value)


def _write_run_info_sheet(
    workbook, rows: Sequence[PayloadReportRow], metadata: RenderReportMetadata
) -> None:
    sheet = workbook.create_sheet(RUN_INFO_SHEET_NAME)
    entries = (
        ("run_start", metadata.run_start.isoformat()),
        ("input_path", str(metadata.input_path)),
        ("output_path", str(metadata.output_path) if metadata.output_path else None),
        ("known_types", metadata.known_types),
        ("cyclic_types", ", ".join(metadata.cyclic_types) or None),
        ("payloads", len(rows)),
        ("failed", sum(1 for row in rows if row.errors)),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)
