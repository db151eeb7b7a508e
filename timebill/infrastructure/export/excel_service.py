"""
Excel workbook export of time entries using openpyxl.
"""

import io
import logging
from typing import Iterable, List, Union

from openpyxl import Workbook, load_workbook
from openpyxl.cell.cell import TYPE_STRING
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from timebill.domain.services.export_service import (
    EXPORT_COLUMNS,
    ExportRow,
    ParsedEntry,
    parse_exported_rows,
)

logger = logging.getLogger(__name__)

SHEET_TITLE = "Time Entries"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

TEXT_KEYS = {"activity_date", "employee_name", "client_name", "service_name", "memo", "billable"}


class ExcelExporter:
    """Writes export rows to .xlsx bytes and reads them back."""

    def __init__(self, sheet_title: str = SHEET_TITLE):
        self.sheet_title = sheet_title

    def write(self, rows: Iterable[ExportRow]) -> bytes:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = self.sheet_title

        sheet.append([column.header for column in EXPORT_COLUMNS])
        for cell in sheet[1]:
            cell.font = Font(bold=True)

        count = 0
        for row in rows:
            sheet.append(row.values())
            count += 1
            # Text that looks like a formula stays text
            for index, column in enumerate(EXPORT_COLUMNS, start=1):
                if column.key in TEXT_KEYS:
                    cell = sheet.cell(row=sheet.max_row, column=index)
                    cell.data_type = TYPE_STRING

        for index, column in enumerate(EXPORT_COLUMNS, start=1):
            sheet.column_dimensions[get_column_letter(index)].width = column.width

        buffer = io.BytesIO()
        workbook.save(buffer)
        logger.info(f"Exported {count} time entries to workbook")
        return buffer.getvalue()

    def read(self, content: Union[bytes, io.BytesIO]) -> List[ParsedEntry]:
        """Parse a workbook produced by ``write``. The header row is skipped."""
        stream = io.BytesIO(content) if isinstance(content, bytes) else content
        workbook = load_workbook(stream, data_only=True)
        sheet = workbook.active
        rows = [
            row for row in sheet.iter_rows(min_row=2, values_only=True)
            if any(value is not None for value in row)
        ]
        return parse_exported_rows(rows)

    def headers(self, content: bytes) -> List[str]:
        workbook = load_workbook(io.BytesIO(content), read_only=True)
        sheet = workbook.active
        first = next(sheet.iter_rows(min_row=1, max_row=1, values_only=True), ())
        return [str(value) if value is not None else "" for value in first]
