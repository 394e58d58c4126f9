import io
from datetime import date, datetime, time

import openpyxl

from docanalyzer.extraction.base import BaseSpreadsheetReader
from docanalyzer.extraction.exceptions import CorruptDocumentError
from docanalyzer.extraction.models import Sheet


class OpenpyxlAdapter(BaseSpreadsheetReader):
    """Reads OOXML workbooks (.xlsx, .xlsm) using openpyxl."""

    def read_sheets(self, workbook_bytes: bytes) -> list[Sheet]:
        try:
            wb = openpyxl.load_workbook(
                io.BytesIO(workbook_bytes), read_only=True, data_only=True
            )
        except Exception as exc:
            raise CorruptDocumentError(f"openpyxl could not open workbook: {exc}") from exc

        try:
            return [
                Sheet(
                    name=ws.title,
                    rows=[
                        [_format_cell(value) for value in row]
                        for row in ws.iter_rows(values_only=True)
                    ],
                )
                for ws in wb.worksheets
            ]
        except Exception as exc:
            raise CorruptDocumentError(f"openpyxl could not read workbook: {exc}") from exc
        finally:
            wb.close()


def _format_cell(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)
