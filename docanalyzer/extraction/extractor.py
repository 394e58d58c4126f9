"""Per-media-type extraction with the password retry state machine.

States: Idle -> Processing -> {Ready, PasswordRequired, Failed}.
PasswordRequired -> Processing (on retry) -> {Ready, PasswordRequired, Failed}.
Ready and Failed are terminal for the selected file; selecting a new file
discards the state and starts again from Idle.
"""

import asyncio
import csv
import io

from docanalyzer.extraction.base import BasePdfReader, BaseSpreadsheetReader
from docanalyzer.extraction.exceptions import (
    ExtractionError,
    PdfPasswordIncorrectError,
    PdfPasswordRequiredError,
)
from docanalyzer.extraction.models import (
    BinaryDocument,
    Document,
    ExtractionState,
    Failed,
    Idle,
    PasswordRequired,
    Processing,
    Ready,
    Sheet,
    SourceFile,
    TextDocument,
)
from docanalyzer.logging.logger import Log

PDF_MEDIA_TYPE = "application/pdf"
SPREADSHEET_MEDIA_TYPES = frozenset({
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel.sheet.macroenabled.12",
})
PAGE_DELIMITER = "\n\n"
SHEET_DELIMITER = "\n\n"
SHEET_HEADER = "--- Sheet: {name} ---"


def normalize_media_type(media_type: str) -> str:
    """Lowercase a media type and drop parameters such as charset."""
    return media_type.split(";", 1)[0].strip().lower()


def join_pdf_pages(pages: list[list[str]]) -> str:
    """Join runs of each page with spaces, pages with a blank line."""
    return PAGE_DELIMITER.join(" ".join(runs) for runs in pages)


def serialize_sheets(sheets: list[Sheet]) -> str:
    """Render sheets as labeled CSV sections, in the given order."""
    sections: list[str] = []
    for sheet in sheets:
        buffer = io.StringIO()
        csv.writer(buffer, lineterminator="\n").writerows(sheet.rows)
        body = buffer.getvalue().rstrip("\n")
        header = SHEET_HEADER.format(name=sheet.name)
        sections.append(f"{header}\n{body}" if body else header)
    return SHEET_DELIMITER.join(sections)


class Extractor:
    """Turns a selected file into a Document, tracking one ExtractionState."""

    def __init__(
        self,
        *,
        pdf_reader: BasePdfReader,
        spreadsheet_reader: BaseSpreadsheetReader,
    ) -> None:
        self._pdf_reader = pdf_reader
        self._spreadsheet_reader = spreadsheet_reader
        self._source: SourceFile | None = None
        self._state: ExtractionState = Idle()

    @property
    def state(self) -> ExtractionState:
        return self._state

    async def extract(self, source: SourceFile, password: str | None = None) -> ExtractionState:
        """Start extraction for a newly selected file."""
        self._source = source
        self._state = Idle()
        return await self._run(source, password)

    async def extract_with_password(self, source: SourceFile, password: str) -> ExtractionState:
        """Retry a password-protected PDF with a new password."""
        if not isinstance(self._state, PasswordRequired) or self._source != source:
            raise ValueError(
                "extract_with_password requires a PasswordRequired state for this file"
            )
        return await self._run(source, password)

    async def _run(self, source: SourceFile, password: str | None) -> ExtractionState:
        self._state = Processing()
        media_type = normalize_media_type(source.media_type)
        Log.info(f"Extracting {source.name} ({media_type}, {len(source.data)} bytes)")
        try:
            document = await asyncio.to_thread(self._convert, source, media_type, password)
        except PdfPasswordRequiredError:
            Log.info(f"{source.name} is password protected")
            self._state = PasswordRequired(source=source)
        except PdfPasswordIncorrectError as exc:
            Log.warning(f"Incorrect password supplied for {source.name}")
            self._state = PasswordRequired(source=source, last_error=exc)
        except ExtractionError as exc:
            Log.error(f"Extraction failed for {source.name}: {exc}")
            self._state = Failed(reason=str(exc), error=exc)
        else:
            self._state = Ready(document=document)
        return self._state

    def _convert(self, source: SourceFile, media_type: str, password: str | None) -> Document:
        if media_type.startswith("image/"):
            return BinaryDocument(data=source.data, media_type=media_type)
        if media_type == PDF_MEDIA_TYPE:
            pages = self._pdf_reader.read_text_runs(source.data, password)
            text = join_pdf_pages(pages)
            Log.info(f"Extracted {len(text)} chars from {len(pages)} PDF pages")
            return TextDocument(content=text)
        if media_type in SPREADSHEET_MEDIA_TYPES:
            sheets = self._spreadsheet_reader.read_sheets(source.data)
            text = serialize_sheets(sheets)
            Log.info(f"Extracted {len(text)} chars from {len(sheets)} sheets")
            return TextDocument(content=text)
        if media_type.startswith("text/"):
            return TextDocument(content=source.data.decode("utf-8-sig", errors="replace"))
        Log.info(f"No extractor for {media_type}, passing through as attachment")
        return BinaryDocument(data=source.data, media_type=media_type)
