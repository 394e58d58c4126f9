"""Tests for the Extractor and its password state machine."""

import asyncio
from unittest.mock import MagicMock

import pytest

from docanalyzer.extraction.base import BasePdfReader, BaseSpreadsheetReader
from docanalyzer.extraction.exceptions import (
    CorruptDocumentError,
    PdfPasswordIncorrectError,
    PdfPasswordRequiredError,
    UnsupportedEncryptionError,
)
from docanalyzer.extraction.extractor import (
    Extractor,
    join_pdf_pages,
    normalize_media_type,
    serialize_sheets,
)
from docanalyzer.extraction.models import (
    BinaryDocument,
    Failed,
    Idle,
    PasswordRequired,
    Ready,
    Sheet,
    SourceFile,
    TextDocument,
)

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _make_extractor() -> tuple[Extractor, MagicMock, MagicMock]:
    pdf_reader = MagicMock(spec=BasePdfReader)
    spreadsheet_reader = MagicMock(spec=BaseSpreadsheetReader)
    extractor = Extractor(pdf_reader=pdf_reader, spreadsheet_reader=spreadsheet_reader)
    return extractor, pdf_reader, spreadsheet_reader


def _source(media_type: str, data: bytes = b"data", name: str = "file") -> SourceFile:
    return SourceFile(name=name, data=data, media_type=media_type)


class TestInitialState:
    def test_starts_idle(self) -> None:
        extractor, _, _ = _make_extractor()
        assert extractor.state == Idle()


class TestImages:
    @pytest.mark.parametrize("media_type", ["image/png", "image/jpeg", "image/webp"])
    def test_image_passes_through_unchanged(self, media_type: str) -> None:
        extractor, pdf_reader, _ = _make_extractor()
        state = asyncio.run(extractor.extract(_source(media_type, b"\x89PNG")))
        assert state == Ready(document=BinaryDocument(data=b"\x89PNG", media_type=media_type))
        pdf_reader.read_text_runs.assert_not_called()


class TestPdf:
    def test_joins_runs_with_spaces_and_pages_with_blank_line(self) -> None:
        extractor, pdf_reader, _ = _make_extractor()
        pdf_reader.read_text_runs.return_value = [["Page", "one"], ["Page", "two"]]
        state = asyncio.run(extractor.extract(_source("application/pdf")))
        assert state == Ready(document=TextDocument(content="Page one\n\nPage two"))

    def test_password_required_without_error(self) -> None:
        extractor, pdf_reader, _ = _make_extractor()
        pdf_reader.read_text_runs.side_effect = PdfPasswordRequiredError("locked")
        source = _source("application/pdf")
        state = asyncio.run(extractor.extract(source))
        assert state == PasswordRequired(source=source)
        assert extractor.state is state

    def test_wrong_password_stays_password_required_with_error(self) -> None:
        extractor, pdf_reader, _ = _make_extractor()
        source = _source("application/pdf")
        pdf_reader.read_text_runs.side_effect = PdfPasswordRequiredError("locked")
        asyncio.run(extractor.extract(source))

        pdf_reader.read_text_runs.side_effect = PdfPasswordIncorrectError("wrong")
        state = asyncio.run(extractor.extract_with_password(source, "nope"))

        assert isinstance(state, PasswordRequired)
        assert isinstance(state.last_error, PdfPasswordIncorrectError)
        pdf_reader.read_text_runs.assert_called_with(b"data", "nope")

    def test_retries_are_unbounded_until_correct(self) -> None:
        extractor, pdf_reader, _ = _make_extractor()
        source = _source("application/pdf")
        pdf_reader.read_text_runs.side_effect = PdfPasswordRequiredError("locked")
        asyncio.run(extractor.extract(source))
        pdf_reader.read_text_runs.side_effect = PdfPasswordIncorrectError("wrong")
        for attempt in range(5):
            state = asyncio.run(extractor.extract_with_password(source, f"guess{attempt}"))
            assert isinstance(state, PasswordRequired)

        pdf_reader.read_text_runs.side_effect = None
        pdf_reader.read_text_runs.return_value = [["secret", "text"]]
        state = asyncio.run(extractor.extract_with_password(source, "right"))
        assert state == Ready(document=TextDocument(content="secret text"))

    @pytest.mark.parametrize(
        "error",
        [CorruptDocumentError("broken"), UnsupportedEncryptionError("aes-512")],
    )
    def test_terminal_errors_fail(self, error: Exception) -> None:
        extractor, pdf_reader, _ = _make_extractor()
        pdf_reader.read_text_runs.side_effect = error
        state = asyncio.run(extractor.extract(_source("application/pdf")))
        assert isinstance(state, Failed)
        assert state.error is error
        assert state.reason == str(error)

    def test_failure_during_retry_is_terminal(self) -> None:
        extractor, pdf_reader, _ = _make_extractor()
        source = _source("application/pdf")
        pdf_reader.read_text_runs.side_effect = PdfPasswordRequiredError("locked")
        asyncio.run(extractor.extract(source))
        pdf_reader.read_text_runs.side_effect = UnsupportedEncryptionError("nope")
        state = asyncio.run(extractor.extract_with_password(source, "pw"))
        assert isinstance(state, Failed)
        with pytest.raises(ValueError, match="PasswordRequired"):
            asyncio.run(extractor.extract_with_password(source, "pw"))


class TestPasswordRetryGuards:
    def test_retry_without_password_state_raises(self) -> None:
        extractor, _, _ = _make_extractor()
        with pytest.raises(ValueError, match="PasswordRequired"):
            asyncio.run(extractor.extract_with_password(_source("application/pdf"), "pw"))

    def test_retry_for_other_file_raises(self) -> None:
        extractor, pdf_reader, _ = _make_extractor()
        pdf_reader.read_text_runs.side_effect = PdfPasswordRequiredError("locked")
        asyncio.run(extractor.extract(_source("application/pdf", name="a.pdf")))
        with pytest.raises(ValueError):
            asyncio.run(
                extractor.extract_with_password(_source("application/pdf", name="b.pdf"), "pw")
            )

    def test_new_selection_discards_password_state(self) -> None:
        extractor, pdf_reader, _ = _make_extractor()
        pdf_reader.read_text_runs.side_effect = PdfPasswordRequiredError("locked")
        asyncio.run(extractor.extract(_source("application/pdf", name="a.pdf")))
        state = asyncio.run(extractor.extract(_source("text/plain", b"hello", name="b.txt")))
        assert state == Ready(document=TextDocument(content="hello"))


class TestSpreadsheets:
    def test_serializes_sheets_in_order(self) -> None:
        extractor, _, spreadsheet_reader = _make_extractor()
        spreadsheet_reader.read_sheets.return_value = [
            Sheet(name="Sheet1", rows=[["a", "b"], ["1", "2"]]),
            Sheet(name="Sheet2", rows=[["c"]]),
        ]
        state = asyncio.run(extractor.extract(_source(XLSX)))
        assert state == Ready(document=TextDocument(
            content="--- Sheet: Sheet1 ---\na,b\n1,2\n\n--- Sheet: Sheet2 ---\nc"
        ))

    def test_corrupt_workbook_fails(self) -> None:
        extractor, _, spreadsheet_reader = _make_extractor()
        spreadsheet_reader.read_sheets.side_effect = CorruptDocumentError("bad zip")
        state = asyncio.run(extractor.extract(_source(XLSX)))
        assert isinstance(state, Failed)


class TestTextAndUnknown:
    def test_text_is_decoded(self) -> None:
        extractor, _, _ = _make_extractor()
        state = asyncio.run(extractor.extract(_source("text/plain; charset=utf-8", "héllo".encode())))
        assert state == Ready(document=TextDocument(content="héllo"))

    def test_text_bom_is_dropped(self) -> None:
        extractor, _, _ = _make_extractor()
        state = asyncio.run(extractor.extract(_source("text/csv", b"\xef\xbb\xbfa,b")))
        assert state == Ready(document=TextDocument(content="a,b"))

    def test_unknown_type_passes_through_as_binary(self) -> None:
        extractor, pdf_reader, spreadsheet_reader = _make_extractor()
        state = asyncio.run(extractor.extract(_source("application/zip", b"PK")))
        assert state == Ready(document=BinaryDocument(data=b"PK", media_type="application/zip"))
        pdf_reader.read_text_runs.assert_not_called()
        spreadsheet_reader.read_sheets.assert_not_called()


class TestHelpers:
    def test_normalize_media_type(self) -> None:
        assert normalize_media_type(" Application/PDF ; x=1") == "application/pdf"

    def test_join_pdf_pages_keeps_blank_pages(self) -> None:
        assert join_pdf_pages([["a"], [], ["b", "c"]]) == "a\n\n\n\nb c"

    def test_serialize_quotes_cells_with_commas(self) -> None:
        text = serialize_sheets([Sheet(name="S", rows=[["x, y", ""]])])
        assert text == '--- Sheet: S ---\n"x, y",'

    def test_serialize_empty_sheet_is_header_only(self) -> None:
        assert serialize_sheets([Sheet(name="Empty")]) == "--- Sheet: Empty ---"
