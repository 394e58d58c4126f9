import pymupdf

from docanalyzer.extraction.base import BasePdfReader
from docanalyzer.extraction.exceptions import (
    CorruptDocumentError,
    ExtractionError,
    PdfPasswordIncorrectError,
    PdfPasswordRequiredError,
    UnsupportedEncryptionError,
)

_WORD_TEXT = 4


class PyMuPdfAdapter(BasePdfReader):
    """Reads PDF text runs using PyMuPDF."""

    def read_text_runs(self, pdf_bytes: bytes, password: str | None = None) -> list[list[str]]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if doc.needs_pass:
                    if not password:
                        raise PdfPasswordRequiredError("PDF is password protected")
                    if not doc.authenticate(password):
                        raise PdfPasswordIncorrectError("Incorrect password for PDF")
                return [
                    [word[_WORD_TEXT] for word in page.get_text("words")]
                    for page in doc
                ]
        except ExtractionError:
            raise
        except Exception as exc:
            if "encrypt" in str(exc).lower():
                raise UnsupportedEncryptionError(
                    f"Unsupported PDF encryption: {exc}"
                ) from exc
            raise CorruptDocumentError(f"pymupdf extraction failed: {exc}") from exc
