import io

import pdfplumber
from pdfminer.pdfdocument import PDFEncryptionError, PDFPasswordIncorrect

from docanalyzer.extraction.base import BasePdfReader
from docanalyzer.extraction.exceptions import (
    CorruptDocumentError,
    ExtractionError,
    PdfPasswordIncorrectError,
    PdfPasswordRequiredError,
    UnsupportedEncryptionError,
)


class PdfPlumberAdapter(BasePdfReader):
    """Reads PDF text runs using pdfplumber."""

    def read_text_runs(self, pdf_bytes: bytes, password: str | None = None) -> list[list[str]]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes), password=password or "") as pdf:
                return [
                    [word["text"] for word in page.extract_words()]
                    for page in pdf.pages
                ]
        except ExtractionError:
            raise
        except Exception as exc:
            raise self._translate(exc, password) from exc

    @staticmethod
    def _translate(exc: Exception, password: str | None) -> ExtractionError:
        cause = _root_cause(exc)
        if isinstance(cause, PDFPasswordIncorrect):
            if not password:
                return PdfPasswordRequiredError("PDF is password protected")
            return PdfPasswordIncorrectError("Incorrect password for PDF")
        if isinstance(cause, PDFEncryptionError):
            return UnsupportedEncryptionError(f"Unsupported PDF encryption: {cause}")
        return CorruptDocumentError(f"pdfplumber extraction failed: {cause}")


def _root_cause(exc: BaseException) -> BaseException:
    # pdfplumber wraps pdfminer errors, passing the original as the first arg.
    cause = exc
    while True:
        if cause.args and isinstance(cause.args[0], BaseException):
            cause = cause.args[0]
        elif cause.__cause__ is not None:
            cause = cause.__cause__
        else:
            return cause
