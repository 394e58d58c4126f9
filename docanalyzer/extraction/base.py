from abc import ABC, abstractmethod

from docanalyzer.extraction.models import Sheet


class BasePdfReader(ABC):
    """Contract for all PDF text reading adapters."""

    @abstractmethod
    def read_text_runs(self, pdf_bytes: bytes, password: str | None = None) -> list[list[str]]:
        """Read the text runs of every page, in page order.

        Args:
            pdf_bytes: Raw PDF file content.
            password: Password for encrypted documents, if the user gave one.

        Returns:
            One list of text runs per page, pages ordered 1..N.

        Raises:
            PdfPasswordRequiredError: if the PDF is encrypted and no password was given.
            PdfPasswordIncorrectError: if the given password does not open the PDF.
            UnsupportedEncryptionError: if the encryption scheme is not supported.
            CorruptDocumentError: if the file cannot be parsed.
        """


class BaseSpreadsheetReader(ABC):
    """Contract for all spreadsheet workbook reading adapters."""

    @abstractmethod
    def read_sheets(self, workbook_bytes: bytes) -> list[Sheet]:
        """Read every worksheet in the workbook's declared order.

        Raises:
            CorruptDocumentError: if the workbook cannot be opened or read.
        """
