class ExtractionError(Exception):
    """Base exception for all document extraction errors."""


class PdfPasswordRequiredError(ExtractionError):
    """Raised when a PDF is encrypted and no password was supplied."""


class PdfPasswordIncorrectError(ExtractionError):
    """Raised when the supplied PDF password does not open the document."""


class CorruptDocumentError(ExtractionError):
    """Raised when a file is structurally broken or cannot be parsed."""


class UnsupportedEncryptionError(ExtractionError):
    """Raised when a PDF uses an encryption scheme the reader cannot handle."""
