class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class ExtractionFailedError(ProcessorError):
    """Raised when the selected file ends extraction in the Failed state."""


class PasswordEntryCancelledError(ProcessorError):
    """Raised when the user stops entering passwords for a protected PDF."""
