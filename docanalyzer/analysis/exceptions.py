class AnalysisError(Exception):
    """Raised when document analysis fails."""


class AnalysisTransportError(AnalysisError):
    """Raised when the AI provider call fails (network, auth, quota, server)."""


class AnalysisSizeLimitError(AnalysisError):
    """Raised when the AI provider rejects the input as too large for its context."""


class ResponseParseError(AnalysisError):
    """Raised when the AI response is not valid JSON after fence stripping."""


class SchemaValidationError(AnalysisError):
    """Raised when the parsed AI response does not have the analysis shape."""


class MapPhaseError(AnalysisError):
    """Raised when a chunk summarization call returns no usable text."""


class PromptLoadError(AnalysisError):
    """Raised when a bundled prompt template or schema cannot be read."""
