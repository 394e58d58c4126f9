from abc import ABC, abstractmethod

from docanalyzer.extraction.models import BinaryDocument


class BaseAnalysisClient(ABC):
    """Contract for provider-specific AI clients used by the analysis."""

    @abstractmethod
    async def generate_content(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        attachment: BinaryDocument | None = None,
        json_schema: dict[str, object] | None = None,
    ) -> str:
        """Return the provider response as plain text.

        When `json_schema` is given the provider is asked to answer with JSON
        matching it; callers still validate the answer themselves.

        Raises:
            AnalysisTransportError: if the call itself fails.
            AnalysisSizeLimitError: if the provider rejects the input as too large.
        """
