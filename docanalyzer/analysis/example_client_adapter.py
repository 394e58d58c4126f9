"""Example analysis client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseAnalysisClient and register the provider in AnalysisClientFactory.
"""

import json
from typing import ClassVar

from docanalyzer.analysis.client_base import BaseAnalysisClient
from docanalyzer.extraction.models import BinaryDocument


class ExampleClientAdapter(BaseAnalysisClient):
    """Example adapter that answers without any network calls.

    Schema-constrained calls get a fixed valid analysis JSON, free-text calls
    (chunk summaries) get a fixed summary line.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "summary": "Example analysis produced without contacting an AI provider.",
        "criticalFindings": [],
        "costAndRiskAnalysis": {"costs": [], "risks": []},
    }
    DEFAULT_SUMMARY: ClassVar[str] = "No findings, costs or risks in this part."

    async def generate_content(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        attachment: BinaryDocument | None = None,
        json_schema: dict[str, object] | None = None,
    ) -> str:
        _ = model, temperature, prompt, attachment
        if json_schema is None:
            return self.DEFAULT_SUMMARY
        return json.dumps(self.DEFAULT_RESPONSE)
