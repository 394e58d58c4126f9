from collections.abc import Callable

from docanalyzer.analysis.factory import AnalysisOrchestratorFactory
from docanalyzer.analysis.models import Analysis
from docanalyzer.analysis.orchestrator import AnalysisOrchestrator, ProgressCallback
from docanalyzer.analysis.prompt_loader import ANALYSIS_PROMPT, load_prompt_template
from docanalyzer.config.settings import Settings
from docanalyzer.extraction.exceptions import ExtractionError
from docanalyzer.extraction.extractor import Extractor
from docanalyzer.extraction.factory import PdfReaderFactory
from docanalyzer.extraction.models import (
    ExtractionState,
    Failed,
    PasswordRequired,
    Ready,
    SourceFile,
)
from docanalyzer.extraction.openpyxl_adapter import OpenpyxlAdapter
from docanalyzer.logging.logger import Log
from docanalyzer.processor.exceptions import ExtractionFailedError, PasswordEntryCancelledError

PasswordPrompt = Callable[[ExtractionError | None], str | None]


class Processor:
    """Runs one document through extraction and analysis.

    Pipeline: extract (with password retries) -> analyze -> validated Analysis.
    """

    def __init__(
        self,
        extractor: Extractor,
        orchestrator: AnalysisOrchestrator,
        prompt: str,
    ) -> None:
        self._extractor = extractor
        self._orchestrator = orchestrator
        self._prompt = prompt

    async def process(self, source: SourceFile, request_password: PasswordPrompt) -> Analysis:
        """Extract and analyze a file.

        `request_password` is called with the last password error (or None on
        the first ask) each time the PDF is still locked; returning None
        stops the run.

        Raises:
            PasswordEntryCancelledError: if request_password returns None.
            ExtractionFailedError: if extraction ends in the Failed state.
            AnalysisError: if any analysis stage fails.
        """
        Log.info(f"Processing {source.name}")
        state: ExtractionState = await self._extractor.extract(source)
        while isinstance(state, PasswordRequired):
            password = request_password(state.last_error)
            if password is None:
                raise PasswordEntryCancelledError(f"Password entry cancelled for {source.name}")
            state = await self._extractor.extract_with_password(source, password)

        if isinstance(state, Failed):
            raise ExtractionFailedError(state.reason)
        if not isinstance(state, Ready):
            raise ExtractionFailedError(f"Extraction ended in unexpected state {state!r}")

        return await self._orchestrator.analyze(self._prompt, state.document)


def build_processor(
    settings: Settings,
    prompt: str | None = None,
    on_progress: ProgressCallback | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    extractor = Extractor(
        pdf_reader=PdfReaderFactory.create(settings),
        spreadsheet_reader=OpenpyxlAdapter(),
    )
    orchestrator = AnalysisOrchestratorFactory.create(settings, on_progress=on_progress)
    if prompt is None:
        prompt = load_prompt_template(ANALYSIS_PROMPT).strip()
    return Processor(extractor=extractor, orchestrator=orchestrator, prompt=prompt)
