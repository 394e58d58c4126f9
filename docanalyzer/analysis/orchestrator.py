"""Size-aware analysis orchestration.

Images and attachments go to the model in one call. Text up to the
character ceiling is embedded in one call. Longer text is split into
chunks, every chunk is summarized concurrently (map), and a final call
synthesizes the analysis from the summaries (reduce).
"""

import asyncio
import json
from collections.abc import Callable
from pathlib import Path

from docanalyzer.analysis.chunker import split_text
from docanalyzer.analysis.client_base import BaseAnalysisClient
from docanalyzer.analysis.exceptions import AnalysisError, MapPhaseError
from docanalyzer.analysis.models import Analysis, AnalysisProgress, Chunk, PartialSummary
from docanalyzer.analysis.prompt_loader import (
    MAP_PROMPT,
    REDUCE_PROMPT,
    TEXT_PROMPT,
    load_json_schema,
    load_prompt_template,
)
from docanalyzer.analysis.validator import validate_analysis
from docanalyzer.extraction.models import BinaryDocument, Document
from docanalyzer.logging.logger import Log

DEFAULT_CHAR_CEILING = 300_000
SUMMARY_DIVIDER = "\n\n---\n\n"

ProgressCallback = Callable[[AnalysisProgress], None]


def reassemble_summaries(partials: list[PartialSummary]) -> str:
    """Join partial summaries in chunk order, whatever order they finished in."""
    ordered = sorted(partials, key=lambda partial: partial.index)
    return SUMMARY_DIVIDER.join(partial.content for partial in ordered)


class AnalysisOrchestrator:
    """Runs the model calls needed to analyze one resolved Document."""

    def __init__(
        self,
        *,
        client: BaseAnalysisClient,
        model: str,
        temperature: float = 0.0,
        char_ceiling: int = DEFAULT_CHAR_CEILING,
        on_progress: ProgressCallback | None = None,
        prompt_dir: Path | None = None,
    ) -> None:
        if char_ceiling <= 0:
            raise ValueError(f"char_ceiling must be positive, got {char_ceiling}")
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._char_ceiling = char_ceiling
        self._on_progress = on_progress
        self._text_template = self._load(TEXT_PROMPT, prompt_dir)
        self._map_template = self._load(MAP_PROMPT, prompt_dir)
        self._reduce_template = self._load(REDUCE_PROMPT, prompt_dir)
        self._json_schema = json.loads(load_json_schema())

    @property
    def char_ceiling(self) -> int:
        return self._char_ceiling

    async def analyze(self, prompt: str, document: Document) -> Analysis:
        """Analyze a document and return the validated result.

        Raises:
            AnalysisError: subclass describing the stage that failed.
        """
        if isinstance(document, BinaryDocument):
            Log.info(f"Analyzing {document.media_type} attachment in a single call")
            raw = await self._single_call(prompt, attachment=document)
        elif len(document.content) <= self._char_ceiling:
            Log.info(f"Analyzing {len(document.content)} chars of text in a single call")
            raw = await self._single_call(
                self._text_template.format(prompt=prompt, document_text=document.content)
            )
        else:
            raw = await self._map_reduce(prompt, document.content)

        Log.debug(f"AI raw response:\n{raw}")
        analysis = validate_analysis(raw)
        Log.info(
            f"Analysis complete: {len(analysis.critical_findings)} findings, "
            f"{len(analysis.cost_and_risk_analysis.costs)} costs, "
            f"{len(analysis.cost_and_risk_analysis.risks)} risks"
        )
        return analysis

    async def _single_call(
        self, prompt: str, attachment: BinaryDocument | None = None
    ) -> str:
        self._notify("single", 0, 1)
        Log.debug(f"Analysis prompt:\n{prompt}")
        raw = await self._client.generate_content(
            model=self._model,
            temperature=self._temperature,
            prompt=prompt,
            attachment=attachment,
            json_schema=self._json_schema,
        )
        self._notify("single", 1, 1)
        return raw

    async def _map_reduce(self, prompt: str, text: str) -> str:
        chunks = split_text(text, self._char_ceiling)
        total = len(chunks)
        Log.info(
            f"Text of {len(text)} chars exceeds the {self._char_ceiling} char ceiling, "
            f"summarizing {total} chunks"
        )
        self._notify("map", 0, total)
        completed = 0

        async def summarize(chunk: Chunk) -> PartialSummary:
            nonlocal completed
            partial = await self._summarize_chunk(chunk, total)
            completed += 1
            self._notify("map", completed, total)
            return partial

        try:
            partials = await asyncio.gather(*(summarize(chunk) for chunk in chunks))
        except AnalysisError as exc:
            Log.error(f"Map phase failed, skipping the final analysis call: {exc}")
            raise

        reduce_prompt = self._reduce_template.format(
            prompt=prompt, summaries=reassemble_summaries(list(partials))
        )
        self._notify("reduce", 0, 1)
        Log.debug(f"Reduce prompt:\n{reduce_prompt}")
        raw = await self._client.generate_content(
            model=self._model,
            temperature=self._temperature,
            prompt=reduce_prompt,
            json_schema=self._json_schema,
        )
        self._notify("reduce", 1, 1)
        return raw

    async def _summarize_chunk(self, chunk: Chunk, total: int) -> PartialSummary:
        map_prompt = self._map_template.format(
            part_number=chunk.index + 1,
            part_count=total,
            chunk_text=chunk.content,
        )
        raw = await self._client.generate_content(
            model=self._model,
            temperature=self._temperature,
            prompt=map_prompt,
        )
        if not isinstance(raw, str) or not raw.strip():
            raise MapPhaseError(f"Chunk {chunk.index} produced no summary text")
        return PartialSummary(index=chunk.index, content=raw.strip())

    def _notify(self, phase: str, completed: int, total: int) -> None:
        progress = AnalysisProgress(phase=phase, completed=completed, total=total)
        Log.debug(f"Progress: {phase} {completed}/{total}")
        if self._on_progress is not None:
            self._on_progress(progress)

    @staticmethod
    def _load(name: str, prompt_dir: Path | None) -> str:
        return load_prompt_template(name, prompt_dir / name if prompt_dir else None)
