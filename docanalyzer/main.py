import argparse
import asyncio
import getpass
import json
import sys
from pathlib import Path

from docanalyzer.analysis.exceptions import (
    AnalysisError,
    AnalysisSizeLimitError,
    AnalysisTransportError,
    ResponseParseError,
    SchemaValidationError,
)
from docanalyzer.analysis.models import AnalysisProgress
from docanalyzer.config.settings import Settings
from docanalyzer.export.pdf_report import write_analysis_report
from docanalyzer.extraction.exceptions import ExtractionError
from docanalyzer.logging.logger import Log
from docanalyzer.processor.exceptions import ExtractionFailedError, PasswordEntryCancelledError
from docanalyzer.processor.file_loader import FileLoader
from docanalyzer.processor.processor import PasswordPrompt, build_processor

SIZE_LIMIT_MESSAGE = (
    "The document is too large for the AI model to analyze, even after splitting "
    "it into parts. Try a smaller document or fewer pages."
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="docanalyzer",
        description=(
            "Analyze a PDF, image, spreadsheet or text file and print a summary, "
            "critical findings, costs and risks as JSON."
        ),
    )
    parser.add_argument("file", type=Path, help="document to analyze")
    parser.add_argument("--media-type", help="override the media type guessed from the file name")
    parser.add_argument("--password", help="password for an encrypted PDF")
    parser.add_argument("--prompt-file", type=Path, help="custom analysis prompt")
    parser.add_argument("--output", type=Path, help="write the analysis JSON to this file")
    parser.add_argument("--report", type=Path, help="write a PDF report to this file")
    return parser.parse_args(argv)


def make_password_prompt(initial: str | None) -> PasswordPrompt:
    """Return a prompt that tries `initial` first, then asks on the terminal."""
    pending = [initial] if initial else []

    def request_password(last_error: ExtractionError | None) -> str | None:
        if pending:
            return pending.pop()
        if last_error is not None:
            print(f"{last_error}. Please try again.", file=sys.stderr)
        try:
            password = getpass.getpass("PDF password (empty to cancel): ")
        except (EOFError, KeyboardInterrupt):
            return None
        return password or None

    return request_password


def log_progress(progress: AnalysisProgress) -> None:
    Log.info(f"{progress.phase}: {progress.completed}/{progress.total}")


def describe_error(exc: Exception) -> str:
    """Map a failure to the message shown to the user."""
    if isinstance(exc, AnalysisSizeLimitError):
        return SIZE_LIMIT_MESSAGE
    if isinstance(exc, (ResponseParseError, SchemaValidationError)):
        return f"The AI returned an invalid analysis: {exc}"
    if isinstance(exc, AnalysisTransportError):
        return f"Failed to analyze document: {exc}"
    if isinstance(exc, ExtractionFailedError):
        return f"Could not read the document: {exc}"
    if isinstance(exc, PasswordEntryCancelledError):
        return "Analysis cancelled: the PDF password was not provided."
    return str(exc)


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build dependencies -> analyze one file."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        prompt = args.prompt_file.read_text(encoding="utf-8").strip() if args.prompt_file else None
        source = FileLoader().load(args.file, media_type=args.media_type)
        processor = build_processor(settings, prompt=prompt, on_progress=log_progress)
        analysis = asyncio.run(
            processor.process(source, make_password_prompt(args.password))
        )
    except (OSError, AnalysisError, ExtractionFailedError, PasswordEntryCancelledError) as exc:
        Log.error(f"Analysis of {args.file} failed: {exc}")
        print(describe_error(exc), file=sys.stderr)
        return 1

    payload = json.dumps(analysis.to_dict(), indent=2, ensure_ascii=False)
    if args.output:
        args.output.write_text(payload + "\n", encoding="utf-8")
    else:
        print(payload)
    if args.report:
        write_analysis_report(analysis, args.report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
