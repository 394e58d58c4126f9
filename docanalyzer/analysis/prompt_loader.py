from pathlib import Path

from docanalyzer.analysis.exceptions import PromptLoadError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"

ANALYSIS_PROMPT = "analysis_prompt.txt"
TEXT_PROMPT = "text_prompt.txt"
MAP_PROMPT = "map_prompt.txt"
REDUCE_PROMPT = "reduce_prompt.txt"
ANALYSIS_SCHEMA = "analysis_schema.json"


def load_prompt_template(name: str, path: Path | None = None) -> str:
    """Load a prompt template from a file.

    Args:
        name: File name of the bundled template, e.g. "map_prompt.txt".
        path: Explicit path that overrides the bundled file.

    Returns:
        The raw template string with placeholders.

    Raises:
        PromptLoadError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / name
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PromptLoadError(f"Failed to load prompt template: {exc}") from exc


def load_json_schema(path: Path | None = None) -> str:
    """Load the analysis JSON schema from a file.

    Args:
        path: Path to the JSON schema file.
              Defaults to the bundled analysis_schema.json.

    Returns:
        The raw JSON schema string.

    Raises:
        PromptLoadError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / ANALYSIS_SCHEMA
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PromptLoadError(f"Failed to load JSON schema: {exc}") from exc
