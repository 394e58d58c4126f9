import mimetypes
from pathlib import Path

from docanalyzer.extraction.models import SourceFile

DEFAULT_MEDIA_TYPE = "application/octet-stream"

_EXTRA_MEDIA_TYPES = {
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".xlsm": "application/vnd.ms-excel.sheet.macroEnabled.12",
    ".webp": "image/webp",
    ".md": "text/markdown",
}


def guess_media_type(path: Path) -> str:
    """Guess a media type from the file extension."""
    extra = _EXTRA_MEDIA_TYPES.get(path.suffix.lower())
    if extra is not None:
        return extra
    media_type, _ = mimetypes.guess_type(path.name)
    return media_type or DEFAULT_MEDIA_TYPE


class FileLoader:
    """Reads a selected file from disk into a SourceFile."""

    def load(self, path: Path, media_type: str | None = None) -> SourceFile:
        """Read file bytes and resolve the media type.

        Raises:
            FileNotFoundError: if the file does not exist.
        """
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        return SourceFile(
            name=path.name,
            data=path.read_bytes(),
            media_type=media_type or guess_media_type(path),
        )
