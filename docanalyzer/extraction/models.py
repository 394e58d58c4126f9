from dataclasses import dataclass, field

from docanalyzer.extraction.exceptions import ExtractionError


@dataclass(frozen=True)
class SourceFile:
    """A file as selected by the user, before any extraction."""

    name: str
    data: bytes = field(repr=False)
    media_type: str


@dataclass(frozen=True)
class BinaryDocument:
    """Image or opaque attachment handed to the model without extraction."""

    data: bytes = field(repr=False)
    media_type: str

    @property
    def is_image(self) -> bool:
        return self.media_type.startswith("image/")


@dataclass(frozen=True)
class TextDocument:
    """Plain text extracted from (or read as) the source file."""

    content: str


Document = BinaryDocument | TextDocument


@dataclass(frozen=True)
class Sheet:
    """One worksheet as read from a workbook, cell values already stringified."""

    name: str
    rows: list[list[str]] = field(default_factory=list)


@dataclass(frozen=True)
class Idle:
    """No extraction has started for the selected file."""


@dataclass(frozen=True)
class Processing:
    """Extraction is running."""


@dataclass(frozen=True)
class PasswordRequired:
    """The PDF needs a password; retry with Extractor.extract_with_password."""

    source: SourceFile
    last_error: ExtractionError | None = None


@dataclass(frozen=True)
class Ready:
    """Extraction finished and the document can be analyzed."""

    document: Document


@dataclass(frozen=True)
class Failed:
    """Extraction failed for good; a new file has to be selected."""

    reason: str
    error: ExtractionError | None = None


ExtractionState = Idle | Processing | PasswordRequired | Ready | Failed
