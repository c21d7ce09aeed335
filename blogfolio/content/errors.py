"""Error taxonomy for documents that cannot become content records."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence


class ContentError(ValueError):
    """Base class for failures tied to a single source document."""

    def __init__(self, message: str, *, source_path: str | Path | None = None) -> None:
        self.source_path = str(source_path) if source_path is not None else None
        if self.source_path:
            message = f"{self.source_path}: {message}"
        super().__init__(message)


class MalformedFrontMatterError(ContentError):
    """Raised when the front matter block is missing, unterminated, or invalid."""


class MissingRequiredFieldError(ContentError):
    """Raised when a required metadata key is absent."""

    def __init__(self, field: str, *, source_path: str | Path | None = None) -> None:
        self.field = field
        super().__init__(f"Missing required field '{field}'.", source_path=source_path)


class InvalidDateError(ContentError):
    """Raised when a date value cannot be normalized."""

    def __init__(self, value: Any, *, source_path: str | Path | None = None) -> None:
        self.value = value
        super().__init__(f"Invalid date value {value!r}.", source_path=source_path)


class UnreadableSourceError(ContentError):
    """Raised when a source file cannot be read or decoded."""


class ContentLoadError(Exception):
    """Aggregate of every per-document failure found while loading a collection."""

    def __init__(self, errors: Sequence[ContentError]) -> None:
        self.errors = list(errors)
        noun = "document" if len(self.errors) == 1 else "documents"
        lines = [f"{len(self.errors)} {noun} failed to load:"]
        lines.extend(f"  {error}" for error in self.errors)
        super().__init__("\n".join(lines))
