"""Turn parsed front matter and markdown bodies into validated records."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, TypeVar

from pydantic import ValidationError

from ..markdown import MarkdownRenderer
from .dates import normalize_date
from .errors import MalformedFrontMatterError, MissingRequiredFieldError
from .frontmatter import FrontMatterValue
from .models import ContentRecord, Post, Video

DEFAULT_LANG = "en"

RecordT = TypeVar("RecordT", bound=ContentRecord)


def build_post(
    metadata: Mapping[str, FrontMatterValue],
    body: str,
    filename: str | Path,
    renderer: MarkdownRenderer,
) -> Post:
    """Assemble a ``Post`` from one document."""
    fields = _common_fields(metadata, body, filename, renderer)
    fields["lang"] = _optional_text(metadata, "lang") or DEFAULT_LANG

    summary = _optional_text(metadata, "summary")
    if summary:
        fields["summary"] = summary
        fields["summary_html"] = renderer.render(summary)
        fields["summary_plain"] = renderer.render_plain_text(summary)

    return _construct(Post, fields, filename)


def build_video(
    metadata: Mapping[str, FrontMatterValue],
    body: str,
    filename: str | Path,
    renderer: MarkdownRenderer,
) -> Video:
    """Assemble a ``Video`` from one document; ``youtube`` is required."""
    fields = _common_fields(metadata, body, filename, renderer)
    fields["youtube"] = _required_text(metadata, "youtube", filename)
    return _construct(Video, fields, filename)


def _common_fields(
    metadata: Mapping[str, FrontMatterValue],
    body: str,
    filename: str | Path,
    renderer: MarkdownRenderer,
) -> dict[str, Any]:
    title = _required_text(metadata, "title", filename)
    raw_date = metadata.get("date")
    if raw_date is None:
        raise MissingRequiredFieldError("date", source_path=filename)

    return {
        "slug": _optional_text(metadata, "slug") or Path(filename).stem,
        "title": title,
        "date": normalize_date(raw_date, source_path=filename),
        "content": body,
        "html": renderer.render(body),
        "filename": str(Path(filename).resolve()),
    }


def _required_text(metadata: Mapping[str, FrontMatterValue], key: str, filename: str | Path) -> str:
    value = _optional_text(metadata, key)
    if not value:
        raise MissingRequiredFieldError(key, source_path=filename)
    return value


def _optional_text(metadata: Mapping[str, FrontMatterValue], key: str) -> str | None:
    value = metadata.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _construct(model: type[RecordT], fields: dict[str, Any], filename: str | Path) -> RecordT:
    try:
        return model(**fields)
    except ValidationError as exc:
        raise MalformedFrontMatterError(f"Invalid metadata: {exc}", source_path=filename) from exc
