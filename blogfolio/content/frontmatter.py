"""Split markdown sources into front matter metadata and body text."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Any, Mapping, Union

import yaml

from .errors import MalformedFrontMatterError

DELIMITER = "---"

FrontMatterValue = Union[str, int, float, bool, date, datetime, None]
FrontMatter = dict[str, FrontMatterValue]

_PRIMITIVE_TYPES = (str, int, float, bool, date, datetime)


def split_front_matter(text: str, source_path: str | Path | None = None) -> tuple[FrontMatter, str]:
    """Return the metadata mapping and the untouched body that follows it."""
    lines = text.lstrip("\ufeff").splitlines(keepends=True)
    if not lines or lines[0].rstrip() != DELIMITER:
        raise MalformedFrontMatterError(
            f"Opening front matter delimiter '{DELIMITER}' missing.",
            source_path=source_path,
        )

    for idx, line in enumerate(lines[1:], start=1):
        if line.rstrip() == DELIMITER:
            raw_front_matter = "".join(lines[1:idx])
            body = "".join(lines[idx + 1 :])
            return _parse_block(raw_front_matter, source_path), body
    raise MalformedFrontMatterError(
        f"Closing front matter delimiter '{DELIMITER}' missing.",
        source_path=source_path,
    )


def serialize_front_matter(metadata: Mapping[str, FrontMatterValue], body: str = "") -> str:
    """Render metadata as a delimited YAML header followed by ``body``."""
    header = yaml.safe_dump(
        dict(metadata),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    return f"{DELIMITER}\n{header}{DELIMITER}\n{body}"


def _parse_block(raw: str, source_path: str | Path | None) -> FrontMatter:
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise MalformedFrontMatterError(f"Invalid YAML front matter: {exc}", source_path=source_path) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedFrontMatterError(
            f"Front matter must be a mapping, got {type(data).__name__}.",
            source_path=source_path,
        )

    metadata: FrontMatter = {}
    for key, value in data.items():
        if not isinstance(key, str):
            raise MalformedFrontMatterError(
                f"Front matter key {key!r} must be a string.",
                source_path=source_path,
            )
        metadata[key] = _ensure_primitive(key, value, source_path)
    return metadata


def _ensure_primitive(key: str, value: Any, source_path: str | Path | None) -> FrontMatterValue:
    if value is None or isinstance(value, _PRIMITIVE_TYPES):
        return value
    raise MalformedFrontMatterError(
        f"Front matter value for '{key}' must be a string, number, boolean, or date; "
        f"got {type(value).__name__}.",
        source_path=source_path,
    )
