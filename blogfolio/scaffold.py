"""Utilities for scaffolding new posts and videos."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

from .config import Config
from .content.frontmatter import FrontMatterValue, serialize_front_matter

SLUG_PATTERN = re.compile(r"[^a-z0-9\-]+")
WHITESPACE_PATTERN = re.compile(r"\s+")

ContentKind = Literal["post", "video"]


class ScaffoldError(RuntimeError):
    """Raised when scaffolding cannot continue."""


@dataclass(slots=True)
class ScaffoldResult:
    """Details about filesystem writes performed during scaffolding."""

    created: list[Path] = field(default_factory=list)
    updated: list[Path] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    def record(self, path: Path, existed: bool) -> None:
        if existed:
            self.updated.append(path)
        else:
            self.created.append(path)


def slugify(value: str) -> str:
    """Convert arbitrary text into a URL-safe slug ('' when nothing usable remains)."""
    text = value.strip().lower()
    text = WHITESPACE_PATTERN.sub("-", text)
    text = re.sub(r"_+", "-", text)
    text = SLUG_PATTERN.sub("-", text)
    text = re.sub(r"-{2,}", "-", text)
    return text.strip("-")


def normalize_slug(raw: str) -> str:
    slug = slugify(raw)
    if not slug:
        raise ScaffoldError("Unable to derive a valid slug. Provide letters, numbers, or hyphens.")
    return slug


def default_title(slug: str) -> str:
    """Generate a human-friendly title from a slug."""
    text = WHITESPACE_PATTERN.sub(" ", slug.replace("-", " ")).strip()
    if not text:
        return "Untitled"
    return " ".join(word.capitalize() for word in text.split())


def scaffold_content(
    config: Config,
    kind: ContentKind,
    slug: str,
    title: str | None = None,
    *,
    youtube: str | None = None,
    force: bool = False,
    now: datetime | None = None,
) -> ScaffoldResult:
    """Create a markdown source with a front matter header for a post or video."""
    slug = normalize_slug(slug)
    title = title.strip() if title else ""
    if not title:
        title = default_title(slug)
    moment = (now or datetime.now(timezone.utc)).replace(microsecond=0)

    metadata: dict[str, FrontMatterValue] = {"slug": slug, "title": title, "date": moment}
    result = ScaffoldResult()

    if kind == "post":
        metadata["lang"] = "en"
        directory = config.posts_dir
        body = "Markdown body starts here.\n"
    elif kind == "video":
        if not youtube or not youtube.strip():
            raise ScaffoldError("Videos need a YouTube id; pass --youtube.")
        metadata["youtube"] = youtube.strip()
        directory = config.videos_dir
        body = ""
    else:
        raise ScaffoldError(f"Unsupported content type: {kind}")

    path = directory / f"{slug}.md"
    existed = _write_text(path, serialize_front_matter(metadata, body), force=force)
    result.record(path, existed)
    if kind == "post":
        result.notes.append("Add a 'summary' key to show an abstract above the article.")
    return result


def _write_text(path: Path, content: str, *, force: bool) -> bool:
    path.parent.mkdir(parents=True, exist_ok=True)
    existed = path.exists()
    if existed and not force:
        raise ScaffoldError(f"Path already exists: {path}")
    path.write_text(content, encoding="utf-8")
    return existed
