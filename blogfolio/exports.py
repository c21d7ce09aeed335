"""Serialize content records and blog pages for the page renderer."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Sequence

from .content.models import ContentRecord, Post, Video
from .pagination import Page, page_path

STYLESHEET_NAME = "highlight.css"
VIDEO_LISTING_NAME = "videos.json"


@dataclass(slots=True)
class ExportResult:
    """Files written (and stale files removed) by an export run."""

    written: list[Path] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)

    def extend(self, other: "ExportResult") -> None:
        self.written.extend(other.written)
        self.removed.extend(other.removed)


def page_payload(page: Page[Post]) -> dict[str, Any]:
    """Plain mapping describing one blog index page."""
    return {
        "page": page.page,
        "page_count": page.page_count,
        "page_size": page.page_size,
        "total_items": page.total_items,
        "path": page_path(page.page),
        "newer_path": page_path(page.newer_page) if page.newer_page else None,
        "older_path": page_path(page.older_page) if page.older_page else None,
        "items": [_record_payload(post) for post in page.items],
    }


def write_post_records(posts: Iterable[Post], destination: Path) -> ExportResult:
    """Write one ``<slug>.json`` per post."""
    return _write_json_files(
        ((f"{post.slug}.json", _record_payload(post)) for post in posts),
        destination,
    )


def write_blog_pages(pages: Sequence[Page[Post]], destination: Path) -> ExportResult:
    """Write ``page-NNN.json`` for every blog index page."""
    return _write_json_files(
        ((f"page-{page.page:03d}.json", page_payload(page)) for page in pages),
        destination,
    )


def write_video_records(videos: Iterable[Video], destination: Path) -> ExportResult:
    """Write one ``<slug>.json`` per video."""
    return _write_json_files(
        ((f"{video.slug}.json", _record_payload(video)) for video in videos),
        destination,
    )


def write_video_listing(videos: Sequence[Video], output_dir: Path) -> Path:
    """Write ``videos.json``: every video newest first, the first one featured.

    The listing sits beside the ``videos/`` folder, never inside it.
    """
    listing = [
        {**_record_payload(video), "featured": index == 0}
        for index, video in enumerate(videos)
    ]
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / VIDEO_LISTING_NAME
    _write_json(path, listing)
    return path


def write_site_data(
    posts: Sequence[Post],
    pages: Sequence[Page[Post]],
    videos: Sequence[Video],
    output_dir: Path,
) -> ExportResult:
    """Write every export under ``output_dir``."""
    result = ExportResult()
    result.extend(write_post_records(posts, output_dir / "posts"))
    result.extend(write_blog_pages(pages, output_dir / "blog"))
    result.extend(write_video_records(videos, output_dir / "videos"))
    result.written.append(write_video_listing(videos, output_dir))
    return result


def write_stylesheet(css: str, output_dir: Path) -> Path:
    """Write the token stylesheet for highlighted code blocks."""
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / STYLESHEET_NAME
    path.write_text(css, encoding="utf-8")
    return path


def _record_payload(record: ContentRecord) -> dict[str, Any]:
    return record.model_dump(mode="json")


def _write_json_files(entries: Iterable[tuple[str, Any]], destination: Path) -> ExportResult:
    destination.mkdir(parents=True, exist_ok=True)
    existing_files = set(destination.glob("*.json"))
    result = ExportResult()

    for name, payload in entries:
        path = destination / name
        _write_json(path, payload)
        result.written.append(path)
        existing_files.discard(path)

    for leftover in sorted(existing_files):
        leftover.unlink(missing_ok=True)
        result.removed.append(leftover)

    return result


def _write_json(path: Path, payload: Any) -> None:
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, ensure_ascii=False, indent=2)
        handle.write("\n")
