"""Build reporting helpers for Blogfolio."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Sequence

from pydantic import BaseModel, Field

from .content.models import Post, Video
from .pagination import Page


class CollectionStats(BaseModel):
    total: int
    languages: dict[str, int] = Field(default_factory=dict)
    newest: datetime | None = None
    oldest: datetime | None = None


class PageStats(BaseModel):
    pages: int
    page_size: int
    items: int


class BuildReport(BaseModel):
    project: str
    generated_at: datetime
    duration_seconds: float
    posts: CollectionStats
    videos: CollectionStats
    blog_pages: PageStats
    files_written: int = 0
    files_removed: int = 0
    warnings: list[str] = Field(default_factory=list)


def build_post_stats(posts: Iterable[Post]) -> CollectionStats:
    languages: dict[str, int] = {}
    dates: list[datetime] = []
    for post in posts:
        languages[post.lang] = languages.get(post.lang, 0) + 1
        dates.append(post.date)
    return CollectionStats(
        total=len(dates),
        languages=dict(sorted(languages.items())),
        newest=max(dates) if dates else None,
        oldest=min(dates) if dates else None,
    )


def build_video_stats(videos: Iterable[Video]) -> CollectionStats:
    dates = [video.date for video in videos]
    return CollectionStats(
        total=len(dates),
        newest=max(dates) if dates else None,
        oldest=min(dates) if dates else None,
    )


def build_page_stats(pages: Sequence[Page[Post]], page_size: int) -> PageStats:
    return PageStats(
        pages=len(pages),
        page_size=page_size,
        items=sum(len(page.items) for page in pages),
    )


def assemble_report(
    *,
    project: str,
    duration_seconds: float,
    posts: CollectionStats,
    videos: CollectionStats,
    blog_pages: PageStats,
    files_written: int = 0,
    files_removed: int = 0,
) -> BuildReport:
    warnings: list[str] = []
    if posts.total == 0:
        warnings.append("No posts found.")
    if videos.total == 0:
        warnings.append("No videos found.")

    return BuildReport(
        project=project,
        generated_at=datetime.now(timezone.utc),
        duration_seconds=duration_seconds,
        posts=posts,
        videos=videos,
        blog_pages=blog_pages,
        files_written=files_written,
        files_removed=files_removed,
        warnings=warnings,
    )


def write_report(report: BuildReport, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / "build-report.json"
    with target.open("w", encoding="utf-8") as handle:
        json.dump(report.model_dump(mode="json"), handle, ensure_ascii=False, indent=2)
    return target
