"""Typed representations of blog posts and videos."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from enum import Enum
from functools import cached_property
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from .dates import format_date

POSTS_BASE_PATH = "/blog"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={id}"
YOUTUBE_THUMBNAIL_URL = "https://img.youtube.com/vi/{id}/maxresdefault.jpg"

# Slugs name export files and URL segments: no separators, no leading dot.
SLUG_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9_-]*(?:\.[A-Za-z0-9_-]+)*")


class ContentKind(str, Enum):
    """Collection a record belongs to."""

    POST = "post"
    VIDEO = "video"


class ContentRecord(BaseModel):
    """Fields shared by every record loaded from a markdown source."""

    model_config = ConfigDict(frozen=True)

    slug: str = Field(description="URL-friendly identifier, unique within its collection.")
    title: str = Field(description="Display title.")
    date: datetime = Field(description="Publication instant, normalized to UTC.")
    content: str = Field(description="Raw markdown body.")
    html: str = Field(default="", description="Rendered body.")
    filename: str = Field(description="Absolute source path.", exclude=True)

    @field_validator("slug", "title")
    def _require_text(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("value cannot be empty")
        return cleaned

    @field_validator("slug")
    def _require_safe_slug(cls, value: str) -> str:
        if not SLUG_PATTERN.fullmatch(value):
            raise ValueError(
                f"slug {value!r} may only contain letters, digits, '-', '_' and single dots between them"
            )
        return value

    @field_validator("date")
    def _ensure_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @computed_field  # type: ignore[prop-decorator]
    @cached_property
    def date_pretty(self) -> str:
        return format_date(self.date)


class Post(ContentRecord):
    """A blog article."""

    lang: str = Field(default="en", description="Content language tag.")
    summary: Optional[str] = Field(default=None, description="Markdown abstract.")
    summary_html: Optional[str] = Field(default=None, description="Rendered abstract.")
    summary_plain: Optional[str] = Field(
        default=None, description="Abstract flattened to text for description tags."
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def path(self) -> str:
        return f"{POSTS_BASE_PATH}/{self.slug}/"

    @property
    def kind(self) -> ContentKind:
        return ContentKind.POST


class Video(ContentRecord):
    """A video listing backed by a YouTube upload."""

    youtube: str = Field(description="YouTube video identifier.")

    @field_validator("youtube")
    def _require_identifier(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("youtube identifier cannot be empty")
        return cleaned

    @computed_field  # type: ignore[prop-decorator]
    @property
    def url(self) -> str:
        return YOUTUBE_WATCH_URL.format(id=self.youtube)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def thumbnail_url(self) -> str:
        return YOUTUBE_THUMBNAIL_URL.format(id=self.youtube)

    @property
    def kind(self) -> ContentKind:
        return ContentKind.VIDEO
