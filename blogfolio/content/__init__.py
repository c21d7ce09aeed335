"""Utilities for loading and validating markdown content."""

from .builder import build_post, build_video
from .dates import format_date, normalize_date
from .errors import (
    ContentError,
    ContentLoadError,
    InvalidDateError,
    MalformedFrontMatterError,
    MissingRequiredFieldError,
    UnreadableSourceError,
)
from .frontmatter import FrontMatterValue, serialize_front_matter, split_front_matter
from .models import ContentKind, ContentRecord, Post, Video

__all__ = [
    "ContentError",
    "ContentKind",
    "ContentLoadError",
    "ContentRecord",
    "FrontMatterValue",
    "InvalidDateError",
    "MalformedFrontMatterError",
    "MissingRequiredFieldError",
    "Post",
    "UnreadableSourceError",
    "Video",
    "build_post",
    "build_video",
    "format_date",
    "normalize_date",
    "serialize_front_matter",
    "split_front_matter",
]
