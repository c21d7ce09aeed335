"""Load the article and video collections for one build run."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, Iterator, Mapping, Sequence, TypeVar

from ..config import Config
from ..highlight import build_registry
from ..markdown import MarkdownRenderer
from ..pagination import Page, iter_pages, paginate, sort_by_date_descending
from .builder import build_post, build_video
from .errors import ContentError, ContentLoadError, UnreadableSourceError
from .frontmatter import FrontMatterValue, split_front_matter
from .models import ContentRecord, Post, Video

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = {".md"}

RecordT = TypeVar("RecordT", bound=ContentRecord)
RecordFactory = Callable[[Mapping[str, FrontMatterValue], str, Path, MarkdownRenderer], RecordT]


def iter_content_files(directory: Path) -> Iterator[Path]:
    """Yield markdown files directly inside ``directory`` in filename order."""
    if not directory.is_dir():
        return
    for path in sorted(directory.iterdir()):
        if path.is_file() and path.suffix.lower() in SUPPORTED_SUFFIXES:
            yield path


def read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise UnreadableSourceError(f"Cannot read source: {exc}", source_path=path) from exc


def load_document(path: Path, factory: RecordFactory[RecordT], renderer: MarkdownRenderer) -> RecordT:
    """Read, split, render, and validate a single markdown source."""
    text = read_source(path)
    metadata, body = split_front_matter(text, source_path=path)
    record = factory(metadata, body, path, renderer)
    logger.debug("Loaded %s from %s", record.slug, path)
    return record


class ContentRepository:
    """Posts and videos for a single build, read once and held in memory.

    Each collection is read lazily on first access. Every document in a
    collection is attempted; failures are gathered and raised together as
    a ``ContentLoadError`` so authors see the complete list at once.
    """

    def __init__(self, config: Config, renderer: MarkdownRenderer | None = None) -> None:
        self._config = config
        self._renderer = renderer or MarkdownRenderer(
            site_url=config.site_url,
            registry=build_registry(config.highlight.languages),
            highlight=config.highlight.enabled,
        )
        self._posts: list[Post] | None = None
        self._videos: list[Video] | None = None

    @property
    def config(self) -> Config:
        return self._config

    @property
    def renderer(self) -> MarkdownRenderer:
        return self._renderer

    def posts(self) -> list[Post]:
        """Posts in filename order."""
        if self._posts is None:
            self._posts = self._load_collection(self._config.posts_dir, build_post)
        return list(self._posts)

    def videos(self) -> list[Video]:
        """Videos in filename order."""
        if self._videos is None:
            self._videos = self._load_collection(self._config.videos_dir, build_video)
        return list(self._videos)

    def sorted_posts(self) -> list[Post]:
        return sort_by_date_descending(self.posts())

    def sorted_videos(self) -> list[Video]:
        return sort_by_date_descending(self.videos())

    def post_slugs(self) -> list[str]:
        return [post.slug for post in self.posts()]

    def video_slugs(self) -> list[str]:
        return [video.slug for video in self.videos()]

    def get_post(self, slug: str) -> Post:
        return _find(self.posts(), slug, "post")

    def get_video(self, slug: str) -> Video:
        return _find(self.videos(), slug, "video")

    def blog_page(self, page_number: int) -> Page[Post]:
        return paginate(self.sorted_posts(), self._config.posts_per_page, page_number)

    def blog_pages(self) -> list[Page[Post]]:
        return list(iter_pages(self.sorted_posts(), self._config.posts_per_page))

    def _load_collection(self, directory: Path, factory: RecordFactory[RecordT]) -> list[RecordT]:
        paths = list(iter_content_files(directory))
        if not paths:
            logger.info("No markdown sources found in %s", directory)
            return []

        outcomes = self._map(lambda path: _attempt(path, factory, self._renderer), paths)

        records: list[RecordT] = []
        errors: list[ContentError] = []
        for outcome in outcomes:
            if isinstance(outcome, ContentError):
                errors.append(outcome)
            else:
                records.append(outcome)
        if errors:
            raise ContentLoadError(errors)
        return records

    def _map(
        self,
        func: Callable[[Path], RecordT | ContentError],
        paths: Sequence[Path],
    ) -> Iterable[RecordT | ContentError]:
        workers = min(self._config.workers, len(paths))
        if workers <= 1:
            return [func(path) for path in paths]
        # Executor.map yields results in input order.
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(func, paths))


def _attempt(path: Path, factory: RecordFactory[RecordT], renderer: MarkdownRenderer) -> RecordT | ContentError:
    try:
        return load_document(path, factory, renderer)
    except ContentError as exc:
        logger.debug("Failed to load %s: %s", path, exc)
        return exc


def _find(records: Iterable[RecordT], slug: str, label: str) -> RecordT:
    for record in records:
        if record.slug == slug:
            return record
    raise KeyError(f"No {label} with slug '{slug}'.")
