"""Lint diagnostics for the content workspace."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path

from .config import Config
from .content.builder import build_post, build_video
from .content.errors import ContentError, InvalidDateError, MissingRequiredFieldError
from .content.models import ContentRecord, Video
from .content.repository import RecordFactory, iter_content_files, load_document
from .highlight import build_registry
from .markdown import MarkdownRenderer

YOUTUBE_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")


class IssueSeverity(Enum):
    """Severity level for lint issues."""

    ERROR = auto()
    WARNING = auto()


@dataclass(slots=True)
class DocumentIssue:
    """Represents a lint finding for a document."""

    slug: str
    source_path: str
    message: str
    severity: IssueSeverity
    pointer: str | None = None


@dataclass(slots=True)
class LintReport:
    """Aggregate lint results for a workspace."""

    issues: list[DocumentIssue] = field(default_factory=list)
    document_count: int = 0

    def add(self, issue: DocumentIssue) -> None:
        self.issues.append(issue)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity is IssueSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity is IssueSeverity.WARNING)


def lint_record(record: ContentRecord, path: Path) -> list[DocumentIssue]:
    """Run lint checks against a single loaded record."""
    issues: list[DocumentIssue] = []

    if record.slug != path.stem:
        issues.append(
            DocumentIssue(
                slug=record.slug,
                source_path=str(path),
                message=f"Filename '{path.name}' does not match slug '{record.slug}'; rename to '{record.slug}{path.suffix}'.",
                severity=IssueSeverity.WARNING,
                pointer="slug",
            )
        )

    if isinstance(record, Video) and not YOUTUBE_ID_RE.match(record.youtube):
        issues.append(
            DocumentIssue(
                slug=record.slug,
                source_path=str(path),
                message=f"'{record.youtube}' does not look like a YouTube video id.",
                severity=IssueSeverity.WARNING,
                pointer="youtube",
            )
        )

    return issues


def lint_workspace(config: Config) -> LintReport:
    """Load every document independently and emit lint diagnostics."""
    report = LintReport()
    renderer = MarkdownRenderer(
        site_url=config.site_url,
        registry=build_registry(config.highlight.languages),
        highlight=config.highlight.enabled,
    )

    collections: list[tuple[Path, RecordFactory[ContentRecord]]] = [
        (config.posts_dir, build_post),
        (config.videos_dir, build_video),
    ]
    for directory, factory in collections:
        for path in iter_content_files(directory):
            report.document_count += 1
            try:
                record = load_document(path, factory, renderer)
            except ContentError as exc:
                report.add(
                    DocumentIssue(
                        slug=path.stem,
                        source_path=str(path),
                        message=str(exc),
                        severity=IssueSeverity.ERROR,
                        pointer=_error_pointer(exc),
                    )
                )
                continue
            for issue in lint_record(record, path):
                report.add(issue)

    return report


def _error_pointer(error: ContentError) -> str | None:
    if isinstance(error, MissingRequiredFieldError):
        return error.field
    if isinstance(error, InvalidDateError):
        return "date"
    return None
