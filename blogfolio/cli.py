"""CLI entrypoints for Blogfolio build tooling."""

import logging
import shutil
import time
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .config import CONFIG_FILENAME, Config, load_config
from .content import ContentError, ContentLoadError, Post, Video
from .content.repository import ContentRepository
from .exports import write_site_data, write_stylesheet
from .highlight import HighlightRegistry
from .pagination import page_path
from .reporting import (
    BuildReport,
    assemble_report,
    build_page_stats,
    build_post_stats,
    build_video_stats,
    write_report,
)
from .scaffold import ScaffoldError, ScaffoldResult, normalize_slug, scaffold_content
from .validation import DocumentIssue, IssueSeverity, lint_workspace

console = Console()
app = typer.Typer(help="Blogfolio static content toolkit.")


class NewContentType(str, Enum):
    """Kinds of content that can be scaffolded from the CLI."""

    POST = "post"
    VIDEO = "video"


ConfigPathOption = Annotated[
    str,
    typer.Option("--config", "-c", help="Path to configuration file."),
]
ProjectOption = Annotated[
    Path | None,
    typer.Option("--project", "-p", help="Project directory; overrides --config."),
]
ForceFlag = Annotated[
    bool,
    typer.Option("--force", "-f", help="Overwrite existing files if they already exist."),
]


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging."),
    ] = False,
) -> None:
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def build(
    config_path: ConfigPathOption = CONFIG_FILENAME,
    project: ProjectOption = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", "-o", help="Override the configured output directory."),
    ] = None,
) -> None:
    """Load all content, then write record and page data for the site."""
    config, base_dir = _load(config_path, project)
    if output_dir is not None:
        config.output_dir = output_dir if output_dir.is_absolute() else (base_dir / output_dir).resolve()

    start = time.perf_counter()
    repository = ContentRepository(config)
    posts, videos = _load_collections(repository)

    sorted_posts = repository.sorted_posts()
    sorted_videos = repository.sorted_videos()
    pages = repository.blog_pages()
    exported = write_site_data(sorted_posts, pages, sorted_videos, config.output_dir)
    if config.highlight.enabled:
        exported.written.append(
            write_stylesheet(HighlightRegistry().stylesheet(config.highlight.style), config.output_dir)
        )

    report = assemble_report(
        project=config.project_name,
        duration_seconds=time.perf_counter() - start,
        posts=build_post_stats(posts),
        videos=build_video_stats(videos),
        blog_pages=build_page_stats(pages, config.posts_per_page),
        files_written=len(exported.written),
        files_removed=len(exported.removed),
    )
    report_path = write_report(report, config.output_dir)
    _print_build_summary(report, config, report_path, last_page=len(pages))


@app.command()
def lint(
    config_path: ConfigPathOption = CONFIG_FILENAME,
    project: ProjectOption = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Treat warnings as errors."),
    ] = False,
) -> None:
    """Run lightweight checks for common content issues."""
    config, _ = _load(config_path, project)
    report = lint_workspace(config)

    if not report.issues:
        console.print(
            f"[bold green]Lint clean[/]: no issues detected across {report.document_count} document(s)."
        )
        raise typer.Exit()

    for issue in sorted(report.issues, key=_lint_sort_key):
        style = "red" if issue.severity is IssueSeverity.ERROR else "yellow"
        location = _display_path(Path(issue.source_path))
        if issue.pointer:
            location = f"{location} :: {issue.pointer}"
        console.print(f"[bold {style}]{issue.severity.name}[/] {escape(location)} - {escape(issue.message)}")

    console.print(
        f"[bold blue]Summary[/]: {report.error_count} error(s), {report.warning_count} warning(s) "
        f"across {report.document_count} document(s)."
    )

    exit_code = 0
    if report.error_count > 0 or (strict and report.warning_count > 0):
        exit_code = 1
    raise typer.Exit(code=exit_code)


@app.command()
def new(
    kind: Annotated[
        NewContentType,
        typer.Argument(help="Content type to scaffold."),
    ],
    slug: Annotated[
        str,
        typer.Argument(help="Slug identifier used for the filename and URL."),
    ],
    title: Annotated[
        str | None,
        typer.Option("--title", "-t", help="Override the default title derived from the slug."),
    ] = None,
    youtube: Annotated[
        str | None,
        typer.Option("--youtube", "-y", help="YouTube video id (videos only)."),
    ] = None,
    config_path: ConfigPathOption = CONFIG_FILENAME,
    project: ProjectOption = None,
    force: ForceFlag = False,
) -> None:
    """Create a new post or video source file."""
    try:
        normalized_slug = normalize_slug(slug)
    except ScaffoldError as exc:
        console.print(f"[bold red]Cannot scaffold[/]: {exc}")
        raise typer.Exit(code=1) from exc

    config, _ = _load(config_path, project)

    try:
        result = scaffold_content(
            config=config,
            kind=kind.value,
            slug=normalized_slug,
            title=title,
            youtube=youtube,
            force=force,
        )
    except ScaffoldError as exc:
        console.print(f"[bold red]Cannot scaffold[/]: {exc}")
        raise typer.Exit(code=1) from exc

    if normalized_slug != slug:
        console.print(f"[bold yellow]Note[/]: slug normalized to '{normalized_slug}'.")

    _print_scaffold_summary(kind, normalized_slug, result)


@app.command()
def clean(
    config_path: ConfigPathOption = CONFIG_FILENAME,
    project: ProjectOption = None,
) -> None:
    """Remove the generated output directory."""
    config, _ = _load(config_path, project)
    target = config.output_dir
    if target.exists():
        console.print(f"[bold green]Removing[/]: site output ({_display_path(target)})")
        shutil.rmtree(target)
    else:
        console.print(f"[bold yellow]Skipping[/]: site output ({_display_path(target)}) not found")


def _load_collections(repository: ContentRepository) -> tuple[list[Post], list[Video]]:
    errors: list[ContentError] = []
    posts: list[Post] = []
    videos: list[Video] = []
    try:
        posts = repository.posts()
    except ContentLoadError as exc:
        errors.extend(exc.errors)
    try:
        videos = repository.videos()
    except ContentLoadError as exc:
        errors.extend(exc.errors)

    if errors:
        for error in errors:
            console.print(f"[bold red]{type(error).__name__}[/] {escape(str(error))}")
        console.print(f"[bold red]Build failed[/]: {len(errors)} document(s) could not be loaded.")
        raise typer.Exit(code=1)
    return posts, videos


def _print_build_summary(report: BuildReport, config: Config, report_path: Path, *, last_page: int) -> None:
    posts = report.posts
    languages = ", ".join(f"{lang} {count}" for lang, count in posts.languages.items())
    post_line = f"[bold green]Posts[/]: {posts.total}"
    if languages:
        post_line += f" ({languages})"
    console.print(post_line)
    console.print(f"[bold green]Videos[/]: {report.videos.total}")

    pages = report.blog_pages
    page_line = f"[bold green]Blog index[/]: {pages.pages} page(s) of up to {pages.page_size} post(s)"
    if last_page:
        page_line += f"; {page_path(1)} through {page_path(last_page)}"
    console.print(page_line)

    console.print(
        f"[bold green]Output[/]: wrote {report.files_written} file(s) to {_display_path(config.output_dir)}"
        + (f", removed {report.files_removed} stale file(s)" if report.files_removed else "")
    )
    console.print(f"[bold green]Report[/]: {_display_path(report_path)}")
    for warning in report.warnings:
        console.print(f"[bold yellow]Warning[/]: {warning}")


def _print_scaffold_summary(kind: NewContentType, slug: str, result: ScaffoldResult) -> None:
    console.print(f"[bold green]Scaffold ready[/]: {kind.value} '{slug}'")

    for path in result.created:
        console.print(f"- {_display_path(path)} (new)")
    for path in result.updated:
        console.print(f"- {_display_path(path)} (updated)")

    if result.notes:
        console.print("[bold blue]Next steps[/]:")
        for note in result.notes:
            console.print(f"- {note}")


def _lint_sort_key(issue: DocumentIssue) -> tuple[int, str, str]:
    severity_order = 0 if issue.severity is IssueSeverity.ERROR else 1
    pointer = issue.pointer or ""
    return (severity_order, issue.source_path, pointer)


def _display_path(path: Path) -> str:
    try:
        return path.relative_to(Path.cwd()).as_posix()
    except ValueError:
        return path.as_posix()


def _load(path: str, project: Path | None = None) -> tuple[Config, Path]:
    target = Path(project) if project is not None else Path(path)
    try:
        config = load_config(target)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Config file not found: {target}") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    base_dir = target.resolve() if target.is_dir() else target.resolve().parent
    return config, base_dir
