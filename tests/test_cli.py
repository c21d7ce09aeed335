from __future__ import annotations

import json
import re
from pathlib import Path

from typer.testing import CliRunner

from blogfolio.cli import app
from blogfolio.content.frontmatter import split_front_matter


def _write_config(path: Path, extra: str = "") -> None:
    path.write_text(f"project_name: Test Site\nposts_per_page: 2\n{extra}", encoding="utf-8")


def _write(path: Path, body: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")


def _seed_content(root: Path) -> None:
    blog = root / "content" / "blog"
    for day in range(1, 4):
        _write(blog / f"post-{day}.md", f"---\ntitle: Post {day}\ndate: 2024-05-0{day}\n---\nHello {day}.\n")
    _write(
        root / "content" / "videos" / "talk.md",
        "---\ntitle: Talk\ndate: 2024-05-10\nyoutube: dQw4w9WgXcQ\n---\n",
    )


def test_build_writes_exports_and_report() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_config(Path("blogfolio.yml"))
        _seed_content(Path("."))

        result = runner.invoke(app, ["build"])
        assert result.exit_code == 0, result.output

        site = Path("site")
        first_page = json.loads((site / "blog" / "page-001.json").read_text(encoding="utf-8"))
        assert [item["slug"] for item in first_page["items"]] == ["post-3", "post-2"]
        assert first_page["page_count"] == 2
        assert (site / "blog" / "page-002.json").exists()
        assert (site / "posts" / "post-1.json").exists()
        assert (site / "videos" / "talk.json").exists()
        assert json.loads((site / "videos.json").read_text(encoding="utf-8"))[0]["featured"] is True
        assert ".highlight" in (site / "highlight.css").read_text(encoding="utf-8")
        report = json.loads((site / "build-report.json").read_text(encoding="utf-8"))
        assert report["posts"]["total"] == 3
        assert report["videos"]["total"] == 1
        assert "Blog index" in result.output


def test_build_respects_project_and_output_dir_override(tmp_path: Path) -> None:
    runner = CliRunner()
    project = tmp_path / "proj"
    project.mkdir()
    _write_config(project / "blogfolio.yml")
    _seed_content(project)

    result = runner.invoke(app, ["build", "--project", str(project), "--output-dir", "public_html"])
    assert result.exit_code == 0, result.output
    assert (project / "public_html" / "build-report.json").exists()


def test_build_reports_every_broken_document_and_fails() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_config(Path("blogfolio.yml"))
        _seed_content(Path("."))
        _write(Path("content/blog/undated.md"), "---\ntitle: Undated\n---\n")
        _write(Path("content/videos/no-id.md"), "---\ntitle: No id\ndate: 2024-01-01\n---\n")

        result = runner.invoke(app, ["build"])
        assert result.exit_code == 1, result.output
        assert "undated.md" in result.output
        assert "no-id.md" in result.output
        assert re.search(r"2\s+document\(s\)\s+could\s+not\s+be\s+loaded", result.output)
        assert not Path("site/build-report.json").exists()


def test_build_rejects_slug_that_leaves_output_dir() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_config(Path("blogfolio.yml"))
        _write(
            Path("content/blog/sneaky.md"),
            "---\ntitle: Sneaky\nslug: ../../escaped\ndate: 2024-01-01\n---\n",
        )

        result = runner.invoke(app, ["build"])
        assert result.exit_code == 1, result.output
        assert "MalformedFrontMatterError" in result.output
        assert "sneaky.md" in result.output
        assert not Path("escaped.json").exists()
        assert not Path("site").exists()


def test_lint_clean_when_content_is_valid() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_config(Path("blogfolio.yml"))
        _seed_content(Path("."))

        result = runner.invoke(app, ["lint"])
        assert result.exit_code == 0, result.output
        assert "Lint clean" in result.output


def test_lint_flags_errors_and_slug_mismatch() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_config(Path("blogfolio.yml"))
        _write(Path("content/blog/renamed.md"), "---\ntitle: Moved\nslug: moved\ndate: 2024-01-01\n---\n")
        _write(Path("content/blog/undated.md"), "---\ntitle: Undated\n---\n")

        result = runner.invoke(app, ["lint"])
        assert result.exit_code == 1, result.output
        assert "ERROR" in result.output
        assert re.search(r"Missing\s+required\s+field\s+'date'", result.output)
        assert "WARNING" in result.output
        assert "renamed.md" in result.output


def test_lint_strict_treats_warnings_as_errors() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_config(Path("blogfolio.yml"))
        _write(Path("content/videos/clip.md"), "---\ntitle: Clip\ndate: 2024-01-01\nyoutube: short\n---\n")

        relaxed = runner.invoke(app, ["lint"])
        assert relaxed.exit_code == 0, relaxed.output

        strict = runner.invoke(app, ["lint", "--strict"])
        assert strict.exit_code == 1, strict.output
        assert "WARNING" in strict.output


def test_new_post_scaffolds_loadable_front_matter() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_config(Path("blogfolio.yml"))
        result = runner.invoke(app, ["new", "post", "My First Post", "--title", "Hello There"])
        assert result.exit_code == 0, result.output
        assert "slug normalized to 'my-first-post'" in result.output

        post_path = Path("content/blog/my-first-post.md")
        metadata, body = split_front_matter(post_path.read_text(encoding="utf-8"))
        assert metadata["slug"] == "my-first-post"
        assert metadata["title"] == "Hello There"
        assert metadata["lang"] == "en"
        assert "date" in metadata
        assert "Markdown body starts here." in body

        lint = runner.invoke(app, ["lint", "--strict"])
        assert lint.exit_code == 0, lint.output


def test_new_video_requires_youtube_id() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_config(Path("blogfolio.yml"))
        missing = runner.invoke(app, ["new", "video", "launch"])
        assert missing.exit_code == 1
        assert "Cannot scaffold" in missing.output

        created = runner.invoke(app, ["new", "video", "launch", "--youtube", "dQw4w9WgXcQ"])
        assert created.exit_code == 0, created.output
        metadata, _ = split_front_matter(Path("content/videos/launch.md").read_text(encoding="utf-8"))
        assert metadata["youtube"] == "dQw4w9WgXcQ"
        assert metadata["title"] == "Launch"


def test_new_refuses_to_overwrite_without_force() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_config(Path("blogfolio.yml"))
        assert runner.invoke(app, ["new", "post", "twice"]).exit_code == 0

        again = runner.invoke(app, ["new", "post", "twice"])
        assert again.exit_code == 1
        assert "already exists" in again.output

        forced = runner.invoke(app, ["new", "post", "twice", "--force"])
        assert forced.exit_code == 0, forced.output


def test_clean_removes_output_directory() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_config(Path("blogfolio.yml"))
        _seed_content(Path("."))
        assert runner.invoke(app, ["build"]).exit_code == 0

        result = runner.invoke(app, ["clean"])
        assert result.exit_code == 0, result.output
        assert not Path("site").exists()
