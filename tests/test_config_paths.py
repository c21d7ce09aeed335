from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from blogfolio.config import Config, load_config


def _write_project_config(root: Path) -> Path:
    config_text = (
        "project_name: External Project\n"
        "content_dir: content\n"
        "posts_subdir: articles\n"
        "output_dir: public\n"
        "site_url: https://me.example/\n"
        "posts_per_page: 5\n"
        "highlight:\n"
        "  languages:\n"
        "    Snake: python\n"
    )
    cfg_path = root / "blogfolio.yml"
    cfg_path.write_text(config_text, encoding="utf-8")
    return cfg_path


def test_load_config_resolves_paths_relative_to_config_directory(tmp_path: Path) -> None:
    project = tmp_path / "project"
    project.mkdir()
    _write_project_config(project)

    # Pass a directory path; loader should find blogfolio.yml inside it.
    cfg = load_config(project)

    assert cfg.content_dir == (project / "content").resolve()
    assert cfg.output_dir == (project / "public").resolve()
    assert cfg.posts_dir == (project / "content" / "articles").resolve()
    assert cfg.videos_dir == (project / "content" / "videos").resolve()
    assert cfg.site_url == "https://me.example"
    assert cfg.posts_per_page == 5
    assert cfg.highlight.languages == {"snake": "python"}


def test_load_config_accepts_config_file_path(tmp_path: Path) -> None:
    project = tmp_path / "siteproj"
    project.mkdir()
    config_file = _write_project_config(project)

    cfg = load_config(config_file)
    assert cfg.output_dir == (project / "public").resolve()


def test_load_config_uses_defaults_when_directory_has_no_config(tmp_path: Path) -> None:
    project = tmp_path / "emptyproj"
    project.mkdir()

    cfg = load_config(project)

    assert cfg.content_dir == (project / "content").resolve()
    assert cfg.posts_dir == (project / "content" / "blog").resolve()
    assert cfg.output_dir == (project / "site").resolve()
    assert cfg.posts_per_page == 10
    assert cfg.site_url is None


def test_load_config_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yml")


def test_config_rejects_invalid_values() -> None:
    with pytest.raises(ValidationError):
        Config(posts_per_page=0)
    with pytest.raises(ValidationError):
        Config(site_url="not a url")
