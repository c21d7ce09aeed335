from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, Field, field_validator

CONFIG_FILENAME = "blogfolio.yml"


class HighlightConfig(BaseModel):
    """Options for syntax highlighting inside fenced code blocks."""

    enabled: bool = Field(default=True, description="Toggle Pygments highlighting.")
    style: str = Field(default="default", description="Pygments style used for highlight.css.")
    languages: dict[str, str] = Field(
        default_factory=dict,
        description="Extra language tags mapped to Pygments lexer aliases.",
    )

    @field_validator("languages", mode="before")
    def _normalize_tags(cls, value: Any) -> dict[str, str]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("highlight.languages must be a mapping of tag to lexer alias.")
        return {str(tag).strip().lower(): str(alias).strip() for tag, alias in value.items()}


class Config(BaseModel):
    project_name: str = Field(default="Blogfolio Site")
    content_dir: Path = Field(default=Path("content"))
    posts_subdir: str = Field(default="blog", description="Articles directory under content_dir.")
    videos_subdir: str = Field(default="videos", description="Videos directory under content_dir.")
    output_dir: Path = Field(default=Path("site"))
    site_url: str | None = Field(
        default=None,
        description="Canonical site URL (e.g., 'https://example.com'); links to other hosts are external.",
    )
    posts_per_page: int = Field(default=10, ge=1, description="Blog index page size.")
    workers: int = Field(default=1, ge=1, description="Threads used to load documents.")
    highlight: HighlightConfig = Field(default_factory=HighlightConfig)

    @field_validator("content_dir", "output_dir", mode="before")
    def _ensure_path(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("site_url")
    def _require_host(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        cleaned = value.strip().rstrip("/")
        if not urlparse(cleaned).netloc:
            raise ValueError("site_url must be an absolute URL such as 'https://example.com'.")
        return cleaned

    @property
    def posts_dir(self) -> Path:
        return self.content_dir / self.posts_subdir

    @property
    def videos_dir(self) -> Path:
        return self.content_dir / self.videos_subdir


def load_config(path: str | Path) -> Config:
    """Load configuration and resolve relative paths based on the config location.

    The ``path`` argument may point to a file (e.g., ``/site/blogfolio.yml``) or a
    directory containing that file. All relative paths inside the configuration
    are interpreted relative to the directory holding the config file.
    """
    candidate = Path(path)
    data: dict[str, Any] = {}
    base_dir: Path
    if candidate.is_dir():
        # A project directory without a config file runs on defaults.
        config_file = candidate / CONFIG_FILENAME
        if config_file.exists():
            data = _read_yaml(config_file)
        base_dir = candidate.resolve()
    else:
        if not candidate.exists():
            raise FileNotFoundError(candidate)
        data = _read_yaml(candidate)
        base_dir = candidate.parent.resolve()

    cfg = Config(**data)

    def _abs(value: Path) -> Path:
        return value if value.is_absolute() else (base_dir / value).resolve()

    cfg.content_dir = _abs(cfg.content_dir)
    cfg.output_dir = _abs(cfg.output_dir)
    return cfg


def _read_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Configuration {path} must define a mapping at the root.")
    return data
