"""Registry of language tags that fenced code blocks may highlight."""

from __future__ import annotations

import logging
from typing import Iterator, Mapping

from pygments import highlight as pygments_highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

# Tag on the fence -> Pygments lexer alias.
DEFAULT_LANGUAGES: dict[str, str] = {
    "bash": "bash",
    "c": "c",
    "clojure": "clojure",
    "cpp": "cpp",
    "css": "css",
    "diff": "diff",
    "elixir": "elixir",
    "erlang": "erlang",
    "go": "go",
    "haskell": "haskell",
    "html": "html",
    "java": "java",
    "javascript": "javascript",
    "js": "javascript",
    "json": "json",
    "jsx": "jsx",
    "lisp": "common-lisp",
    "lua": "lua",
    "markdown": "markdown",
    "nginx": "nginx",
    "ocaml": "ocaml",
    "php": "php",
    "python": "python",
    "py": "python",
    "ruby": "ruby",
    "rb": "ruby",
    "rust": "rust",
    "sass": "sass",
    "scss": "scss",
    "shell": "bash",
    "sh": "bash",
    "sql": "sql",
    "toml": "toml",
    "ts": "typescript",
    "tsx": "tsx",
    "typescript": "typescript",
    "xml": "xml",
    "yaml": "yaml",
    "yml": "yaml",
}


class HighlightRegistry:
    """Map fence language tags onto Pygments lexers.

    Tags are matched case-insensitively. A tag that is not registered, or
    whose lexer alias Pygments does not know, is rendered as plain text.
    """

    def __init__(self, languages: Mapping[str, str] | None = None) -> None:
        self._languages: dict[str, str] = {}
        self._lexers: dict[str, Lexer | None] = {}
        self._formatter = HtmlFormatter(nowrap=True)
        for tag, alias in (languages if languages is not None else DEFAULT_LANGUAGES).items():
            self.register(tag, alias)

    def register(self, tag: str, lexer_alias: str) -> None:
        key = tag.strip().lower()
        if not key:
            raise ValueError("Language tag cannot be empty.")
        self._languages[key] = lexer_alias
        self._lexers.pop(key, None)

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and tag.strip().lower() in self._languages

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._languages))

    def __len__(self) -> int:
        return len(self._languages)

    def lexer_for(self, tag: str) -> Lexer | None:
        key = tag.strip().lower()
        if key not in self._languages:
            return None
        if key not in self._lexers:
            alias = self._languages[key]
            try:
                self._lexers[key] = get_lexer_by_name(alias)
            except ClassNotFound:
                logger.warning("No Pygments lexer named '%s' for language tag '%s'.", alias, key)
                self._lexers[key] = None
        return self._lexers[key]

    def highlight(self, code: str, tag: str) -> str:
        """Return highlighted inner HTML for ``code``, or '' when ``tag`` is unknown."""
        lexer = self.lexer_for(tag) if tag else None
        if lexer is None:
            return ""
        return pygments_highlight(code, lexer, self._formatter)

    def stylesheet(self, style: str = "default") -> str:
        """CSS rules for the token classes emitted by ``highlight``."""
        return HtmlFormatter(style=style).get_style_defs(".highlight")


def build_registry(extra: Mapping[str, str] | None = None) -> HighlightRegistry:
    languages = dict(DEFAULT_LANGUAGES)
    if extra:
        languages.update(extra)
    return HighlightRegistry(languages)
