"""Shared Markdown rendering helpers."""

from __future__ import annotations

from functools import lru_cache
from html import escape
from typing import Any, Sequence, cast
from urllib.parse import urlparse

from markdown_it import MarkdownIt
from markdown_it.renderer import RendererHTML
from markdown_it.token import Token
from markdown_it.utils import EnvType, OptionsDict
from mdit_py_plugins.deflist import deflist_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from .highlight import HighlightRegistry, build_registry

EXTERNAL_LINK_TARGET = "_blank"
EXTERNAL_LINK_REL = "noopener noreferrer"


def is_external_link(href: str, site_host: str | None = None) -> bool:
    """A link is external when it names a scheme and a host other than the site's."""
    parsed = urlparse(href.strip())
    if not parsed.scheme or not parsed.netloc:
        return False
    host = (parsed.hostname or "").lower()
    if site_host is None:
        return True
    return host != site_host.lower()


class MarkdownRenderer:
    """Render article bodies to HTML with highlighting and typographic quotes."""

    def __init__(
        self,
        site_url: str | None = None,
        registry: HighlightRegistry | None = None,
        *,
        highlight: bool = True,
    ) -> None:
        self.site_host = urlparse(site_url).hostname if site_url else None
        self.registry = registry if registry is not None else build_registry()
        self._highlight_enabled = highlight
        self._md = self._build()

    def _build(self) -> MarkdownIt:
        options: dict[str, Any] = {"html": True, "typographer": True}
        if self._highlight_enabled:
            options["highlight"] = self._highlight
        md = MarkdownIt("commonmark", options)
        md.enable(["table", "strikethrough", "replacements", "smartquotes"])
        md.use(deflist_plugin)
        md.use(footnote_plugin)
        md.use(tasklists_plugin, label=True)
        md.add_render_rule("link_open", self._make_link_open())
        return md

    def _highlight(self, code: str, lang: str, _attrs: str) -> str:
        highlighted = self.registry.highlight(code, lang)
        if not highlighted:
            return ""
        css_class = escape(f"language-{lang}", quote=True)
        return f'<pre class="highlight"><code class="{css_class}">{highlighted}</code></pre>'

    def _make_link_open(self) -> Any:
        site_host = self.site_host

        def link_open(
            renderer: RendererHTML,
            tokens: Sequence[Token],
            idx: int,
            options: OptionsDict,
            env: EnvType,
        ) -> str:
            token = tokens[idx]
            href = str(token.attrGet("href") or "")
            if is_external_link(href, site_host):
                token.attrSet("target", EXTERNAL_LINK_TARGET)
                token.attrSet("rel", EXTERNAL_LINK_REL)
            return renderer.renderToken(tokens, idx, options, env)

        return link_open

    def render(self, text: str) -> str:
        """Render Markdown to HTML."""
        if not text.strip():
            return ""
        return cast(str, self._md.render(text))

    def render_plain_text(self, text: str) -> str:
        """Flatten Markdown to a single line of text, applying smart punctuation."""
        if not text.strip():
            return ""
        parts: list[str] = []
        for token in self._md.parse(text):
            if token.type == "inline":
                parts.append(_inline_text(token.children or []))
            elif token.type in {"fence", "code_block"}:
                parts.append(token.content)
        return " ".join(" ".join(parts).split())


def _inline_text(children: Sequence[Token]) -> str:
    pieces: list[str] = []
    for child in children:
        if child.type in {"text", "code_inline"}:
            pieces.append(child.content)
        elif child.type in {"softbreak", "hardbreak"}:
            pieces.append(" ")
        elif child.type == "image":
            pieces.append(_inline_text(child.children or []))
    return "".join(pieces)


@lru_cache(maxsize=1)
def _renderer() -> MarkdownRenderer:
    """Configure and cache the default renderer."""
    return MarkdownRenderer()


def render_markdown(text: str) -> str:
    """Render Markdown to HTML using the shared renderer."""
    return _renderer().render(text)
