"""Markdown rendering with wiki-link support.

``[[Title]]`` is parsed by an inline rule registered ahead of the standard
link rule. Inline rules never run inside fenced/indented code blocks or code
spans, so markers there stay literal text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from markdown_it.rules_inline import StateInline
from sqlalchemy.orm import Session

from ..links import extract_wikilinks, resolve_titles
from ..settings import settings
from ..titles import normalize_title


WIKILINK_TOKEN = "wikilink"
_ENV_KEY = "wikilinks"


@dataclass
class RenderedMarkdown:
    html: str
    links: dict[str, str | None] = field(default_factory=dict)


def _wikilink_rule(state: StateInline, silent: bool) -> bool:
    start = state.pos
    if not state.src.startswith("[[", start):
        return False
    end = state.src.find("]]", start + 2)
    if end < 0 or end + 2 > state.posMax:
        return False
    raw = state.src[start + 2 : end]
    if "]" in raw:
        return False
    title = raw.strip()
    if not title:
        return False
    if not silent:
        token = state.push(WIKILINK_TOKEN, "", 0)
        token.content = title
        token.markup = "[["
    state.pos = end + 2
    return True


def _article_url(article_id: str) -> str:
    return settings.article_url_template.format(id=article_id)


def _render_wikilink(self, tokens, idx, options, env) -> str:
    title = tokens[idx].content
    article_id = env.get(_ENV_KEY, {}).get(normalize_title(title))
    label = escapeHtml(title)
    if article_id:
        return (
            f'<a href="{escapeHtml(_article_url(article_id))}" class="wikilink" '
            f'data-article-id="{escapeHtml(article_id)}">{label}</a>'
        )
    tooltip = escapeHtml(f'Article "{title}" does not exist yet')
    return f'<span class="wikilink wikilink-missing" title="{tooltip}">{label}</span>'


def _render_link_open(self, tokens, idx, options, env) -> str:
    token = tokens[idx]
    href = str(token.attrGet("href") or "")
    if href.startswith(("http://", "https://")):
        token.attrSet("target", "_blank")
        token.attrSet("rel", "noopener noreferrer")
    return self.renderToken(tokens, idx, options, env)


def build_markdown() -> MarkdownIt:
    md = MarkdownIt("commonmark").enable("table").enable("strikethrough")
    md.inline.ruler.before("link", WIKILINK_TOKEN, _wikilink_rule)
    md.add_render_rule(WIKILINK_TOKEN, _render_wikilink)
    md.add_render_rule("link_open", _render_link_open)
    return md


md = build_markdown()


def _lookup_table(links: Mapping[str, str | None]) -> dict[str, str | None]:
    table: dict[str, str | None] = {}
    for title, article_id in links.items():
        key = normalize_title(title)
        if key and not table.get(key):
            table[key] = article_id
    return table


def render_markdown(md_text: str, links: Mapping[str, str | None] | None = None) -> str:
    """Render markdown to HTML, styling each wiki-link by its entry in ``links``.

    Titles absent from ``links`` or mapped to ``None`` render as missing.
    """
    env: dict[str, Any] = {_ENV_KEY: _lookup_table(links or {})}
    return md.render(md_text or "", env)


def render_article_content(db: Session, md_text: str, viewer_id: str | None = None) -> RenderedMarkdown:
    links = resolve_titles(db, extract_wikilinks(md_text), viewer_id=viewer_id)
    return RenderedMarkdown(html=render_markdown(md_text, links), links=links)
