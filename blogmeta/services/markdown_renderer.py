import html
import logging
import math
from dataclasses import dataclass, field
from typing import List

import markdown

from blogmeta.schemas.blog import TocEntry

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "toc"]


@dataclass
class RenderedBody:
    html: str
    toc: List[TocEntry] = field(default_factory=list)


def render_markdown(body: str) -> RenderedBody:
    """Convert a post body to HTML and collect its headings."""
    md = markdown.Markdown(extensions=MARKDOWN_EXTENSIONS)
    rendered = md.convert(body or "")
    toc = [_toc_entry(token) for token in getattr(md, "toc_tokens", [])]
    return RenderedBody(html=rendered, toc=toc)


def _toc_entry(token: dict) -> TocEntry:
    return TocEntry(
        id=token["id"],
        name=token["name"],
        level=token["level"],
        children=[_toc_entry(child) for child in token.get("children", [])],
    )


def render_toc_html(toc: List[TocEntry], open: bool = False) -> str:
    """
    Render the collapsible table of contents block; `open` controls whether
    it starts expanded.
    """
    if not toc:
        return ""
    details = "<details open>" if open else "<details>"
    return (
        '<div class="toc">\n'
        f"{details}\n"
        '<summary accesskey="c" title="(Alt + C)">'
        '<span class="details">Table of Contents</span></summary>\n'
        f'<div class="inner">{_render_toc_list(toc)}</div>\n'
        "</details>\n"
        "</div>"
    )


def _render_toc_list(entries: List[TocEntry]) -> str:
    items = []
    for entry in entries:
        item = f'<li><a href="#{html.escape(entry.id)}">{html.escape(entry.name)}</a>'
        if entry.children:
            item += _render_toc_list(entry.children)
        items.append(item + "</li>")
    return "<ul>" + "".join(items) + "</ul>"


def count_words(text: str) -> int:
    return len(text.split())


def calculate_reading_time(text: str, words_per_minute: int = 200) -> str:
    words = count_words(text)
    minutes = math.ceil(words / words_per_minute) or 1
    return f"{minutes} min"
