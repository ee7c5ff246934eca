"""Markdown rendering with caching.

Converts markdown bodies to HTML with mistune, adds self-linking heading
anchors, and caches results in a FileCache keyed by source mtime.
"""

import html
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import mistune

from folio.core.cache import CacheEntry, FileCache, TocEntryDict
from folio.core.content import read_body
from folio.core.slugs import kebab_case

logger = logging.getLogger(__name__)

SUMMARY_WORDS = 60
MARKDOWN_PLUGINS = ["table", "strikethrough", "task_lists", "footnotes"]

_TAG_RE = re.compile(r"<[^>]*>")


def strip_tags(markup: str) -> str:
    """Remove HTML tags and unescape entities."""
    return html.unescape(_TAG_RE.sub("", markup))


def summarize(markup: str, words: int = SUMMARY_WORDS) -> str:
    """Build a plain-text summary from the first words of rendered HTML."""
    return " ".join(strip_tags(markup).split()[:words])


class AnchoredHeadingRenderer(mistune.HTMLRenderer):
    """HTML renderer that gives every heading a kebab-case id and self-link.

    Collects headings as table of contents entries while rendering.
    """

    def __init__(self) -> None:
        super().__init__(escape=False)
        self.toc: list[TocEntryDict] = []
        self._used_ids: dict[str, int] = {}

    def heading(self, text: str, level: int, **attrs: Any) -> str:
        title = strip_tags(text).strip()
        anchor = self._unique_id(kebab_case(title) or f"section-{len(self.toc) + 1}")
        self.toc.append({"level": level, "title": title, "id": anchor})
        return f'<h{level} id="{anchor}"><a href="#{anchor}">{text}</a></h{level}>\n'

    def _unique_id(self, anchor: str) -> str:
        count = self._used_ids.get(anchor, 0)
        self._used_ids[anchor] = count + 1
        return anchor if count == 0 else f"{anchor}-{count}"


@dataclass
class RenderResult:
    """Result of rendering a markdown document."""

    html: str
    toc: list[TocEntryDict]
    summary: str
    source_path: Path
    from_cache: bool


def render_markdown(markdown_text: str) -> tuple[str, list[TocEntryDict]]:
    """Render markdown to HTML.

    Args:
        markdown_text: Markdown body without frontmatter

    Returns:
        Tuple of (HTML, table of contents entries)
    """
    renderer = AnchoredHeadingRenderer()
    markdown = mistune.create_markdown(renderer=renderer, plugins=MARKDOWN_PLUGINS)
    rendered = markdown(markdown_text)
    return str(rendered), renderer.toc


class PageRenderer:
    """Renders content files with caching.

    Cache invalidation is based on source file mtime.
    """

    def __init__(self, cache: FileCache) -> None:
        """Initialize renderer.

        Args:
            cache: FileCache instance for caching rendered content
        """
        self._cache = cache

    def render(self, source_path: Path, key: str) -> RenderResult:
        """Render a content file's markdown body.

        Args:
            source_path: Path to the markdown source
            key: Cache key, the slug without surrounding slashes
                 (e.g., "notes/lti-notes")

        Returns:
            RenderResult with HTML, ToC and summary

        Raises:
            FileNotFoundError: If source markdown file doesn't exist
        """
        if not source_path.exists():
            raise FileNotFoundError(f"Source file not found: {source_path}")

        source_mtime = source_path.stat().st_mtime

        cached = self._cache.get(key, source_mtime)
        if cached is not None:
            return _from_cache(cached, source_path)

        logger.debug(f"Rendering {source_path}")
        body_html, toc = render_markdown(read_body(source_path))
        summary = summarize(body_html)
        self._cache.set(key, body_html, summary, source_mtime, toc)

        return RenderResult(
            html=body_html,
            toc=toc,
            summary=summary,
            source_path=source_path,
            from_cache=False,
        )

    def invalidate(self, key: str) -> None:
        """Invalidate cached content for a key.

        Args:
            key: Cache key to invalidate
        """
        self._cache.invalidate(key)


def _from_cache(cached: CacheEntry, source_path: Path) -> RenderResult:
    """Create RenderResult from cache entry.

    Args:
        cached: Cache entry with HTML and metadata
        source_path: Source file path

    Returns:
        RenderResult reconstructed from cache
    """
    return RenderResult(
        html=cached.html,
        toc=[
            {"level": int(e["level"]), "title": str(e["title"]), "id": str(e["id"])}
            for e in cached.meta["toc"]
        ],
        summary=cached.meta["summary"],
        source_path=source_path,
        from_cache=True,
    )
