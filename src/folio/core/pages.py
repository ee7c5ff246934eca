"""Page creation from content nodes.

Every post, note and standalone page gets its own page, every distinct
tag gets a listing page, and the site always has a blog index and a notes
index. Drafts get pages too; they are only hidden from listings.
"""

import logging
from dataclasses import dataclass, field
from typing import Literal

from folio.core.content import ContentNode
from folio.core.types import URLPath

logger = logging.getLogger(__name__)

Template = Literal["post", "note", "page", "tag", "index", "notes"]

INDEX_PATH = URLPath("/")
NOTES_PATH = URLPath("/notes/")

LAYOUT_TEMPLATES: dict[str, Template] = {
    "post": "post",
    "note": "note",
    "page": "page",
}


@dataclass(frozen=True)
class PageSpec:
    """A page to be rendered: where it lives and which template renders it."""

    path: URLPath
    template: Template
    context: dict[str, str] = field(default_factory=dict, compare=False)


def create_pages(nodes: list[ContentNode]) -> list[PageSpec]:
    """Create page specs for a set of content nodes.

    Args:
        nodes: Loaded content nodes

    Returns:
        Listing pages first, then content pages in node order, then
        tag pages in first-seen order

    Raises:
        ValueError: If two nodes share a slug
    """
    _check_unique_slugs(nodes)

    pages = [
        PageSpec(path=INDEX_PATH, template="index"),
        PageSpec(path=NOTES_PATH, template="notes"),
    ]

    for node in nodes:
        template = LAYOUT_TEMPLATES.get(node.layout or "")
        if template is None:
            logger.debug(f"No page for {node.source_path} (layout={node.layout!r})")
            continue
        pages.append(
            PageSpec(path=node.slug, template=template, context={"slug": node.slug}),
        )

    seen_tags: set[str] = set()
    for node in nodes:
        for tag, slug in zip(node.tags, node.tag_slugs, strict=True):
            if slug in seen_tags:
                continue
            seen_tags.add(slug)
            pages.append(
                PageSpec(path=slug, template="tag", context={"tag": tag, "tag_slug": slug}),
            )

    logger.info(f"Created {len(pages)} pages from {len(nodes)} content files")
    return pages


def _check_unique_slugs(nodes: list[ContentNode]) -> None:
    owners: dict[str, ContentNode] = {}
    for node in nodes:
        existing = owners.get(node.slug)
        if existing is not None:
            raise ValueError(
                f"Duplicate slug {node.slug}: {existing.source_path} and {node.source_path}"
            )
        owners[node.slug] = node
