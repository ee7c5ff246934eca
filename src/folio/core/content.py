"""Content nodes built from markdown files with YAML frontmatter.

A content node pairs a source file with its parsed frontmatter and the
slugs derived from its location and tags. Nodes are immutable once
created.
"""

import datetime
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import frontmatter

from folio.core.slugs import derive_slug, tag_slug
from folio.core.types import URLPath

logger = logging.getLogger(__name__)

CONTENT_SUFFIXES = (".md", ".mdx")

_KNOWN_KEYS = frozenset({"title", "subtitle", "date", "layout", "tags", "draft"})


@dataclass(frozen=True)
class Frontmatter:
    """Parsed frontmatter block."""

    title: str | None = None
    subtitle: str | None = None
    date: datetime.date | None = None
    layout: str | None = None
    tags: tuple[str, ...] = ()
    draft: bool = False
    extra: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class ContentNode:
    """A markdown document addressed by its slug."""

    source_path: Path
    slug: URLPath
    frontmatter: Frontmatter
    tag_slugs: tuple[URLPath, ...] = ()

    @property
    def title(self) -> str:
        """Frontmatter title, falling back to the last slug segment."""
        if self.frontmatter.title:
            return self.frontmatter.title
        return self.slug.strip("/").rsplit("/", 1)[-1]

    @property
    def layout(self) -> str | None:
        return self.frontmatter.layout

    @property
    def tags(self) -> tuple[str, ...]:
        return self.frontmatter.tags

    @property
    def is_published(self) -> bool:
        return not self.frontmatter.draft


def parse_frontmatter(metadata: dict[str, Any]) -> Frontmatter:
    """Validate a raw frontmatter mapping.

    Args:
        metadata: Mapping loaded from the YAML block

    Returns:
        Frontmatter instance

    Raises:
        ValueError: If a known key has the wrong type
    """
    title = metadata.get("title")
    if title is not None and not isinstance(title, str):
        title = str(title)

    subtitle = metadata.get("subtitle")
    if subtitle is not None and not isinstance(subtitle, str):
        subtitle = str(subtitle)

    layout = metadata.get("layout")
    if layout is not None and not isinstance(layout, str):
        raise ValueError("frontmatter.layout must be a string")

    draft = metadata.get("draft", False)
    if not isinstance(draft, bool):
        raise ValueError("frontmatter.draft must be a boolean")

    return Frontmatter(
        title=title,
        subtitle=subtitle,
        date=_parse_date(metadata.get("date")),
        layout=layout,
        tags=_parse_tags(metadata.get("tags")),
        draft=draft,
        extra={k: v for k, v in metadata.items() if k not in _KNOWN_KEYS},
    )


def _parse_date(value: object) -> datetime.date | None:
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        try:
            return datetime.date.fromisoformat(value.strip())
        except ValueError:
            raise ValueError(f"frontmatter.date is not an ISO date: {value!r}") from None
    raise ValueError("frontmatter.date must be a date")


def _parse_tags(value: object) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(t.strip() for t in value.split(",") if t.strip())
    if not isinstance(value, list):
        raise ValueError("frontmatter.tags must be a list")
    tags: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError("frontmatter.tags items must be strings")
        if item not in tags:
            tags.append(item)
    return tuple(tags)


def load_node(source_path: Path) -> ContentNode:
    """Load a content node from a markdown file.

    Args:
        source_path: Absolute path to the markdown file

    Returns:
        ContentNode with derived slug and tag slugs

    Raises:
        SlugError: If the slug can't be derived from the path
        ValueError: If the frontmatter is invalid
    """
    post = frontmatter.load(str(source_path))
    meta = parse_frontmatter(post.metadata)
    slug = URLPath(derive_slug(source_path))
    node = ContentNode(
        source_path=source_path,
        slug=slug,
        frontmatter=meta,
        tag_slugs=tuple(URLPath(tag_slug(t)) for t in meta.tags),
    )
    logger.debug(f"Loaded {source_path} as {slug}")
    return node


def read_body(source_path: Path) -> str:
    """Return the markdown body of a file without its frontmatter."""
    return frontmatter.load(str(source_path)).content


def discover_content(source_dir: Path) -> list[Path]:
    """Find markdown files under a source directory.

    Hidden directories (e.g., ".git") are skipped.

    Args:
        source_dir: Root content directory

    Returns:
        Sorted list of absolute file paths, empty if the directory is missing
    """
    if not source_dir.is_dir():
        logger.warning(f"Content directory not found: {source_dir}")
        return []

    found: list[Path] = []
    for path in source_dir.rglob("*"):
        if path.suffix not in CONTENT_SUFFIXES or not path.is_file():
            continue
        relative = path.relative_to(source_dir)
        if any(part.startswith(".") for part in relative.parts):
            continue
        found.append(path.resolve())
    return sorted(found)
