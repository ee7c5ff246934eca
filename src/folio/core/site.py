"""Site structure for content lookups and listings.

Represents the published site: content nodes indexed by slug, the pages
created from them, and the tag index used by tag listing pages. Separate
from navigation which is built for UI presentation.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from folio.core.colors import color_for
from folio.core.content import ContentNode, discover_content, load_node
from folio.core.pages import NOTES_PATH, PageSpec, create_pages
from folio.core.types import URLPath

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BreadcrumbItem:
    """Breadcrumb navigation item."""

    title: str
    path: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"title": self.title, "path": self.path}


@dataclass(frozen=True)
class TagSummary:
    """A tag with its listing page and published post count."""

    name: str
    slug: URLPath
    color: str
    count: int

    def to_dict(self) -> dict[str, str | int]:
        """Convert to dictionary for JSON serialization."""
        return {"name": self.name, "slug": self.slug, "color": self.color, "count": self.count}


def normalize_path(path: str) -> URLPath:
    """Normalize path to have leading and trailing slashes."""
    stripped = path.strip("/")
    return URLPath(f"/{stripped}/" if stripped else "/")


def _newest_first(nodes: list[ContentNode]) -> list[ContentNode]:
    return sorted(
        nodes,
        key=lambda n: (
            n.frontmatter.date is None,
            -n.frontmatter.date.toordinal() if n.frontmatter.date else 0,
        ),
    )


class Site:
    """Content site with O(1) slug and page lookups.

    Listings (posts, notes, tag pages) only include published nodes,
    newest first, with undated nodes last.
    """

    __slots__ = ("_nodes", "_node_index", "_pages", "_path_index", "_tag_index", "_tag_names")

    def __init__(self, nodes: list[ContentNode], pages: list[PageSpec]) -> None:
        """Initialize site structure.

        Args:
            nodes: All loaded content nodes, drafts included
            pages: Page specs created from the nodes
        """
        self._nodes = nodes
        self._pages = pages
        self._node_index = {node.slug: node for node in nodes}
        self._path_index = {page.path: page for page in pages}

        self._tag_index: dict[str, list[ContentNode]] = {}
        self._tag_names: dict[str, str] = {}
        for node in nodes:
            for tag, slug in zip(node.tags, node.tag_slugs, strict=True):
                self._tag_names.setdefault(slug, tag)
                if node.is_published:
                    self._tag_index.setdefault(slug, []).append(node)

    @property
    def nodes(self) -> list[ContentNode]:
        return list(self._nodes)

    @property
    def pages(self) -> list[PageSpec]:
        return list(self._pages)

    def get_page(self, path: str) -> PageSpec | None:
        """Get page by path.

        Args:
            path: Page path (e.g., "notes/lti-notes" or "/notes/lti-notes/")

        Returns:
            PageSpec if found, None otherwise
        """
        return self._path_index.get(normalize_path(path))

    def get_node(self, slug: str) -> ContentNode | None:
        """Get content node by slug, drafts included."""
        return self._node_index.get(normalize_path(slug))

    def posts(self) -> list[ContentNode]:
        """Published posts, newest first."""
        return self._listing("post")

    def notes(self) -> list[ContentNode]:
        """Published notes, newest first."""
        return self._listing("note")

    def tagged(self, tag_slug: str) -> list[ContentNode]:
        """Published nodes carrying a tag, newest first.

        Args:
            tag_slug: Tag listing slug (e.g., "/tags/javascript/")

        Returns:
            Matching nodes, empty if the tag is unknown
        """
        return _newest_first(self._tag_index.get(normalize_path(tag_slug), []))

    def tag_name(self, tag_slug: str) -> str | None:
        """Display name of a tag as first written in frontmatter."""
        return self._tag_names.get(normalize_path(tag_slug))

    def tags(self) -> list[TagSummary]:
        """All tags sorted by name, with published counts."""
        summaries = [
            TagSummary(
                name=name,
                slug=URLPath(slug),
                color=color_for(name),
                count=len(self._tag_index.get(slug, [])),
            )
            for slug, name in self._tag_names.items()
        ]
        return sorted(summaries, key=lambda t: t.name.casefold())

    def get_breadcrumbs(self, path: str) -> list[BreadcrumbItem]:
        """Build breadcrumbs for a given path.

        Returns breadcrumbs starting with "Home" for non-root pages. Note
        pages also get a "Notes" crumb. The current page is not included.

        Note:
            For unknown paths, returns [Home] to provide minimal navigation
            in UI even when the page doesn't exist in the site structure.

        Args:
            path: Page path (e.g., "notes/lti-notes")

        Returns:
            List of BreadcrumbItem for ancestor navigation
        """
        normalized = normalize_path(path)
        if normalized == "/":
            return []

        breadcrumbs = [BreadcrumbItem(title="Home", path="/")]
        page = self._path_index.get(normalized)
        if page is not None and page.template == "note":
            breadcrumbs.append(BreadcrumbItem(title="Notes", path=NOTES_PATH))
        return breadcrumbs

    def _listing(self, layout: str) -> list[ContentNode]:
        return _newest_first(
            [n for n in self._nodes if n.layout == layout and n.is_published],
        )


class SiteBuilder:
    """Builder for constructing Site instances."""

    def __init__(self) -> None:
        self._nodes: list[ContentNode] = []

    def add_node(self, node: ContentNode) -> int:
        """Add a content node to the site.

        Args:
            node: Loaded content node

        Returns:
            Index of the added node
        """
        idx = len(self._nodes)
        self._nodes.append(node)
        return idx

    def build(self) -> Site:
        """Build the Site instance.

        Raises:
            ValueError: If two nodes share a slug
        """
        return Site(nodes=self._nodes, pages=create_pages(self._nodes))


class SiteLoader:
    """Loads a Site from a content directory and caches it.

    The cached site is reused until invalidate() is called, typically by
    the live reload watcher when a source file changes.
    """

    def __init__(self, source_dir: Path) -> None:
        """Initialize loader.

        Args:
            source_dir: Root content directory
        """
        self._source_dir = source_dir
        self._cached: Site | None = None

    @property
    def source_dir(self) -> Path:
        """Root content directory."""
        return self._source_dir

    def load(self) -> Site:
        """Load the site, reusing the cached one when available.

        Raises:
            SlugError: If a content file's slug can't be derived
            ValueError: If frontmatter is invalid or slugs collide
        """
        if self._cached is not None:
            return self._cached

        builder = SiteBuilder()
        for path in discover_content(self._source_dir):
            builder.add_node(load_node(path))
        self._cached = builder.build()
        logger.info(f"Loaded {len(self._cached.nodes)} content files from {self._source_dir}")
        return self._cached

    def invalidate(self) -> None:
        """Drop the cached site so the next load() rereads the content."""
        self._cached = None
