"""Sidebar navigation builder.

Builds the sidebar links from Site structures for UI presentation:
the blog index, the notes index, then published standalone pages.
"""

from dataclasses import dataclass
from typing import TypedDict

from folio.core.pages import INDEX_PATH, NOTES_PATH
from folio.core.site import Site, normalize_path
from folio.core.types import URLPath


class NavItemDict(TypedDict):
    """Dictionary representation of a navigation item."""

    title: str
    path: str
    active: bool


@dataclass
class NavItem:
    """Sidebar link."""

    title: str
    path: URLPath
    active: bool = False

    def to_dict(self) -> NavItemDict:
        """Convert to dictionary for JSON serialization."""
        return {"title": self.title, "path": self.path, "active": self.active}


def build_navigation(site: Site, current_path: str = "/") -> list[NavItem]:
    """Build sidebar links and mark the one covering current_path.

    Notes pages activate "notes", standalone pages activate themselves,
    and everything else (posts, tags, the index) activates "blog".

    Args:
        site: Site structure to build navigation from
        current_path: Path of the page being viewed

    Returns:
        List of NavItem in display order
    """
    current = normalize_path(current_path)
    standalone = sorted(
        (n for n in site.nodes if n.layout == "page" and n.is_published),
        key=lambda n: n.title.casefold(),
    )

    items = [
        NavItem(title="blog", path=INDEX_PATH),
        NavItem(title="notes", path=NOTES_PATH, active=current.startswith(NOTES_PATH)),
    ]
    items.extend(
        NavItem(title=node.title, path=node.slug, active=current == node.slug)
        for node in standalone
    )
    items[0].active = not any(item.active for item in items[1:])
    return items
