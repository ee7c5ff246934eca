"""HTML page composition.

Turns PageSpecs into full HTML documents using the bundled Jinja2
templates. Shared by the development server and the static builder.
"""

import datetime
import logging
from dataclasses import dataclass
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from folio.assets import get_templates_dir
from folio.config import SiteConfig
from folio.core.colors import color_for
from folio.core.content import ContentNode
from folio.core.navigation import build_navigation
from folio.core.pages import PageSpec
from folio.core.renderer import PageRenderer
from folio.core.site import Site, SiteLoader
from folio.core.slugs import tag_slug

logger = logging.getLogger(__name__)

DATE_FORMAT = "%B %d, %Y"


def format_date(value: datetime.date | None) -> str:
    """Format a date as e.g. "January 05, 2018"; empty for None."""
    return value.strftime(DATE_FORMAT) if value else ""


def create_environment() -> Environment:
    """Create the Jinja2 environment with folio filters registered."""
    env = Environment(
        loader=FileSystemLoader(str(get_templates_dir())),
        autoescape=select_autoescape(),
    )
    env.filters["tag_color"] = color_for
    env.filters["tag_slug"] = tag_slug
    env.filters["format_date"] = format_date
    return env


def cache_key(node: ContentNode) -> str:
    """Render cache key for a node: its slug without surrounding slashes."""
    return node.slug.strip("/")


@dataclass
class Entry:
    """A listed node with its plain-text summary."""

    node: ContentNode
    summary: str


class PageView:
    """Renders site pages to HTML documents."""

    def __init__(
        self,
        site_loader: SiteLoader,
        renderer: PageRenderer,
        site_config: SiteConfig,
        *,
        live_reload: bool = False,
    ) -> None:
        self._site_loader = site_loader
        self._renderer = renderer
        self._site_config = site_config
        self._live_reload = live_reload
        self._env = create_environment()

    def render(self, path: str) -> str | None:
        """Render the page at a path.

        Args:
            path: Page path (e.g., "/notes/lti-notes/")

        Returns:
            HTML document, or None if no page lives at the path
        """
        site = self._site_loader.load()
        page = site.get_page(path)
        if page is None:
            return None
        return self.render_page(site, page)

    def render_page(self, site: Site, page: PageSpec) -> str:
        """Render a known page of a loaded site to an HTML document."""
        context = self._base_context(site, page.path)
        context["page"] = page

        if page.template in ("post", "note", "page"):
            node = site.get_node(page.path)
            if node is None:
                raise LookupError(f"No content node for page {page.path}")
            result = self._renderer.render(node.source_path, cache_key(node))
            context.update(node=node, content=Markup(result.html), toc=result.toc)
        elif page.template == "index":
            context["entries"] = self._entries(site.posts())
        elif page.template == "notes":
            context["entries"] = self._entries(site.notes())
        elif page.template == "tag":
            slug = page.context["tag_slug"]
            context.update(
                tag=site.tag_name(slug) or page.context["tag"],
                entries=self._entries(site.tagged(slug)),
            )

        logger.debug(f"Rendering {page.path} with {page.template}.html")
        return self._env.get_template(f"{page.template}.html").render(context)

    def render_not_found(self, path: str) -> str:
        """Render the 404 document for an unknown path."""
        site = self._site_loader.load()
        context = self._base_context(site, path)
        context["path"] = path
        return self._env.get_template("404.html").render(context)

    def _base_context(self, site: Site, path: str) -> dict[str, Any]:
        return {
            "site": self._site_config,
            "nav": build_navigation(site, path),
            "breadcrumbs": site.get_breadcrumbs(path),
            "live_reload": self._live_reload,
        }

    def _entries(self, nodes: list[ContentNode]) -> list[Entry]:
        return [
            Entry(node=node, summary=self._renderer.render(node.source_path, cache_key(node)).summary)
            for node in nodes
        ]
