"""Static site builder.

Writes every page of the site to ``<output_dir>/<slug>/index.html`` and
copies the bundled static assets to ``<output_dir>/static``.
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from folio.assets import get_static_dir
from folio.config import Config
from folio.core.cache import FileCache
from folio.core.renderer import PageRenderer
from folio.core.site import SiteLoader
from folio.core.types import URLPath
from folio.views import PageView

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    """Summary of a static build."""

    output_dir: Path
    pages: list[URLPath] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)


def output_path_for(output_dir: Path, path: str) -> Path:
    """Map a page path to its index.html file under output_dir."""
    stripped = path.strip("/")
    return output_dir / stripped / "index.html" if stripped else output_dir / "index.html"


def build_site(config: Config, *, clean: bool = False) -> BuildReport:
    """Render the whole site to static files.

    Args:
        config: Application configuration
        clean: Remove the output directory before building

    Returns:
        BuildReport listing the written pages

    Raises:
        SlugError: If a content file's slug can't be derived
        ValueError: If frontmatter is invalid or slugs collide
    """
    output_dir = config.content.output_dir
    if clean and output_dir.exists():
        logger.info(f"Removing {output_dir}")
        shutil.rmtree(output_dir)

    loader = SiteLoader(config.content.source_dir)
    renderer = PageRenderer(FileCache(config.content.cache_dir))
    view = PageView(loader, renderer, config.site)

    site = loader.load()
    report = BuildReport(output_dir=output_dir)
    for page in site.pages:
        target = output_path_for(output_dir, page.path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(view.render_page(site, page), encoding="utf-8")
        report.pages.append(page.path)
        logger.debug(f"Wrote {target}")

    (output_dir / "404.html").write_text(view.render_not_found("/404/"), encoding="utf-8")
    shutil.copytree(get_static_dir(), output_dir / "static", dirs_exist_ok=True)

    logger.info(f"Built {report.page_count} pages into {output_dir}")
    return report
