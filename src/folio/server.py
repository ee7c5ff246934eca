"""aiohttp server for Folio.

Application factory and route registration for the development server.
"""

import logging

from aiohttp import web

from folio.api.config import create_config_routes
from folio.api.listing import create_listing_routes
from folio.api.pages import create_pages_routes
from folio.app_keys import (
    cache_key,
    live_reload_enabled_key,
    live_reload_manager_key,
    renderer_key,
    site_loader_key,
    site_config_key,
    static_dir_key,
    verbose_key,
    view_key,
)
from folio.assets import get_static_dir
from folio.config import Config
from folio.core.cache import FileCache
from folio.core.renderer import PageRenderer
from folio.core.site import SiteLoader
from folio.views import PageView

logger = logging.getLogger(__name__)


async def html_page(request: web.Request) -> web.Response:
    """Serve a rendered HTML page, or the 404 page for unknown paths."""
    path = request.match_info["path"]
    view = request.app[view_key]

    document = view.render(path)
    if document is None:
        return web.Response(
            text=view.render_not_found(f"/{path}"),
            content_type="text/html",
            status=404,
        )
    return web.Response(text=document, content_type="text/html")


def create_app(config: Config, *, verbose: bool = False) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        verbose: Log every rendered API page

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    cache = FileCache(config.content.cache_dir)
    renderer = PageRenderer(cache)
    site_loader = SiteLoader(config.content.source_dir)
    view = PageView(
        site_loader,
        renderer,
        config.site,
        live_reload=config.live_reload.enabled,
    )

    app[renderer_key] = renderer
    app[site_loader_key] = site_loader
    app[cache_key] = cache
    app[view_key] = view
    app[site_config_key] = config.site
    app[verbose_key] = verbose
    app[live_reload_enabled_key] = config.live_reload.enabled

    # API routes (must be registered first to take precedence over page routes)
    app.router.add_routes(create_pages_routes())
    app.router.add_routes(create_listing_routes())
    app.router.add_routes(create_config_routes())

    if config.live_reload.enabled:
        from folio.live import LiveReloadManager
        from folio.live.reload import create_live_reload_routes

        manager = LiveReloadManager(
            config.content.source_dir,
            watch_patterns=config.live_reload.watch_patterns,
            site_loader=site_loader,
        )
        app[live_reload_manager_key] = manager
        app.router.add_routes(create_live_reload_routes(manager))
        app.on_startup.append(_start_live_reload)
        app.on_cleanup.append(_stop_live_reload)

    static_dir = get_static_dir()
    app[static_dir_key] = static_dir
    app.router.add_static("/static", static_dir)

    # Rendered pages - must be last to catch all remaining routes
    app.router.add_get("/{path:.*}", html_page)

    return app


async def _start_live_reload(app: web.Application) -> None:
    """Start live reload on application startup."""
    await app[live_reload_manager_key].start()


async def _stop_live_reload(app: web.Application) -> None:
    """Stop live reload on application cleanup."""
    await app[live_reload_manager_key].stop()


def run_server(config: Config, *, verbose: bool = False) -> None:
    """Run the server.

    Args:
        config: Application configuration
        verbose: Log every rendered API page
    """
    app = create_app(config, verbose=verbose)
    logger.info(f"Serving {config.content.source_dir} on {config.server.host}:{config.server.port}")
    web.run_app(app, host=config.server.host, port=config.server.port, print=None)
