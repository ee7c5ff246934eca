"""Application keys for type-safe app configuration access."""

from pathlib import Path

from aiohttp import web

from folio.config import SiteConfig
from folio.core.cache import FileCache
from folio.core.renderer import PageRenderer
from folio.core.site import SiteLoader
from folio.live.reload import LiveReloadManager
from folio.views import PageView

renderer_key = web.AppKey("renderer", PageRenderer)
site_loader_key = web.AppKey("site_loader", SiteLoader)
cache_key = web.AppKey("cache", FileCache)
view_key = web.AppKey("view", PageView)
site_config_key = web.AppKey("site_config", SiteConfig)
verbose_key = web.AppKey("verbose", bool)
live_reload_enabled_key = web.AppKey("live_reload_enabled", bool)
live_reload_manager_key = web.AppKey("live_reload_manager", LiveReloadManager)
static_dir_key = web.AppKey("static_dir", Path)
