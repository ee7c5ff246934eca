"""Config API endpoint.

Exposes the site metadata from folio.toml and whether the browser should
open a live reload connection.
"""

from dataclasses import asdict

from aiohttp import web

from folio.app_keys import live_reload_enabled_key, site_config_key


def create_config_routes() -> list[web.RouteDef]:
    return [web.get("/api/config", get_config)]


async def get_config(request: web.Request) -> web.Response:
    return web.json_response(
        {
            "site": asdict(request.app[site_config_key]),
            "liveReloadEnabled": request.app[live_reload_enabled_key],
        },
    )
