"""Listing API endpoints.

Published posts, notes, and tags. Drafts never appear in listings.
"""

from typing import Any

from aiohttp import web

from folio.api.pages import node_meta
from folio.app_keys import renderer_key, site_loader_key
from folio.core.colors import color_for
from folio.core.content import ContentNode
from folio.core.renderer import PageRenderer
from folio.core.slugs import SlugError, tag_slug
from folio.views import cache_key


def create_listing_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/posts", get_posts),
        web.get("/api/notes", get_notes),
        web.get("/api/tags", get_tags),
        web.get("/api/tags/{tag}", get_tag),
    ]


def _summaries(renderer: PageRenderer, nodes: list[ContentNode]) -> list[dict[str, Any]]:
    items = []
    for node in nodes:
        item = node_meta(node)
        item["summary"] = renderer.render(node.source_path, cache_key(node)).summary
        items.append(item)
    return items


async def get_posts(request: web.Request) -> web.Response:
    site = request.app[site_loader_key].load()
    items = _summaries(request.app[renderer_key], site.posts())
    return web.json_response({"items": items})


async def get_notes(request: web.Request) -> web.Response:
    site = request.app[site_loader_key].load()
    items = _summaries(request.app[renderer_key], site.notes())
    return web.json_response({"items": items})


async def get_tags(request: web.Request) -> web.Response:
    site = request.app[site_loader_key].load()
    return web.json_response({"items": [t.to_dict() for t in site.tags()]})


async def get_tag(request: web.Request) -> web.Response:
    tag = request.match_info["tag"]
    site = request.app[site_loader_key].load()

    try:
        slug = tag_slug(tag)
    except SlugError:
        slug = None
    name = site.tag_name(slug) if slug else None
    if slug is None or name is None:
        return web.json_response(
            {"error": "Tag not found", "tag": tag},
            status=404,
        )

    nodes = site.tagged(slug)
    return web.json_response(
        {
            "tag": {"name": name, "slug": slug, "color": color_for(name), "count": len(nodes)},
            "items": _summaries(request.app[renderer_key], nodes),
        },
    )
