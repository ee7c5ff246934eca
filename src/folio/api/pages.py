"""Pages API endpoint.

Handles content page rendering and returns JSON responses with metadata,
ToC, and HTML content.
"""

import logging
from datetime import UTC, datetime
from email.utils import formatdate
from hashlib import md5
from time import mktime
from typing import Any

from aiohttp import web

from folio.app_keys import renderer_key, site_loader_key, verbose_key
from folio.core.colors import color_for
from folio.core.content import ContentNode
from folio.views import cache_key

logger = logging.getLogger(__name__)


def create_pages_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/pages/{path:.*}", get_page),
    ]


def tag_to_dict(tag: str, slug: str) -> dict[str, str]:
    return {"name": tag, "slug": slug, "color": color_for(tag)}


def node_meta(node: ContentNode) -> dict[str, Any]:
    """Frontmatter-derived metadata shared by page and listing responses."""
    fm = node.frontmatter
    return {
        "title": node.title,
        "subtitle": fm.subtitle,
        "date": fm.date.isoformat() if fm.date else None,
        "layout": fm.layout,
        "draft": fm.draft,
        "path": node.slug,
        "tags": [tag_to_dict(t, s) for t, s in zip(node.tags, node.tag_slugs, strict=True)],
    }


async def get_page(request: web.Request) -> web.Response:
    path = request.match_info["path"]
    site = request.app[site_loader_key].load()
    renderer = request.app[renderer_key]

    node = site.get_node(path)
    if node is None:
        return web.json_response(
            {"error": "Page not found", "path": path},
            status=404,
        )

    result = renderer.render(node.source_path, cache_key(node))

    if request.app[verbose_key]:
        logger.info(f"{node.slug}: rendered (cached={result.from_cache})")

    source_mtime = result.source_path.stat().st_mtime
    last_modified = datetime.fromtimestamp(source_mtime, tz=UTC)

    etag = _compute_etag(result.html)

    if_none_match = request.headers.get("If-None-Match")
    if if_none_match == etag:
        return web.Response(status=304)

    meta = node_meta(node)
    meta["source_file"] = str(result.source_path)
    meta["last_modified"] = last_modified.isoformat()

    response_data = {
        "meta": meta,
        "breadcrumbs": [b.to_dict() for b in site.get_breadcrumbs(node.slug)],
        "toc": result.toc,
        "content": result.html,
    }

    return web.json_response(
        response_data,
        headers={
            "ETag": etag,
            "Last-Modified": formatdate(mktime(last_modified.timetuple()), usegmt=True),
            "Cache-Control": "private, max-age=60",
        },
    )


def _compute_etag(content: str) -> str:
    # First 16 hex chars (64 bits) of the content hash
    content_hash = md5(content.encode("utf-8"), usedforsecurity=False).hexdigest()[:16]
    return f'"{content_hash}"'
