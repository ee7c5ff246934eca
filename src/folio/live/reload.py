"""WebSocket-based live reload for development mode.

The watcher turns each batch of content changes into the set of page
slugs it touched, drops the cached site once, and tells every connected
browser which pages to reload.
"""

import asyncio
import json
import logging
import weakref
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from aiohttp import WSMsgType, web
from watchfiles import Change, awatch

from folio.config import DEFAULT_WATCH_PATTERNS
from folio.core.slugs import SlugError, derive_slug

if TYPE_CHECKING:
    from folio.core.site import SiteLoader

logger = logging.getLogger(__name__)


class LiveReloadManager:
    """Watches the content directory and pushes reloads to browsers."""

    def __init__(
        self,
        source_dir: Path,
        watch_patterns: list[str] | None = None,
        *,
        site_loader: "SiteLoader | None" = None,
    ) -> None:
        """Initialize the live reload manager.

        Args:
            source_dir: Content directory to watch
            watch_patterns: Glob patterns relative to source_dir
                (default: markdown and MDX files)
            site_loader: Loader whose cached site is dropped on change
        """
        self._source_dir = source_dir
        self._watch_patterns = watch_patterns or DEFAULT_WATCH_PATTERNS
        self._site_loader = site_loader
        self._clients: weakref.WeakSet[web.WebSocketResponse] = weakref.WeakSet()
        self._watch_task: asyncio.Task[None] | None = None

    @property
    def client_count(self) -> int:
        """Number of open WebSocket connections."""
        return sum(1 for ws in self._clients if not ws.closed)

    @property
    def watching(self) -> bool:
        return self._watch_task is not None

    async def start(self) -> None:
        """Start watching, unless already started."""
        if self._watch_task is None:
            self._watch_task = asyncio.create_task(self._watch())

    async def stop(self) -> None:
        """Stop watching and close all client connections."""
        if self._watch_task is not None:
            self._watch_task.cancel()
            try:
                await self._watch_task
            except asyncio.CancelledError:
                pass
            self._watch_task = None

        for ws in list(self._clients):
            await ws.close()

    async def handle_websocket(self, request: web.Request) -> web.WebSocketResponse:
        """Keep a browser connection open until it goes away."""
        ws = web.WebSocketResponse()
        await ws.prepare(request)
        self._clients.add(ws)

        try:
            async for msg in ws:
                if msg.type == WSMsgType.ERROR:
                    logger.debug(f"Live reload connection error: {ws.exception()}")
                    break
        finally:
            self._clients.discard(ws)

        return ws

    def accepts(self, change: Change, path: str) -> bool:
        """watchfiles filter: only content files under the source dir."""
        return self.matches(Path(path))

    def matches(self, path: Path) -> bool:
        """Check whether a path falls under one of the watch patterns."""
        try:
            relative = path.relative_to(self._source_dir)
        except ValueError:
            return False
        return any(relative.match(pattern) for pattern in self._watch_patterns)

    def page_path(self, file_path: Path) -> str:
        """Slug of the page a content file renders to.

        Falls back to "/" when the file's directory can't be slugged.
        """
        try:
            return derive_slug(file_path)
        except SlugError as e:
            logger.warning(f"Reloading index instead: {e}")
            return "/"

    def changed_pages(self, changes: Iterable[tuple[Change, str]]) -> list[str]:
        """Map a batch of file changes to the sorted, distinct page slugs."""
        return sorted({self.page_path(Path(path)) for _change, path in changes})

    async def notify(self, changes: Iterable[tuple[Change, str]]) -> list[str]:
        """Handle one batch of changes.

        Drops the cached site, then broadcasts a reload for every page the
        batch touched.

        Returns:
            The page slugs that were broadcast
        """
        pages = self.changed_pages(changes)
        if not pages:
            return pages

        logger.info(f"Content changed: {', '.join(pages)}")
        if self._site_loader is not None:
            self._site_loader.invalidate()
        for page in pages:
            await self.broadcast(page)
        return pages

    async def broadcast(self, path: str) -> None:
        """Send a reload message for one page to every open connection."""
        message = json.dumps({"type": "reload", "path": path})
        for ws in list(self._clients):
            if ws.closed:
                continue
            try:
                await ws.send_str(message)
            except ConnectionResetError:
                # Disconnected mid-send; the WeakSet drops it
                pass

    async def _watch(self) -> None:
        async for changes in awatch(self._source_dir, watch_filter=self.accepts):
            await self.notify(changes)


def create_live_reload_routes(manager: LiveReloadManager) -> list[web.RouteDef]:
    return [web.get("/ws/live-reload", manager.handle_websocket)]
