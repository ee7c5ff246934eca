"""File-based render cache with mtime invalidation.

Cache structure:
    .cache/
    ├── pages/
    │   └── notes/
    │       └── lti-notes.html       # Rendered HTML body
    └── meta/
        └── notes/
            └── lti-notes.json       # ToC, summary and source mtime
"""

import json
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple, TypedDict

logger = logging.getLogger(__name__)

GITIGNORE = "# Ignore everything in this directory\n*\n"


class TocEntryDict(TypedDict):
    """Table of contents entry."""

    level: int
    title: str
    id: str


class CachedMetadata(TypedDict):
    """Metadata stored next to a rendered page."""

    source_mtime: float
    summary: str
    toc: list[TocEntryDict]


@dataclass
class CacheEntry:
    """Result of cache lookup."""

    html: str
    meta: CachedMetadata


class _EntryPaths(NamedTuple):
    html: Path
    meta: Path


class FileCache:
    """Rendered page bodies keyed by slug.

    An entry is valid while the mtime it was stored with equals the
    current mtime of its source file.
    """

    def __init__(self, cache_dir: Path) -> None:
        """Initialize cache with directory path.

        Args:
            cache_dir: Root directory for cache files (e.g., .cache/)
        """
        self._cache_dir = cache_dir

    @property
    def cache_dir(self) -> Path:
        """Root cache directory."""
        return self._cache_dir

    def get(self, key: str, source_mtime: float) -> CacheEntry | None:
        """Look up a rendered page.

        Args:
            key: Slug without surrounding slashes (e.g., "notes/lti-notes")
            source_mtime: Current mtime of the source file

        Returns:
            CacheEntry on a fresh hit, None on a miss, a stale entry or
            unreadable files
        """
        paths = self._paths(key)
        meta = _read_meta(paths.meta)
        if meta is None:
            return None
        if meta["source_mtime"] != source_mtime:
            logger.debug(f"Stale cache entry for {key}")
            return None

        try:
            html = paths.html.read_text(encoding="utf-8")
        except OSError:
            return None
        return CacheEntry(html=html, meta=meta)

    def set(
        self,
        key: str,
        html: str,
        summary: str,
        source_mtime: float,
        toc: list[TocEntryDict],
    ) -> None:
        """Store a rendered page.

        Args:
            key: Slug without surrounding slashes (e.g., "notes/lti-notes")
            html: Rendered HTML body
            summary: Plain-text summary
            source_mtime: Source file mtime for invalidation
            toc: Table of contents entries
        """
        if not self._cache_dir.exists():
            self._cache_dir.mkdir(parents=True)
            (self._cache_dir / ".gitignore").write_text(GITIGNORE, encoding="utf-8")

        meta: CachedMetadata = {"source_mtime": source_mtime, "summary": summary, "toc": toc}
        paths = self._paths(key)
        for path, text in ((paths.html, html), (paths.meta, json.dumps(meta))):
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")

    def invalidate(self, key: str) -> None:
        """Remove a page from the cache, if present."""
        for path in self._paths(key):
            path.unlink(missing_ok=True)

    def clear(self) -> None:
        """Remove all cached pages, keeping the cache directory."""
        for subdir in ("pages", "meta"):
            shutil.rmtree(self._cache_dir / subdir, ignore_errors=True)

    def _paths(self, key: str) -> _EntryPaths:
        return _EntryPaths(
            html=self._cache_dir / "pages" / f"{key}.html",
            meta=self._cache_dir / "meta" / f"{key}.json",
        )


def _read_meta(meta_path: Path) -> CachedMetadata | None:
    try:
        data = json.loads(meta_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return None

    if not isinstance(data, dict) or "source_mtime" not in data:
        return None
    toc = data.get("toc")
    if not isinstance(toc, list):
        return None

    return {
        "source_mtime": data["source_mtime"],
        "summary": str(data.get("summary", "")),
        "toc": toc,
    }
