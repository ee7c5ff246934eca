"""Shared test fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest
from folio.config import (
    Config,
    ContentConfig,
    LiveReloadConfig,
    ServerConfig,
    SiteConfig,
)

WriteContent = Callable[..., Path]


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Content source directory under tmp_path."""
    content = tmp_path / "content"
    content.mkdir(exist_ok=True)
    return content


@pytest.fixture
def test_config(tmp_path: Path, source_dir: Path) -> Config:
    """Create a test configuration with tmp_path directories."""
    return Config(
        site=SiteConfig(title="Test Blog", author="@tester"),
        server=ServerConfig(),
        content=ContentConfig(
            source_dir=source_dir,
            cache_dir=tmp_path / ".cache",
            output_dir=tmp_path / "public",
        ),
        live_reload=LiveReloadConfig(enabled=False),
    )


@pytest.fixture
def write_content(source_dir: Path) -> WriteContent:
    """Return a helper that writes a markdown file with frontmatter.

    Usage:
        write_content("2018---my-post", title="My Post", layout="post")
        write_content("notes/2018---lti", layout="note", tags=["lti"])
    """

    def _write(
        directory: str,
        *,
        title: str | None = None,
        layout: str | None = "post",
        date: str | None = None,
        tags: list[str] | None = None,
        draft: bool = False,
        subtitle: str | None = None,
        body: str = "Some content.",
        filename: str = "index.md",
    ) -> Path:
        lines = ["---"]
        if title is not None:
            lines.append(f'title: "{title}"')
        if subtitle is not None:
            lines.append(f'subtitle: "{subtitle}"')
        if layout is not None:
            lines.append(f"layout: {layout}")
        if date is not None:
            lines.append(f"date: {date}")
        if tags is not None:
            lines.append("tags:")
            lines.extend(f'  - "{tag}"' for tag in tags)
        if draft:
            lines.append("draft: true")
        lines.append("---")
        lines.append("")
        lines.append(body)

        target_dir = source_dir / directory
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / filename
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
