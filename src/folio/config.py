"""Configuration management for Folio.

Settings live in ``folio.toml``, discovered in the working directory or
any of its parents. Relative paths are resolved against the directory
holding the file.

Example:
    [site]
    title = "Alex's notes"
    author = "@alex"

    [content]
    source_dir = "content"
    output_dir = "public"

    [live_reload]
    watch_patterns = ["**/*.md"]
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "folio.toml"

DEFAULT_WATCH_PATTERNS = ["**/*.md", "**/*.mdx"]


@dataclass
class SiteConfig:
    """Site metadata shown in page templates."""

    title: str = "Folio"
    author: str | None = None
    description: str | None = None
    url: str | None = None


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class ContentConfig:
    """Where content is read from and where renders go."""

    source_dir: Path = field(default_factory=lambda: Path("content"))
    cache_dir: Path = field(default_factory=lambda: Path(".cache"))
    output_dir: Path = field(default_factory=lambda: Path("public"))

    def relative_to(self, base: Path) -> "ContentConfig":
        """Resolve every directory against base."""
        return ContentConfig(
            source_dir=base / self.source_dir,
            cache_dir=base / self.cache_dir,
            output_dir=base / self.output_dir,
        )


@dataclass
class LiveReloadConfig:
    """Live reload configuration."""

    enabled: bool = True
    watch_patterns: list[str] | None = None


def _section(data: dict[str, Any], name: str) -> dict[str, Any] | None:
    value = data.get(name)
    if value is not None and not isinstance(value, dict):
        raise ValueError(f"{name} section must be a dictionary")
    return value


def _string(section: dict[str, Any], name: str, key: str, default: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str):
        raise ValueError(f"{name}.{key} must be a string")
    return value


def _optional_string(section: dict[str, Any], name: str, key: str) -> str | None:
    value = section.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{name}.{key} must be a string")
    return value


@dataclass
class Config:
    """Application configuration."""

    site: SiteConfig
    server: ServerConfig
    content: ContentConfig
    live_reload: LiveReloadConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for folio.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered = cls._discover_config()
        if discovered is None:
            return cls(
                site=SiteConfig(),
                server=ServerConfig(),
                content=ContentConfig(),
                live_reload=LiveReloadConfig(),
            )
        return cls._load_from_file(discovered)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Return the nearest folio.toml from the working directory up."""
        cwd = Path.cwd()
        for directory in (cwd, *cwd.parents):
            candidate = directory / CONFIG_FILENAME
            if candidate.exists():
                return candidate
        return None

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        with path.open("rb") as f:
            data = tomllib.load(f)

        return cls(
            site=cls._parse_site(_section(data, "site")),
            server=cls._parse_server(_section(data, "server")),
            content=cls._parse_content(_section(data, "content")).relative_to(path.parent),
            live_reload=cls._parse_live_reload(_section(data, "live_reload")),
            config_path=path,
        )

    @classmethod
    def _parse_site(cls, section: dict[str, Any] | None) -> SiteConfig:
        if section is None:
            return SiteConfig()
        return SiteConfig(
            title=_string(section, "site", "title", SiteConfig.title),
            author=_optional_string(section, "site", "author"),
            description=_optional_string(section, "site", "description"),
            url=_optional_string(section, "site", "url"),
        )

    @classmethod
    def _parse_server(cls, section: dict[str, Any] | None) -> ServerConfig:
        if section is None:
            return ServerConfig()

        port = section.get("port", ServerConfig.port)
        # bool is an int subclass; reject `port = true`
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(
            host=_string(section, "server", "host", ServerConfig.host),
            port=port,
        )

    @classmethod
    def _parse_content(cls, section: dict[str, Any] | None) -> ContentConfig:
        """Parse the content section; paths stay relative to the config file."""
        if section is None:
            return ContentConfig()
        return ContentConfig(
            source_dir=Path(_string(section, "content", "source_dir", "content")),
            cache_dir=Path(_string(section, "content", "cache_dir", ".cache")),
            output_dir=Path(_string(section, "content", "output_dir", "public")),
        )

    @classmethod
    def _parse_live_reload(cls, section: dict[str, Any] | None) -> LiveReloadConfig:
        if section is None:
            return LiveReloadConfig()

        enabled = section.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError("live_reload.enabled must be a boolean")

        patterns = section.get("watch_patterns")
        if patterns is not None:
            if not isinstance(patterns, list):
                raise ValueError("live_reload.watch_patterns must be a list")
            if not all(isinstance(p, str) for p in patterns):
                raise ValueError("live_reload.watch_patterns items must be strings")

        return LiveReloadConfig(enabled=enabled, watch_patterns=patterns)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        source_dir: Path | None = None,
        cache_dir: Path | None = None,
        output_dir: Path | None = None,
        live_reload_enabled: bool | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            source_dir: Override content.source_dir
            cache_dir: Override content.cache_dir
            output_dir: Override content.output_dir
            live_reload_enabled: Override live_reload.enabled

        Returns:
            New Config instance with overrides applied
        """

        def given(**values: object) -> dict[str, object]:
            return {k: v for k, v in values.items() if v is not None}

        return replace(
            self,
            server=replace(self.server, **given(host=host, port=port)),
            content=replace(
                self.content,
                **given(source_dir=source_dir, cache_dir=cache_dir, output_dir=output_dir),
            ),
            live_reload=replace(self.live_reload, **given(enabled=live_reload_enabled)),
        )
