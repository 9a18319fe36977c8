"""Configuration management for plainwiki.

Supports TOML configuration format with auto-discovery.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

CONFIG_FILENAME = "plainwiki.toml"

DEFAULT_WIKI_TITLE = "Welcome"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class WikiConfig:
    """Wiki storage and presentation configuration."""

    title: str = DEFAULT_WIKI_TITLE
    pages_dir: Path = field(default_factory=lambda: Path("pages"))
    images_dir: Path = field(default_factory=lambda: Path("images"))
    template_dir: Path | None = None


@dataclass
class SessionsConfig:
    """Session backend configuration.

    The backend is a Redis server reached without authentication.
    """

    address: str = "localhost:6379"
    db: int = 0


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    wiki: WikiConfig
    sessions: SessionsConfig | None
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for plainwiki.toml in current directory and parents.

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

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> Config:
        return cls(
            server=ServerConfig(),
            wiki=WikiConfig(),
            sessions=None,
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            wiki=cls._parse_wiki(data.get("wiki"), config_dir),
            sessions=cls._parse_sessions(data.get("sessions")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_wiki(cls, data: object, config_dir: Path) -> WikiConfig:
        """Parse wiki configuration section.

        Args:
            data: Raw wiki section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            WikiConfig instance
        """
        if data is None:
            return WikiConfig(
                pages_dir=config_dir / "pages",
                images_dir=config_dir / "images",
            )

        if not isinstance(data, dict):
            raise ValueError("wiki section must be a dictionary")

        title = data.get("title", DEFAULT_WIKI_TITLE)
        if not isinstance(title, str):
            raise ValueError("wiki.title must be a string")

        pages_dir = data.get("pages_dir", "pages")
        if not isinstance(pages_dir, str):
            raise ValueError("wiki.pages_dir must be a string")

        images_dir = data.get("images_dir", "images")
        if not isinstance(images_dir, str):
            raise ValueError("wiki.images_dir must be a string")

        template_dir = data.get("template_dir")
        if template_dir is not None and not isinstance(template_dir, str):
            raise ValueError("wiki.template_dir must be a string")

        return WikiConfig(
            title=title,
            pages_dir=config_dir / pages_dir,
            images_dir=config_dir / images_dir,
            template_dir=config_dir / template_dir if template_dir else None,
        )

    @classmethod
    def _parse_sessions(cls, data: object) -> SessionsConfig | None:
        """Parse sessions configuration section.

        Args:
            data: Raw sessions section data

        Returns:
            SessionsConfig instance or None if section not present
        """
        if data is None:
            return None

        if not isinstance(data, dict):
            raise ValueError("sessions section must be a dictionary")

        address = data.get("address", "localhost:6379")
        if not isinstance(address, str):
            raise ValueError("sessions.address must be a string")
        host, _, port = address.rpartition(":")
        if not host or not (port.isascii() and port.isdigit()):
            raise ValueError("sessions.address must be in host:port form")

        db = data.get("db", 0)
        if not isinstance(db, int) or isinstance(db, bool):
            raise ValueError("sessions.db must be an integer")

        return SessionsConfig(address=address, db=db)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        pages_dir: Path | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            pages_dir: Override wiki.pages_dir

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        wiki = self.wiki
        if pages_dir is not None:
            wiki = replace(self.wiki, pages_dir=pages_dir)

        return replace(self, server=server, wiki=wiki)
