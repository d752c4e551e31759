"""Configuration management for staticdocs.

Configuration is a JSON object, read from ``configs/app.json`` unless another
file is given. Relative paths are resolved against the working directory.
"""

import json
from dataclasses import dataclass, field, replace
from pathlib import Path

from staticdocs.errors import ConfigError

DEFAULT_CONFIG_PATH = Path("configs") / "app.json"


@dataclass
class ServerConfig:
    """Development server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class Config:
    """Application configuration."""

    docs_root: Path = field(default_factory=lambda: Path("public/docs"))
    template_root: Path = field(default_factory=lambda: Path("public"))
    output_dir: Path = field(default_factory=lambda: Path("dist"))
    asset_dirs: list[str] = field(default_factory=lambda: ["assets"])
    server: ServerConfig = field(default_factory=ServerConfig)
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file. Otherwise uses
        configs/app.json when present, defaults when not.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing keys

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ConfigError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        if not DEFAULT_CONFIG_PATH.exists():
            return cls()

        return cls._load_from_file(DEFAULT_CONFIG_PATH)

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Raises:
            ConfigError: If the file is not valid JSON or values are invalid
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a JSON object")

        return cls(
            docs_root=cls._parse_path(data, "docsRoot", "public/docs"),
            template_root=cls._parse_path(data, "templateRoot", "public"),
            output_dir=cls._parse_path(data, "outputDir", "dist"),
            asset_dirs=cls._parse_asset_dirs(data.get("assetDirs")),
            server=cls._parse_server(data.get("server")),
            config_path=path,
        )

    @classmethod
    def _parse_path(cls, data: dict, key: str, default: str) -> Path:
        value = data.get(key, default)
        if not isinstance(value, str):
            raise ConfigError(f"{key} must be a string")
        return Path(value)

    @classmethod
    def _parse_asset_dirs(cls, data: object) -> list[str]:
        if data is None:
            return ["assets"]

        if not isinstance(data, list):
            raise ConfigError("assetDirs must be a list")
        asset_dirs: list[str] = []
        for item in data:
            if not isinstance(item, str):
                raise ConfigError("assetDirs items must be strings")
            asset_dirs.append(item)
        return asset_dirs

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ConfigError("server section must be an object")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ConfigError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ConfigError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    def with_overrides(
        self,
        *,
        docs_root: Path | None = None,
        template_root: Path | None = None,
        output_dir: Path | None = None,
        host: str | None = None,
        port: int | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config; the original
        Config is not modified.

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

        return replace(
            self,
            docs_root=docs_root if docs_root is not None else self.docs_root,
            template_root=template_root if template_root is not None else self.template_root,
            output_dir=output_dir if output_dir is not None else self.output_dir,
            server=server,
        )
