"""
BootstrapCDN Configuration Loader

Loads configuration from:
1. config/_config.yml - Library versions and template data (version-controlled)
2. Environment / .env file - Deployment switches (SITE_ENV, FORCE_SSL, PORT)

The YAML file is read exactly once at startup. Any failure is fatal.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

# Relative to the working directory, so an installed package finds the
# checkout's config when started from its root
DEFAULT_CONFIG_PATH = Path("config") / "_config.yml"
DEFAULT_ENV_FILE = Path(".env")
DEFAULT_PORT = 3000
DEFAULT_SITE_URL = "https://www.bootstrapcdn.com"


class ConfigLoadError(Exception):
    """The configuration file could not be read or is structurally invalid."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot load config {self.path}: {reason}")


class DeploymentMode(Enum):
    PRODUCTION = "production"
    DEVELOPMENT = "development"

    @classmethod
    def from_value(cls, value: str | None) -> "DeploymentMode":
        """Anything other than "production" is a development deployment."""
        if value and value.strip().lower() == cls.PRODUCTION.value:
            return cls.PRODUCTION
        return cls.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        return self is DeploymentMode.PRODUCTION


@dataclass(frozen=True)
class VersionRecord:
    """One released version of a library and its CDN asset URLs."""
    version: str
    css_complete: str | None = None
    javascript: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "VersionRecord":
        rest = {k: v for k, v in data.items() if k not in ("version", "css_complete", "javascript")}
        return cls(
            version=str(data["version"]),
            css_complete=data.get("css_complete"),
            javascript=data.get("javascript"),
            extra=MappingProxyType(rest),
        )

    def __getattr__(self, name: str) -> Any:
        # Templates reach pass-through keys (latest, css, ...) as attributes
        extra = self.__dict__.get("extra", {})
        if name in extra:
            return extra[name]
        raise AttributeError(name)


@dataclass(frozen=True)
class Config:
    """Main configuration container. Immutable for the process lifetime."""
    bootstrap: tuple[VersionRecord, ...] = ()
    fontawesome: tuple[VersionRecord, ...] = ()
    port: int | None = None
    site_url: str = DEFAULT_SITE_URL
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """Read and validate the YAML config file.

        Raises ConfigLoadError if the file is missing, unreadable, not YAML,
        or lacks the required structure.
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH
        path = Path(path)

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigLoadError(path, e.strerror or str(e)) from e
        except yaml.YAMLError as e:
            raise ConfigLoadError(path, f"invalid YAML: {e}") from e

        return cls.from_mapping(data, path=path)

    @classmethod
    def from_mapping(cls, data: Any, path: Path | str = "<memory>") -> "Config":
        """Build a Config from already-parsed YAML data."""
        if not isinstance(data, dict):
            raise ConfigLoadError(path, "top level must be a mapping")

        port = data.get("port")
        if port is not None and (isinstance(port, bool) or not isinstance(port, int)):
            raise ConfigLoadError(path, f"port must be an integer, got {port!r}")

        releases = {}
        for key in ("bootstrap", "fontawesome"):
            if key not in data:
                raise ConfigLoadError(path, f"missing required key '{key}'")
            items = data[key]
            if not isinstance(items, list):
                raise ConfigLoadError(path, f"'{key}' must be a list of version records")
            for i, item in enumerate(items):
                if not isinstance(item, dict) or "version" not in item:
                    raise ConfigLoadError(path, f"'{key}[{i}]' must be a mapping with a 'version'")
            releases[key] = tuple(VersionRecord.from_mapping(item) for item in items)

        extra = {
            k: v for k, v in data.items()
            if k not in ("port", "bootstrap", "fontawesome", "site_url")
        }

        return cls(
            bootstrap=releases["bootstrap"],
            fontawesome=releases["fontawesome"],
            port=port,
            site_url=str(data.get("site_url", DEFAULT_SITE_URL)).rstrip("/"),
            extra=MappingProxyType(extra),
        )


@dataclass(frozen=True)
class Settings:
    """Deployment switches, read from the environment once at startup."""
    mode: DeploymentMode = DeploymentMode.DEVELOPMENT
    force_ssl: bool = False
    port: int | None = None
    config_path: Path = DEFAULT_CONFIG_PATH

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> "Settings":
        """Load .env (if present) and build Settings from os.environ."""
        if env_file is None:
            env_file = DEFAULT_ENV_FILE
        load_dotenv(env_file, override=False)

        port = None
        port_str = os.getenv("PORT", "")
        if port_str:
            try:
                port = int(port_str)
            except ValueError:
                pass

        return cls(
            mode=DeploymentMode.from_value(os.getenv("SITE_ENV")),
            force_ssl=os.getenv("FORCE_SSL", "").lower() == "true",
            port=port,
            config_path=Path(os.getenv("BOOTSTRAPCDN_CONFIG", str(DEFAULT_CONFIG_PATH))),
        )


def resolve_port(settings: Settings, config: Config) -> int:
    """Environment PORT wins, then the config file, then the default."""
    return settings.port or config.port or DEFAULT_PORT
