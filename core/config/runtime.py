"""
Runtime Configuration

Central configuration for dataset storage, the HTTP service and logging.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


DEFAULT_CONFIG_FILENAMES = ("merkledrop.json", ".merkledrop.json")
USER_CONFIG_PATH = Path.home() / ".config" / "merkledrop" / "config.json"


@dataclass
class StorageConfig:
    """Where the published dataset snapshot is persisted."""
    data_file: str = "merkle.json"
    persist: bool = True


@dataclass
class ServerConfig:
    """Configuration for the HTTP service."""
    host: str = "0.0.0.0"
    port: int = 4000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    max_upload_bytes: int = 10 * 1024 * 1024


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - JSON file (merkledrop.json)
    - Programmatic construction
    """
    storage: StorageConfig = field(default_factory=StorageConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MERKLEDROP_DATA_FILE: Snapshot path
        - MERKLEDROP_PERSIST: Persist snapshots to disk (true/false)
        - MERKLEDROP_HOST: Bind host
        - MERKLEDROP_PORT / PORT: Bind port
        - MERKLEDROP_MAX_UPLOAD_BYTES: Upload size limit
        - MERKLEDROP_LOG_LEVEL: Log level
        - MERKLEDROP_LOG_FILE: Optional log file
        """
        overrides: dict[str, Any] = {}

        if os.getenv("MERKLEDROP_DATA_FILE"):
            overrides.setdefault("storage", {})["data_file"] = os.getenv("MERKLEDROP_DATA_FILE")
        if os.getenv("MERKLEDROP_PERSIST"):
            overrides.setdefault("storage", {})["persist"] = (
                os.getenv("MERKLEDROP_PERSIST", "true").lower() == "true"
            )

        if os.getenv("MERKLEDROP_HOST"):
            overrides.setdefault("server", {})["host"] = os.getenv("MERKLEDROP_HOST")
        port = os.getenv("MERKLEDROP_PORT") or os.getenv("PORT")
        if port:
            overrides.setdefault("server", {})["port"] = int(port)
        if os.getenv("MERKLEDROP_MAX_UPLOAD_BYTES"):
            overrides.setdefault("server", {})["max_upload_bytes"] = int(
                os.getenv("MERKLEDROP_MAX_UPLOAD_BYTES", "0")
            )

        if os.getenv("MERKLEDROP_LOG_LEVEL"):
            overrides["log_level"] = os.getenv("MERKLEDROP_LOG_LEVEL")
        if os.getenv("MERKLEDROP_LOG_FILE"):
            overrides["log_file"] = os.getenv("MERKLEDROP_LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        storage_data = data.get("storage", {})
        server_data = data.get("server", {})

        storage = StorageConfig(**storage_data) if storage_data else StorageConfig()
        server = ServerConfig(**server_data) if server_data else ServerConfig()

        return cls(
            storage=storage,
            server=server,
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for key, value in overrides.get("storage", {}).items():
            setattr(new_config.storage, key, value)
        for key, value in overrides.get("server", {}).items():
            setattr(new_config.server, key, value)

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]
        if "log_file" in overrides:
            new_config.log_file = overrides["log_file"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_runtime_config(config_path: str | Path | None = None) -> RuntimeConfig:
    """
    Load RuntimeConfig from a config file, then overlay environment variables.

    Search order when no path is given:
      1. ./merkledrop.json
      2. ./.merkledrop.json
      3. ~/.config/merkledrop/config.json

    Environment variables ALWAYS override config file values.
    """
    if config_path is not None:
        return RuntimeConfig.from_file(config_path).with_env_overrides()

    search_paths = [Path.cwd() / name for name in DEFAULT_CONFIG_FILENAMES]
    search_paths.append(USER_CONFIG_PATH)

    config: RuntimeConfig | None = None

    for path in search_paths:
        if path.exists():
            try:
                config = RuntimeConfig.from_file(path)
                logger.info(f"Loaded config from {path}")
                break
            except (OSError, ValueError, TypeError) as e:
                logger.warning(f"Failed to parse {path}: {e}")

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(RuntimeConfig().to_dict(), indent=2)


__all__ = [
    "StorageConfig",
    "ServerConfig",
    "RuntimeConfig",
    "load_runtime_config",
    "get_default_config_template",
]
