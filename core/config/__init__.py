"""
Runtime Configuration Module

Provides configuration loading and management for the service and CLI.
"""

from .runtime import (
    RuntimeConfig,
    ServerConfig,
    StorageConfig,
    get_default_config_template,
    load_runtime_config,
)

__all__ = [
    "RuntimeConfig",
    "ServerConfig",
    "StorageConfig",
    "get_default_config_template",
    "load_runtime_config",
]
