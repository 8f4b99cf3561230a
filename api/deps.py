"""
API Dependencies

Dependency injection for the API.
Provides the runtime config and the process-wide DatasetStore.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from core.config.runtime import RuntimeConfig, load_runtime_config
from orchestrator.store import DatasetStore

logger = logging.getLogger(__name__)


_config: Optional[RuntimeConfig] = None
_store: Optional[DatasetStore] = None
_init_lock = threading.Lock()


def get_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig once (file, then environment overrides)."""
    global _config
    if _config is None:
        _config = load_runtime_config()
    return _config


def get_store() -> DatasetStore:
    """
    Get the process-wide DatasetStore.

    Created on first use; loads the persisted snapshot when
    storage.persist is enabled.
    """
    global _store
    if _store is None:
        with _init_lock:
            if _store is None:
                config = get_runtime_config()
                data_file = config.storage.data_file if config.storage.persist else None
                logger.info(f"Initializing dataset store (data_file={data_file})")
                _store = DatasetStore(data_file)
    return _store
