"""
Dataset Snapshot IO

Provides functionality for saving and loading merkle.json snapshots.
"""

from orchestrator.artifacts.io import (
    SnapshotIOError,
    dump_snapshot,
    save_snapshot,
    load_snapshot,
)

__all__ = [
    "SnapshotIOError",
    "dump_snapshot",
    "save_snapshot",
    "load_snapshot",
]
