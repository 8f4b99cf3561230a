"""
Dataset Snapshot IO
File: io.py

Purpose: Save and load the published Dataset as merkle.json.

Writes go to a temporary file in the target directory and are moved into
place with os.replace, so a reader never sees a half-written file.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from core.schemas.allocation import Dataset
from core.schemas.errors import DatasetFormatException


class SnapshotIOError(Exception):
    """Error during snapshot IO operations."""
    pass


def dump_snapshot(dataset: Dataset) -> str:
    """Serialize a Dataset to pretty-printed merkle.json text."""
    return json.dumps(dataset.to_snapshot(), indent=2)


def save_snapshot(dataset: Dataset, path: str | Path) -> Path:
    """
    Atomically write a Dataset snapshot.

    Returns:
        Path to the written file
    """
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{out_path.name}.", suffix=".tmp", dir=out_path.parent
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(dump_snapshot(dataset))
        os.replace(tmp_name, out_path)
    except OSError as e:
        Path(tmp_name).unlink(missing_ok=True)
        raise SnapshotIOError(f"Failed to write snapshot {out_path}: {e}") from e

    return out_path


def load_snapshot(path: str | Path) -> Dataset:
    """
    Read a Dataset snapshot.

    Raises:
        SnapshotIOError: If the file cannot be read or is not JSON
        DatasetFormatException: If the JSON does not match the snapshot shape
    """
    in_path = Path(path)
    try:
        data = json.loads(in_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise SnapshotIOError(f"Snapshot not found: {in_path}") from e
    except (OSError, ValueError) as e:
        raise SnapshotIOError(f"Failed to read snapshot {in_path}: {e}") from e

    return Dataset.from_snapshot(data)


__all__ = [
    "SnapshotIOError",
    "DatasetFormatException",
    "dump_snapshot",
    "save_snapshot",
    "load_snapshot",
]
