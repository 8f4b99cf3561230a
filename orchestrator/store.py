"""
Dataset Store

Holds the currently published Dataset.

Concurrency model:
- Builds and publication are serialized by a single writer lock
- Publication swaps one reference; readers never take the lock and
  always see a complete Dataset (or none)
- A rejected build leaves both the in-memory and the persisted dataset
  untouched
"""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

from core.allocations.dataset import now_ms
from core.allocations.export import export_csv
from core.schemas.allocation import Dataset, ProofEntry
from core.schemas.errors import DatasetFormatException, NotFoundException

from orchestrator.artifacts.io import SnapshotIOError, load_snapshot, save_snapshot
from orchestrator.pipeline import BuildResult, build_dataset, build_dataset_from_csv


logger = logging.getLogger(__name__)

NO_DATASET_MESSAGE = "No merkle tree generated yet"


class DatasetStore:
    """
    Single-writer, many-reader holder of the published Dataset.

    Args:
        data_file: Snapshot path. When set, an existing snapshot is loaded
            on construction and every publication is persisted before it
            becomes visible.
        clock: Millisecond clock used for dataset timestamps
    """

    def __init__(
        self,
        data_file: str | Path | None = None,
        *,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._data_file = Path(data_file) if data_file is not None else None
        self._clock = clock
        self._write_lock = threading.Lock()
        self._current: Optional[Dataset] = None

        if self._data_file is not None and self._data_file.exists():
            self._current = self._load_existing(self._data_file)

    @staticmethod
    def _load_existing(path: Path) -> Optional[Dataset]:
        try:
            dataset = load_snapshot(path)
        except (SnapshotIOError, DatasetFormatException) as e:
            logger.warning(f"Ignoring unreadable snapshot {path}: {e}")
            return None
        logger.info(f"Loaded dataset root={dataset.root} count={dataset.count} from {path}")
        return dataset

    @property
    def data_file(self) -> Optional[Path]:
        return self._data_file

    # -------------------------------------------------------------------------
    # Writers
    # -------------------------------------------------------------------------

    def publish(self, dataset: Dataset) -> None:
        """Persist (if configured) and swap in a new Dataset."""
        with self._write_lock:
            self._publish_locked(dataset)

    def _publish_locked(self, dataset: Dataset) -> None:
        if self._data_file is not None:
            save_snapshot(dataset, self._data_file)
        self._current = dataset
        logger.info(f"Published dataset root={dataset.root}")

    def build_and_publish(self, rows: Iterable[Sequence[str]]) -> BuildResult:
        """
        Build a Dataset from raw rows and publish it.

        Raises:
            EmptyDatasetException: Nothing is published
        """
        with self._write_lock:
            result = build_dataset(rows, clock=self._clock)
            self._publish_locked(result.dataset)
        return result

    def build_and_publish_csv(self, content: bytes | str) -> BuildResult:
        """
        Parse CSV content, then build and publish.

        Raises:
            EmptyDatasetException, DatasetFormatException: Nothing is published
        """
        with self._write_lock:
            result = build_dataset_from_csv(content, clock=self._clock)
            self._publish_locked(result.dataset)
        return result

    # -------------------------------------------------------------------------
    # Readers
    # -------------------------------------------------------------------------

    def current(self) -> Dataset:
        """
        The published Dataset.

        Raises:
            NotFoundException: If nothing has been published
        """
        dataset = self._current
        if dataset is None:
            raise NotFoundException(NO_DATASET_MESSAGE)
        return dataset

    def has_dataset(self) -> bool:
        return self._current is not None

    def root_info(self) -> dict:
        return self.current().summary()

    def proof_for(self, address: str) -> tuple[ProofEntry, str]:
        """
        Look up the proof for an address (case-insensitive).

        Returns:
            (entry, root) taken from the same snapshot
        """
        dataset = self.current()
        return dataset.lookup(address), dataset.root

    def export_csv(self) -> str:
        return export_csv(self.current())


__all__ = [
    "DatasetStore",
    "NO_DATASET_MESSAGE",
]
