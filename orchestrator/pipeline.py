"""
Build Pipeline

Deterministic, in-process composition of the allocation engine:

    raw rows -> normalize -> leaf encode -> tree -> proofs -> Dataset

A build is one synchronous CPU-bound pass. It holds no shared state;
publication of the result is the job of orchestrator.store.DatasetStore.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Sequence

from core.allocations.dataset import assemble_dataset, now_ms
from core.allocations.leaf_encoder import encode_leaf
from core.allocations.normalizer import normalize_rows, parse_csv_rows
from core.merkle.merkle_tree import MerkleTree
from core.schemas.allocation import Dataset, RowResult
from core.schemas.errors import EmptyDatasetException


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildResult:
    """A built Dataset plus the rows dropped on the way."""
    dataset: Dataset
    diagnostics: tuple[RowResult, ...] = field(default_factory=tuple)

    @property
    def skipped(self) -> int:
        return len(self.diagnostics)

    def summary(self) -> dict:
        return {
            "root": self.dataset.root,
            "count": self.dataset.count,
            "totalAllocated": self.dataset.total_allocated,
            "skipped": self.skipped,
        }


def log_diagnostics(diagnostics: Sequence[RowResult]) -> None:
    """Report dropped rows at WARNING level."""
    for result in diagnostics:
        error = result.error
        message = error.message if error else "unknown error"
        logger.warning(f"Skipping invalid row {result.row_number}: {list(result.raw)} - {message}")


def build_dataset(
    rows: Iterable[Sequence[str]],
    *,
    clock: Callable[[], int] = now_ms,
) -> BuildResult:
    """
    Run the whole build over raw (address, amount) rows.

    Raises:
        EmptyDatasetException: If no row survives normalization
    """
    try:
        normalized = normalize_rows(rows)
    except EmptyDatasetException as e:
        log_diagnostics(e.diagnostics)
        logger.warning(f"Build rejected: {e.message} ({len(e.diagnostics)} invalid rows)")
        raise

    log_diagnostics(normalized.diagnostics)

    leaves = [encode_leaf(record) for record in normalized.records]
    tree = MerkleTree(leaves)
    dataset = assemble_dataset(normalized.records, tree, clock=clock)

    logger.info(
        f"Built dataset root={dataset.root} count={dataset.count} "
        f"total={dataset.total_allocated} skipped={normalized.skipped}"
    )

    return BuildResult(dataset=dataset, diagnostics=normalized.diagnostics)


def build_dataset_from_csv(
    content: bytes | str,
    *,
    clock: Callable[[], int] = now_ms,
) -> BuildResult:
    """Parse CSV content (address,amount with optional header) and build."""
    return build_dataset(parse_csv_rows(content), clock=clock)


__all__ = [
    "BuildResult",
    "build_dataset",
    "build_dataset_from_csv",
    "log_diagnostics",
]
