"""
Build Orchestration

Composes the allocation engine into a build and holds the published result.

Public API:
- build_dataset: Rows -> BuildResult (Dataset + dropped-row diagnostics)
- build_dataset_from_csv: CSV content -> BuildResult
- BuildResult: Result of one build
- DatasetStore: Single-writer holder of the published Dataset
"""

from orchestrator.pipeline import (
    BuildResult,
    build_dataset,
    build_dataset_from_csv,
    log_diagnostics,
)
from orchestrator.store import (
    NO_DATASET_MESSAGE,
    DatasetStore,
)

__all__ = [
    "BuildResult",
    "build_dataset",
    "build_dataset_from_csv",
    "log_diagnostics",
    "NO_DATASET_MESSAGE",
    "DatasetStore",
]
