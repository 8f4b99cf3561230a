"""
CLI Build Command

Build a Merkle tree from an address,amount CSV and write merkle.json.

Usage:
    merkledrop build allocations.csv [--out merkle.json] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from core.schemas.errors import DatasetFormatException, EmptyDatasetException
from orchestrator.artifacts.io import save_snapshot
from orchestrator.pipeline import BuildResult, build_dataset_from_csv


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def print_summary_human(result: BuildResult, out_path: Path) -> None:
    """Print build summary in human-readable format."""
    dataset = result.dataset
    print(f"root: {dataset.root}")
    print(f"count: {dataset.count}")
    print(f"total_allocated: {dataset.total_allocated}")
    print(f"written: {out_path}")

    if result.diagnostics:
        print(f"\nskipped ({result.skipped}):")
        for row in result.diagnostics[:10]:
            message = row.error.message if row.error else ""
            print(f"  ✗ row {row.row_number}: {message}")


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Returns:
        Exit code
    """
    csv_path = Path(args.csv_path)
    out_path = Path(args.out or args.cli_config.storage.data_file)

    if not csv_path.exists():
        print(f"Error: CSV not found: {csv_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        result = build_dataset_from_csv(csv_path.read_bytes())
    except (EmptyDatasetException, DatasetFormatException) as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    save_snapshot(result.dataset, out_path)
    logger.info(f"Wrote snapshot to {out_path}")

    if args.json:
        summary = result.summary()
        summary["out"] = str(out_path)
        print(json.dumps(summary, indent=2))
    else:
        print_summary_human(result, out_path)

    return EXIT_SUCCESS
