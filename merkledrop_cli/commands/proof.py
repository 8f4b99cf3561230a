"""
CLI Proof and Export Commands

Read a merkle.json snapshot and print a proof or the CSV export.

Usage:
    merkledrop proof 0xAddress [--data merkle.json]
    merkledrop export [--data merkle.json] [--out results.csv]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path

from core.allocations.export import export_csv
from core.schemas.allocation import Dataset
from core.schemas.errors import DatasetFormatException, NotFoundException
from orchestrator.artifacts.io import SnapshotIOError, load_snapshot


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_NOT_FOUND = 2


def load_dataset_arg(args: Namespace) -> Dataset | None:
    """Load the snapshot named by --data (or the configured data file)."""
    data_path = Path(args.data or args.cli_config.storage.data_file)
    try:
        return load_snapshot(data_path)
    except (SnapshotIOError, DatasetFormatException) as e:
        print(f"Error loading dataset: {e}", file=sys.stderr)
        return None


def proof_cmd(args: Namespace) -> int:
    """Print {address, amount, proof, root} for an address."""
    dataset = load_dataset_arg(args)
    if dataset is None:
        return EXIT_RUNTIME_ERROR

    try:
        entry = dataset.lookup(args.address)
    except NotFoundException as e:
        print(f"Error: {e.message}: {args.address}", file=sys.stderr)
        return EXIT_NOT_FOUND

    print(json.dumps({
        "address": args.address,
        "amount": entry.amount,
        "proof": list(entry.proof),
        "root": dataset.root,
    }, indent=2))
    return EXIT_SUCCESS


def export_cmd(args: Namespace) -> int:
    """Write merkle_root,address,amount,proof CSV to --out or stdout."""
    dataset = load_dataset_arg(args)
    if dataset is None:
        return EXIT_RUNTIME_ERROR

    content = export_csv(dataset)
    if args.out:
        Path(args.out).write_text(content + "\n", encoding="utf-8")
        print(f"written: {args.out}")
    else:
        print(content)
    return EXIT_SUCCESS
