"""
Dataset Assembler

Combines the tree root, per-record proofs, totals and metadata into one
immutable Dataset. Performs no hashing of its own.
"""
from __future__ import annotations

import time
from typing import Callable, Sequence

from core.merkle.merkle_tree import MerkleTree
from core.schemas.allocation import AllocationRecord, Dataset, DatasetEntry, ProofEntry
from core.schemas.errors import EmptyDatasetException


def now_ms() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def assemble_dataset(
    records: Sequence[AllocationRecord],
    tree: MerkleTree,
    *,
    clock: Callable[[], int] = now_ms,
) -> Dataset:
    """
    Build the Dataset for records whose leaves (same order) built ``tree``.

    Entries keep input order. The lowercase-address index keeps the last
    occurrence of a repeated address, while ``totalAllocated`` counts every
    occurrence.

    Raises:
        EmptyDatasetException: If records is empty
        ValueError: If the tree was not built from the same number of leaves
    """
    if not records:
        raise EmptyDatasetException()

    if len(tree) != len(records):
        raise ValueError(
            f"Tree has {len(tree)} leaves but {len(records)} records were given"
        )

    entries: list[DatasetEntry] = []
    proofs: dict[str, ProofEntry] = {}
    total = 0

    for index, record in enumerate(records):
        proof = tuple(tree.hex_proof(index))
        amount = str(record.amount_wei)

        entries.append(DatasetEntry(address=record.address, amount=amount, proof=proof))
        proofs[record.address.lower()] = ProofEntry(amount=amount, proof=proof)
        total += record.amount_wei

    return Dataset(
        root=tree.hex_root,
        total_allocated=str(total),
        count=len(records),
        timestamp=clock(),
        entries=tuple(entries),
        proofs=proofs,
    )
