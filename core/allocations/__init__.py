"""
Allocation Records, Leaves and Datasets

Pipeline pieces between raw CSV rows and the published Dataset:
- normalizer: raw (address, amount) strings -> AllocationRecord
- leaf_encoder: AllocationRecord -> double Keccak-256 leaf
- dataset: records + MerkleTree -> immutable Dataset
- export: Dataset -> CSV, plus the input template

Usage:
    from core.allocations import normalize_rows, encode_leaf, assemble_dataset
    from core.merkle import MerkleTree

    result = normalize_rows(rows)
    tree = MerkleTree([encode_leaf(r) for r in result.records])
    dataset = assemble_dataset(result.records, tree)
"""
from .normalizer import (
    ETHER_DECIMALS,
    NormalizationResult,
    is_header_row,
    normalize_address,
    normalize_record,
    normalize_row,
    normalize_rows,
    parse_amount,
    parse_csv_rows,
)

from .leaf_encoder import (
    encode_leaf,
    encode_leaf_preimage,
    hash_leaf,
)

from .dataset import (
    assemble_dataset,
    now_ms,
)

from .export import (
    EXPORT_HEADER,
    export_csv,
    template_csv,
)


__all__ = [
    # Normalizer
    "ETHER_DECIMALS",
    "NormalizationResult",
    "is_header_row",
    "normalize_address",
    "normalize_record",
    "normalize_row",
    "normalize_rows",
    "parse_amount",
    "parse_csv_rows",
    # Leaf encoder
    "encode_leaf",
    "encode_leaf_preimage",
    "hash_leaf",
    # Dataset
    "assemble_dataset",
    "now_ms",
    # Export
    "EXPORT_HEADER",
    "export_csv",
    "template_csv",
]
