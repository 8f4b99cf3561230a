"""
Core cryptographic utilities.

Keccak-256 hashing and hex helpers shared by the leaf encoder
and the Merkle tree builder.
"""
from .hashing import (
    keccak256,
    hash_bytes,
    hash_sorted_pair,
    to_hex,
    from_hex,
)

__all__ = [
    "keccak256",
    "hash_bytes",
    "hash_sorted_pair",
    "to_hex",
    "from_hex",
]
