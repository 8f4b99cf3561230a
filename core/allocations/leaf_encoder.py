"""
Leaf Encoder

Maps a canonical AllocationRecord to its 32-byte tree leaf.

Encoding (bit-exact, must match the verifier contract):

    preimage = abi.encode(address, uint256)
             = 12 zero bytes + 20 address bytes + 32-byte big-endian amount
    leaf     = keccak256(keccak256(preimage))

The second hash keeps leaf preimages (64 bytes of ABI data) apart from
internal-node preimages (64 bytes of two child hashes).
"""
from __future__ import annotations

from eth_abi import encode

from core.crypto.hashing import keccak256
from core.schemas.allocation import AllocationRecord


LEAF_ABI_TYPES = ["address", "uint256"]


def encode_leaf_preimage(address: str, amount_wei: int) -> bytes:
    """ABI-encode ``(address, uint256)`` into its 64-byte tuple encoding."""
    return encode(LEAF_ABI_TYPES, [address, amount_wei])


def hash_leaf(address: str, amount_wei: int) -> bytes:
    """Double Keccak-256 of the ABI-encoded pair."""
    return keccak256(keccak256(encode_leaf_preimage(address, amount_wei)))


def encode_leaf(record: AllocationRecord) -> bytes:
    return hash_leaf(record.address, record.amount_wei)


__all__ = [
    "LEAF_ABI_TYPES",
    "encode_leaf_preimage",
    "hash_leaf",
    "encode_leaf",
]
