"""
Hashing Utilities
Keccak-256 hashing and hex helpers for Merkle commitments.

This module provides:
- Keccak-256 hashing for raw bytes (the EVM hash, not NIST SHA3-256)
- Sorted-pair hashing used for internal tree nodes
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as specified
- Pair ordering compares 32-byte values as unsigned big-endian integers,
  which is plain byte-lexicographic comparison of equal-length bytes
- All operations are deterministic
"""
from __future__ import annotations

from eth_utils import keccak


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=data)


def hash_bytes(data: bytes) -> bytes:
    """Alias for keccak256()."""
    return keccak256(data)


def hash_sorted_pair(a: bytes, b: bytes) -> bytes:
    """
    Hash two node values after ordering them by byte value.

    Rule: parent = keccak256(min(a, b) + max(a, b))

    Because the pair is sorted before concatenation, a verifier never
    needs to know which side a sibling was on.

    Args:
        a: First child hash (32 bytes)
        b: Second child hash (32 bytes)

    Returns:
        32-byte parent hash
    """
    if b < a:
        a, b = b, a
    return keccak256(a + b)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to lowercase hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "keccak256",
    "hash_bytes",
    "hash_sorted_pair",
    "to_hex",
    "from_hex",
]
