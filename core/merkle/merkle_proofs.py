"""
Merkle Proofs Convenience Wrappers
Thin wrappers around core Merkle tree functions for cleaner API.

This module provides class-based interfaces:
- MerkleProver: Generate proofs for leaves or allocation records
- MerkleVerifier: Verify proofs, including raw (address, amount) claims

These are convenience wrappers around the functions in merkle_tree.py.
"""
from __future__ import annotations

from typing import Sequence

from core.allocations.leaf_encoder import encode_leaf, hash_leaf
from core.allocations.normalizer import normalize_record
from core.crypto.hashing import from_hex
from core.merkle.merkle_tree import (
    MerkleProof,
    MerkleTree,
    build_merkle_proof,
    build_merkle_root,
    verify_merkle_proof,
    verify_siblings,
)
from core.schemas.allocation import AllocationRecord


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Provides static methods for proof generation from:
    - Pre-hashed leaves (bytes)
    - Allocation records (will be leaf-encoded)

    Example:
        >>> proof = MerkleProver.prove(leaves, index=1)
        >>> proof.leaf == leaves[1]
        True
    """

    @staticmethod
    def prove(leaves: Sequence[bytes], index: int) -> MerkleProof:
        """
        Generate a Merkle proof for the leaf at the given index.

        Raises:
            IndexError: If index is out of range
            ValueError: If leaves is empty
        """
        return build_merkle_proof(leaves, index)

    @staticmethod
    def prove_record(records: Sequence[AllocationRecord], index: int) -> MerkleProof:
        """Generate a Merkle proof for the record at the given index."""
        leaves = [encode_leaf(record) for record in records]
        return build_merkle_proof(leaves, index)

    @staticmethod
    def compute_root(leaves: Sequence[bytes]) -> bytes:
        return build_merkle_root(leaves)

    @staticmethod
    def tree_from_records(records: Sequence[AllocationRecord]) -> MerkleTree:
        return MerkleTree([encode_leaf(record) for record in records])


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Example:
        >>> MerkleVerifier.verify(proof)
        True
        >>> MerkleVerifier.verify_allocation(address, "1.5", dataset_proof, root)
        True
    """

    @staticmethod
    def verify(proof: MerkleProof) -> bool:
        return verify_merkle_proof(proof)

    @staticmethod
    def verify_leaf_in_root(
        leaf: bytes,
        siblings: Sequence[bytes],
        root: bytes,
    ) -> bool:
        """Verify a leaf against a root using raw components."""
        return verify_siblings(leaf, siblings, root)

    @staticmethod
    def verify_hex(leaf_hex: str, proof_hex: Sequence[str], root_hex: str) -> bool:
        """
        Verify using 0x hex strings as served in merkle.json.

        Raises:
            ValueError: If any value is not valid 0x hex
        """
        return verify_siblings(
            from_hex(leaf_hex.lower()),
            [from_hex(s.lower()) for s in proof_hex],
            from_hex(root_hex.lower()),
        )

    @staticmethod
    def verify_allocation(
        address: str,
        amount: str | int,
        proof_hex: Sequence[str],
        root_hex: str,
    ) -> bool:
        """
        Verify an (address, amount) claim the way the contract would.

        ``amount`` may be an int in wei or a raw amount string, which is
        parsed with the same dual-mode rules as uploaded rows.

        Raises:
            InvalidAddressException / InvalidAmountException: On a malformed claim
        """
        if isinstance(amount, int):
            record = AllocationRecord(
                address=normalize_record(address, "0").address,
                amount_wei=amount,
            )
        else:
            record = normalize_record(address, amount)

        leaf = hash_leaf(record.address, record.amount_wei)
        return verify_siblings(
            leaf,
            [from_hex(s.lower()) for s in proof_hex],
            from_hex(root_hex.lower()),
        )


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
