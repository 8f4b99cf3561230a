"""
Merkle Tree and Commitments
Sorted-pair Merkle tree construction + proof generation/verification.

This module provides:
- MerkleTree: Built tree retaining every level
- MerkleProof: Dataclass representing a Merkle inclusion proof
- build_merkle_root: Compute root from leaf hashes
- build_merkle_proof: Generate proof for a specific leaf
- verify_merkle_proof: Verify a proof against its claimed root

Canonical Commitment Rules:
1. Leaf hashing: keccak256(keccak256(abi.encode(address, uint256)))
2. Parent hashing: keccak256(min(a, b) + max(a, b))
3. Odd node: carried forward unchanged to the next level
4. Empty tree: no root (ValueError)
5. Single leaf: root = leaf

Usage:
    from core.merkle import MerkleTree, verify_merkle_proof
    from core.allocations import encode_leaf

    leaves = [encode_leaf(record) for record in records]
    tree = MerkleTree(leaves)

    proof = tree.proof(2)
    assert verify_merkle_proof(proof)
"""
from .merkle_tree import (
    MerkleProof,
    MerkleTree,
    merkle_parent,
    build_merkle_levels,
    build_merkle_root,
    build_merkle_proof,
    verify_siblings,
    verify_merkle_proof,
    compute_tree_depth,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleProof",
    "MerkleTree",
    # Core functions
    "merkle_parent",
    "build_merkle_levels",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_siblings",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
