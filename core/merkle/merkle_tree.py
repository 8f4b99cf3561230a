"""
Merkle Tree Implementation
Deterministic sorted-pair Merkle tree construction, proof generation,
and verification.

This module provides:
- Level-by-level tree construction retaining every level
- Merkle proof generation for any leaf index
- Merkle proof verification without left/right position
- Carry-forward rule for an odd number of nodes

Canonical Commitment Rules (Hard Contracts, must match the on-chain verifier):
1. Leaves are supplied pre-hashed (see core.allocations.leaf_encoder)
2. Parent hashing: parent = keccak256(min(a, b) + max(a, b))
3. Odd rule: the last unpaired node moves up unchanged. It is never
   duplicated and never hashed with itself.
4. Empty leaves: no root exists, build raises ValueError
5. Single leaf: root = leaf, proof = []

Determinism Notes:
- Pairing is positional (array order at each level)
- Combination is content-ordered (sorted pair)
- This module never sorts leaves - it trusts input order
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.crypto.hashing import hash_sorted_pair, to_hex


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle proof for a single leaf in a Merkle tree.

    Attributes:
        leaf: The leaf hash being proven (32 bytes)
        index: The 0-based index of the leaf in the input leaf list
        siblings: Sibling hashes from bottom to top of tree
        root: The Merkle root this proof is against
    """
    leaf: bytes
    index: int
    siblings: list[bytes]
    root: bytes

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")

    def hex_siblings(self) -> list[str]:
        """Siblings rendered as lowercase 0x hex strings."""
        return [to_hex(s) for s in self.siblings]


def merkle_parent(left: bytes, right: bytes) -> bytes:
    """
    Compute the parent hash of two child nodes.

    Argument order does not matter: merkle_parent(a, b) == merkle_parent(b, a).
    """
    return hash_sorted_pair(left, right)


def build_merkle_levels(leaves: Sequence[bytes]) -> list[list[bytes]]:
    """
    Build every level of the tree, leaves first, root level last.

    Algorithm:
    1. Walk the current level in consecutive pairs
    2. Each pair becomes merkle_parent(a, b)
    3. An unpaired last node is appended to the next level unchanged
    4. Repeat until a single node remains

    Example: [a, b, c] -> [[a, b, c], [ab, c], [abc]]

    Raises:
        ValueError: If leaves is empty
    """
    if len(leaves) == 0:
        raise ValueError("Cannot build Merkle tree from empty leaf list")

    levels: list[list[bytes]] = [list(leaves)]
    current_level = levels[0]

    while len(current_level) > 1:
        next_level: list[bytes] = []
        for i in range(0, len(current_level) - 1, 2):
            next_level.append(merkle_parent(current_level[i], current_level[i + 1]))

        # Carry the odd node forward
        if len(current_level) % 2 == 1:
            next_level.append(current_level[-1])

        levels.append(next_level)
        current_level = next_level

    return levels


def _collect_siblings(levels: Sequence[Sequence[bytes]], index: int) -> list[bytes]:
    siblings: list[bytes] = []
    current_index = index

    for level in levels[:-1]:
        sibling_index = current_index ^ 1
        # No sibling means this node was carried forward at this level
        if sibling_index < len(level):
            siblings.append(level[sibling_index])
        current_index //= 2

    return siblings


class MerkleTree:
    """
    A built sorted-pair Merkle tree.

    Retains all levels so proofs for any leaf are derived without
    rebuilding the tree.

    Example:
        >>> tree = MerkleTree(leaves)
        >>> proof = tree.proof(2)
        >>> verify_merkle_proof(proof)
        True
    """

    def __init__(self, leaves: Sequence[bytes]) -> None:
        self._levels = build_merkle_levels(leaves)

    @property
    def levels(self) -> list[list[bytes]]:
        return [list(level) for level in self._levels]

    @property
    def leaves(self) -> list[bytes]:
        return list(self._levels[0])

    @property
    def root(self) -> bytes:
        return self._levels[-1][0]

    @property
    def hex_root(self) -> str:
        return to_hex(self.root)

    def __len__(self) -> int:
        return len(self._levels[0])

    def siblings(self, index: int) -> list[bytes]:
        """Ordered sibling hashes from the leaf at ``index`` up to the root."""
        if index < 0 or index >= len(self):
            raise IndexError(
                f"Leaf index {index} out of range for {len(self)} leaves"
            )
        return _collect_siblings(self._levels, index)

    def hex_proof(self, index: int) -> list[str]:
        return [to_hex(s) for s in self.siblings(index)]

    def proof(self, index: int) -> MerkleProof:
        siblings = self.siblings(index)
        return MerkleProof(
            leaf=self._levels[0][index],
            index=index,
            siblings=siblings,
            root=self.root,
        )


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """
    Build a Merkle root from a sequence of leaf hashes.

    Args:
        leaves: Sequence of leaf hashes (32 bytes each). Order matters.

    Returns:
        32-byte Merkle root

    Raises:
        ValueError: If leaves is empty
    """
    return build_merkle_levels(leaves)[-1][0]


def build_merkle_proof(leaves: Sequence[bytes], index: int) -> MerkleProof:
    """
    Generate a Merkle proof for the leaf at the given index.

    At each level the sibling is the node at ``index ^ 1``. When that
    position does not exist the node was carried forward and nothing
    is recorded for the level.

    Raises:
        IndexError: If index is out of range
        ValueError: If leaves is empty
    """
    if len(leaves) == 0:
        raise ValueError("Cannot generate proof for empty leaf list")

    if index < 0 or index >= len(leaves):
        raise IndexError(
            f"Leaf index {index} out of range for {len(leaves)} leaves"
        )

    return MerkleTree(leaves).proof(index)


def verify_siblings(leaf: bytes, siblings: Sequence[bytes], root: bytes) -> bool:
    """
    Recompute the root from a leaf and its ordered siblings.

    acc = leaf; for s in siblings: acc = merkle_parent(acc, s); accept iff acc == root
    """
    current_hash = leaf
    for sibling in siblings:
        current_hash = merkle_parent(current_hash, sibling)
    return current_hash == root


def verify_merkle_proof(proof: MerkleProof) -> bool:
    """
    Verify a Merkle proof against its claimed root.

    The leaf index is not consulted: sorted-pair hashing makes
    verification independent of left/right position.
    """
    return verify_siblings(proof.leaf, proof.siblings, proof.root)


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of a Merkle tree with given number of leaves.

    Depth is the number of levels from leaves to root (inclusive).
    A single leaf has depth 1, two leaves depth 2, three or four leaves depth 3.

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


__all__ = [
    "MerkleProof",
    "MerkleTree",
    "merkle_parent",
    "build_merkle_levels",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_siblings",
    "verify_merkle_proof",
    "compute_tree_depth",
]
