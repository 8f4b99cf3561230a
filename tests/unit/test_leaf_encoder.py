"""
Leaf Encoder Unit Tests
Tests for core/allocations/leaf_encoder.py

The preimage is rebuilt by hand (12 zero bytes, 20 address bytes,
32-byte big-endian amount) and compared with the eth_abi output. A
published two-leaf vector pins the root end to end.
"""
import pytest

from core.allocations.leaf_encoder import (
    encode_leaf,
    encode_leaf_preimage,
    hash_leaf,
)
from core.crypto.hashing import from_hex, keccak256
from core.merkle.merkle_tree import MerkleTree, verify_siblings
from core.schemas.allocation import MAX_UINT256
from orchestrator.pipeline import build_dataset_from_csv

from fixtures.common import ADDRESSES, fixed_clock, make_record


def manual_preimage(address: str, amount_wei: int) -> bytes:
    return bytes(12) + bytes.fromhex(address[2:]) + amount_wei.to_bytes(32, "big")


class TestPreimage:

    def test_length(self):
        assert len(encode_leaf_preimage(ADDRESSES[0], 1)) == 64

    @pytest.mark.parametrize("amount", [0, 1, 10**18, MAX_UINT256])
    def test_matches_manual_layout(self, amount):
        assert encode_leaf_preimage(ADDRESSES[1], amount) == manual_preimage(ADDRESSES[1], amount)


class TestLeafHash:

    def test_double_keccak(self):
        address, amount = ADDRESSES[0], 10**18
        expected = keccak256(keccak256(manual_preimage(address, amount)))

        assert hash_leaf(address, amount) == expected

    def test_not_single_keccak(self):
        address, amount = ADDRESSES[0], 10**18
        assert hash_leaf(address, amount) != keccak256(manual_preimage(address, amount))

    def test_encode_record(self):
        record = make_record(ADDRESSES[2], 42)
        assert encode_leaf(record) == hash_leaf(ADDRESSES[2], 42)

    def test_amount_changes_leaf(self):
        assert hash_leaf(ADDRESSES[0], 1) != hash_leaf(ADDRESSES[0], 2)

    def test_address_changes_leaf(self):
        assert hash_leaf(ADDRESSES[0], 1) != hash_leaf(ADDRESSES[1], 1)

    def test_address_case_does_not_matter(self):
        """The encoded address is the 20 raw bytes, whatever the text case."""
        assert hash_leaf(ADDRESSES[0], 7) == hash_leaf(ADDRESSES[0].lower(), 7)


class TestKnownVector:
    """
    Two-leaf tree from the OpenZeppelin StandardMerkleTree README, which
    uses the same leaf encoding and sorted-pair parents. With two leaves
    the sorted pair makes leaf order irrelevant.
    """

    VALUES = [
        ("0x1111111111111111111111111111111111111111", 5_000_000_000_000_000_000),
        ("0x2222222222222222222222222222222222222222", 2_500_000_000_000_000_000),
    ]
    ROOT = "0xd4dee0beab2d53f2cc83e567171bd2820e49898130a22622b10ead383e90bd77"

    def test_root(self):
        tree = MerkleTree([hash_leaf(a, amount) for a, amount in self.VALUES])

        assert tree.hex_root == self.ROOT

    def test_root_independent_of_order(self):
        tree = MerkleTree([hash_leaf(a, amount) for a, amount in reversed(self.VALUES)])

        assert tree.hex_root == self.ROOT

    def test_proof_is_other_leaf(self):
        leaves = [hash_leaf(a, amount) for a, amount in self.VALUES]
        tree = MerkleTree(leaves)

        assert tree.siblings(0) == [leaves[1]]
        assert verify_siblings(leaves[0], tree.siblings(0), from_hex(self.ROOT))

    def test_csv_build_matches(self):
        """Ether amounts 5.0 and 2.5 produce the same published root."""
        content = "address,amount\n" + "".join(
            f"{a},{amount}\n" for (a, _), amount in zip(self.VALUES, ("5.0", "2.5"))
        )

        result = build_dataset_from_csv(content, clock=fixed_clock)

        assert result.dataset.root == self.ROOT
