"""
Common test fixtures shared by all modules.

Provides factory functions for allocation data:
- Checksummed address vectors (EIP-55 reference addresses)
- AllocationRecord
- Raw CSV rows and CSV text
"""

from typing import Optional, Sequence

from core.schemas.allocation import AllocationRecord


# EIP-55 reference vectors, all correctly checksummed
ADDRESSES = [
    "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
    "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359",
    "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB",
    "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb",
]

FIXED_TIMESTAMP = 1_700_000_000_000


def fixed_clock() -> int:
    """Deterministic millisecond clock for dataset timestamps."""
    return FIXED_TIMESTAMP


def make_record(
    address: str = ADDRESSES[0],
    amount_wei: int = 10**18,
) -> AllocationRecord:
    return AllocationRecord(address=address, amount_wei=amount_wei)


def make_records(amounts: Optional[Sequence[int]] = None) -> list[AllocationRecord]:
    """One record per reference address, 1..N ether unless amounts given."""
    if amounts is None:
        amounts = [(i + 1) * 10**18 for i in range(len(ADDRESSES))]
    return [
        make_record(ADDRESSES[i % len(ADDRESSES)], amount)
        for i, amount in enumerate(amounts)
    ]


def make_rows(
    amounts: Sequence[str] = ("1.0", "2.0", "3.0"),
    header: bool = True,
) -> list[list[str]]:
    """Raw rows pairing reference addresses with amount strings."""
    rows = [["address", "amount"]] if header else []
    for i, amount in enumerate(amounts):
        rows.append([ADDRESSES[i % len(ADDRESSES)], amount])
    return rows


def make_csv(
    amounts: Sequence[str] = ("1.0", "2.0", "3.0"),
    header: bool = True,
) -> str:
    return "\n".join(",".join(row) for row in make_rows(amounts, header=header)) + "\n"
