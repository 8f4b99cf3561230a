"""
CSV Rendering

Results export and the input template served to users.

Export shape:
    merkle_root,address,amount,proof
    0xroot,0xAddr,1000000000000000000,"0xp1|0xp2"
"""
from __future__ import annotations

from core.schemas.allocation import Dataset


EXPORT_HEADER = "merkle_root,address,amount,proof"
PROOF_SEPARATOR = "|"

TEMPLATE_ROWS = [
    "address,amount",
    "0xAb5801a7D398351b8bE11C439e05C5B3259aeC7B,1000.0",
    "0x4B0897b0513fdC7C541B6d9D7E929C4e5364D2dB,500.5",
    "0x583031D1113aD414F02576BD6afaBfb302140225,250.25",
    "0xdD870fA1b7C4700F2BD7f44238821C26f739700 ,750.0",
    "0x14723A09ACff6D2A60DcdF7aA4AFf308FDDC160C,100.0",
]


def export_csv(dataset: Dataset) -> str:
    """Render every entry as one CSV line, proof pipe-joined and quoted."""
    lines = [EXPORT_HEADER]
    for entry in dataset.entries:
        proof = PROOF_SEPARATOR.join(entry.proof)
        lines.append(",".join([dataset.root, entry.address, entry.amount, f'"{proof}"']))
    return "\n".join(lines)


def template_csv() -> str:
    return "\n".join(TEMPLATE_ROWS)


__all__ = [
    "EXPORT_HEADER",
    "PROOF_SEPARATOR",
    "TEMPLATE_ROWS",
    "export_csv",
    "template_csv",
]
