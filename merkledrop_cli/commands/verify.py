"""
CLI Verify Command

Check an (address, amount) claim against a merkle.json snapshot the way
the distributor contract does: rebuild the leaf, fold in the proof with
sorted-pair hashing, compare with the root.

Usage:
    merkledrop verify 0xAddress 1.5 [--data merkle.json] [--proof 0x..|0x..] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field

from core.merkle.merkle_proofs import MerkleVerifier
from core.schemas.errors import ErrorCodes, MerkleDropException, NotFoundException
from merkledrop_cli.commands.proof import load_dataset_arg


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of claim verification for CLI output."""
    address: str = ""
    amount: str = ""
    root: str = ""
    proof: list[str] = field(default_factory=list)
    ok: bool = False
    error: str | None = None

    def to_dict(self) -> dict:
        d = asdict(self)
        if d["error"] is None:
            del d["error"]
        return d


def print_summary_human(summary: VerifySummary) -> None:
    print(f"address: {summary.address}")
    print(f"amount: {summary.amount}")
    print(f"root: {summary.root}")
    print(f"proof_length: {len(summary.proof)}")
    print(f"valid: {str(summary.ok).lower()}")
    if summary.error:
        print(f"  ✗ {summary.error}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    The proof is taken from --proof when given (pipe-separated hex),
    otherwise from the snapshot's index for the address.
    """
    dataset = load_dataset_arg(args)
    if dataset is None:
        return EXIT_RUNTIME_ERROR

    summary = VerifySummary(address=args.address, amount=args.amount, root=dataset.root)

    if args.proof is not None:
        summary.proof = [p for p in args.proof.split("|") if p]
    else:
        try:
            summary.proof = list(dataset.lookup(args.address).proof)
        except NotFoundException as e:
            summary.error = e.message

    if summary.error is None:
        try:
            summary.ok = MerkleVerifier.verify_allocation(
                args.address, args.amount, summary.proof, dataset.root
            )
        except MerkleDropException as e:
            summary.error = e.message
        except ValueError as e:
            summary.error = f"Malformed proof: {e}"

    if not summary.ok and summary.error is None:
        summary.error = f"{ErrorCodes.MERKLE_PROOF_INVALID}: proof does not reproduce root"

    logger.debug(f"Verification result for {args.address}: {summary.ok}")

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS if summary.ok else EXIT_VERIFICATION_FAILED
