"""
Record Normalizer

Turns raw (address, amount) strings into canonical AllocationRecords.

Address rules:
- Surrounding whitespace is trimmed
- 40 hex digits, lowercase 0x prefix optional
- Mixed-case input must carry a valid EIP-55 checksum
- Output is always the EIP-55 checksum form

Amount rules (two input styles, kept exactly as-is):
- "<digits>.<digits>" is an ether quantity and is scaled by 10**18.
  Digits past the 18th fractional place must all be zero.
- "<digits>" is already in base units and is not scaled.

So "100" is 100 wei while "100.0" is 100 * 10**18 wei. Upstream systems
that want a single convention must enforce it before rows reach this
module.
"""
from __future__ import annotations

import csv
import io
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Sequence

from eth_utils import is_checksum_formatted_address, is_hex_address, to_checksum_address, to_wei

from core.schemas.allocation import MAX_UINT256, AllocationRecord, RowResult
from core.schemas.errors import (
    DatasetFormatException,
    EmptyDatasetException,
    InvalidAddressException,
    InvalidAmountException,
    MerkleDropException,
)


ETHER_DECIMALS = 18

_AMOUNT_PATTERN = re.compile(r"[0-9]+(\.[0-9]+)?")


def normalize_address(raw: str) -> str:
    """
    Validate a raw address string and return its EIP-55 checksum form.

    Raises:
        InvalidAddressException: If the value is not a 20-byte hex address
            or carries a wrong mixed-case checksum
    """
    candidate = str(raw).strip()

    # Only a lowercase 0x prefix (or none) is an address
    if candidate.startswith("0X") or not is_hex_address(candidate):
        raise InvalidAddressException(f"Invalid address: {candidate}", address=candidate)

    checksummed = to_checksum_address(candidate)
    body = candidate[2:] if candidate.startswith("0x") else candidate

    if is_checksum_formatted_address(candidate) and body != checksummed[2:]:
        raise InvalidAddressException(
            f"Bad address checksum: {candidate}",
            address=candidate,
        )

    return checksummed


def parse_amount(raw: str) -> int:
    """
    Convert a raw amount string to an integer wei value.

    Raises:
        InvalidAmountException: On malformed input, a non-zero digit past
            the 18th fractional place, or a value that does not fit in uint256
    """
    text = str(raw).strip()

    if not _AMOUNT_PATTERN.fullmatch(text):
        raise InvalidAmountException(f"Invalid amount: {text}", amount=text)

    try:
        if "." in text:
            whole, fraction = text.split(".", 1)
            # Zeros past the 18th digit carry no value
            if fraction[ETHER_DECIMALS:].strip("0"):
                raise InvalidAmountException(
                    f"Too many decimals: {text} (max {ETHER_DECIMALS})",
                    amount=text,
                )
            value = to_wei(Decimal(f"{whole}.{fraction[:ETHER_DECIMALS]}"), "ether")
        else:
            value = int(text)
    except ValueError as e:
        raise InvalidAmountException(f"Invalid amount: {text} ({e})", amount=text) from e

    if value > MAX_UINT256:
        raise InvalidAmountException(f"Amount exceeds uint256: {text}", amount=text)

    return value


def normalize_record(address: str, amount: str) -> AllocationRecord:
    """Normalize one (address, amount) pair. Raises on invalid input."""
    return AllocationRecord(
        address=normalize_address(address),
        amount_wei=parse_amount(amount),
    )


def is_header_row(row: Sequence[str]) -> bool:
    return len(row) > 0 and row[0].strip().lower() == "address"


def normalize_row(row: Sequence[str], row_number: int) -> RowResult:
    """
    Normalize one input row into a tagged RowResult.

    Never raises for invalid content; the failure is carried in
    ``RowResult.error``.
    """
    raw = tuple(str(cell) for cell in row)
    try:
        record = normalize_record(raw[0], raw[1])
    except MerkleDropException as e:
        return RowResult(row_number=row_number, raw=raw, error=e.to_error_model())
    return RowResult(row_number=row_number, raw=raw, record=record)


@dataclass(frozen=True)
class NormalizationResult:
    """Valid records in input order plus the rows that were dropped."""
    records: tuple[AllocationRecord, ...] = ()
    diagnostics: tuple[RowResult, ...] = ()
    header_skipped: bool = False
    short_rows: int = 0

    @property
    def skipped(self) -> int:
        return len(self.diagnostics)


def normalize_rows(rows: Iterable[Sequence[str]]) -> NormalizationResult:
    """
    Normalize a batch of rows.

    - A header row (first column "address", any case) is skipped when it
      is the first non-empty row
    - Empty rows and rows with fewer than two columns are ignored
    - Invalid rows are collected as diagnostics, never raised

    Raises:
        EmptyDatasetException: If no valid records remain
    """
    records: list[AllocationRecord] = []
    diagnostics: list[RowResult] = []
    header_skipped = False
    short_rows = 0
    first = True

    for row_number, row in enumerate(rows, start=1):
        if not row or all(not str(cell).strip() for cell in row):
            continue

        if first:
            first = False
            if is_header_row(row):
                header_skipped = True
                continue

        if len(row) < 2:
            short_rows += 1
            continue

        result = normalize_row(row, row_number)
        if result.record is not None:
            records.append(result.record)
        else:
            diagnostics.append(result)

    if not records:
        raise EmptyDatasetException(
            skipped=len(diagnostics),
            diagnostics=tuple(diagnostics),
        )

    return NormalizationResult(
        records=tuple(records),
        diagnostics=tuple(diagnostics),
        header_skipped=header_skipped,
        short_rows=short_rows,
    )


def parse_csv_rows(content: bytes | str) -> list[list[str]]:
    """
    Split CSV content into trimmed rows.

    Accepts bytes (UTF-8, optional BOM) or text. Undecodable bytes become
    U+FFFD, so the affected row fails validation on its own. Blank lines
    are kept as empty rows so that list position + 1 is the file line.

    Raises:
        DatasetFormatException: If the CSV itself cannot be parsed
    """
    if isinstance(content, bytes):
        text = content.decode("utf-8-sig", errors="replace")
    else:
        text = content.lstrip("\ufeff")

    try:
        return [[cell.strip() for cell in row] for row in csv.reader(io.StringIO(text))]
    except csv.Error as e:
        raise DatasetFormatException(f"Malformed CSV: {e}") from e


__all__ = [
    "ETHER_DECIMALS",
    "NormalizationResult",
    "normalize_address",
    "parse_amount",
    "normalize_record",
    "is_header_row",
    "normalize_row",
    "normalize_rows",
    "parse_csv_rows",
]
