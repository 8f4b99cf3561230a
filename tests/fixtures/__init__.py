"""
Test fixtures package for MerkleDrop tests.

This package provides factory functions for creating test objects:
- common.py: address vectors, records, rows and CSV payloads

Usage:
    from tests.fixtures import make_record, make_csv

    def test_something():
        record = make_record(amount_wei=10**18)
"""

from .common import (
    ADDRESSES,
    FIXED_TIMESTAMP,
    fixed_clock,
    make_record,
    make_records,
    make_rows,
    make_csv,
)

__all__ = [
    "ADDRESSES",
    "FIXED_TIMESTAMP",
    "fixed_clock",
    "make_record",
    "make_records",
    "make_rows",
    "make_csv",
]
