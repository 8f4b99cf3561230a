"""
MerkleDrop CLI

Command-line interface for the allocation tree engine.

Usage:
    python -m merkledrop_cli build allocations.csv --out merkle.json
    python -m merkledrop_cli proof 0xAddress
    python -m merkledrop_cli verify 0xAddress 1.5
    python -m merkledrop_cli export --out results.csv
"""

__version__ = "0.1.0"
