"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merkledrop_cli build <csv> [--out merkle.json] [--json]
    python -m merkledrop_cli proof <address> [--data merkle.json]
    python -m merkledrop_cli verify <address> <amount> [--data merkle.json] [--proof P] [--json]
    python -m merkledrop_cli export [--data merkle.json] [--out results.csv]
    python -m merkledrop_cli template [--out template.csv]
    python -m merkledrop_cli config --init|--show

Environment Variables:
    MERKLEDROP_DATA_FILE        Default snapshot path (default: merkle.json)
    MERKLEDROP_LOG_LEVEL        Log level (default: INFO)
    MERKLEDROP_LOG_FILE         Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.allocations.export import template_csv
from core.config.runtime import get_default_config_template, load_runtime_config
from merkledrop_cli.commands import build, proof, verify


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkledrop",
        description="MerkleDrop CLI - Build allocation Merkle trees, look up and verify proofs.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./merkledrop.json or ~/.config/merkledrop/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build a Merkle tree from an address,amount CSV",
        description="Normalize rows, build the tree and write the merkle.json snapshot.",
    )
    build_parser.add_argument(
        "csv_path",
        type=str,
        help="Path to CSV file (address,amount with optional header)",
    )
    build_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Output snapshot path (default: configured data file)",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Print the proof for an address",
    )
    proof_parser.add_argument("address", type=str, help="Address (any case)")
    proof_parser.add_argument(
        "--data", "-d",
        type=str,
        default=None,
        help="Snapshot path (default: configured data file)",
    )
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an (address, amount) claim against a snapshot root",
        description="Recompute the leaf and fold in the proof with sorted-pair hashing.",
    )
    verify_parser.add_argument("address", type=str, help="Claimed address")
    verify_parser.add_argument(
        "amount",
        type=str,
        help="Claimed amount ('1.5' is ether units, '1500' is wei)",
    )
    verify_parser.add_argument(
        "--data", "-d",
        type=str,
        default=None,
        help="Snapshot path (default: configured data file)",
    )
    verify_parser.add_argument(
        "--proof",
        type=str,
        default=None,
        help="Pipe-separated proof (default: proof stored for the address)",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- export command ---
    export_parser = subparsers.add_parser(
        "export",
        help="Export entries as merkle_root,address,amount,proof CSV",
    )
    export_parser.add_argument(
        "--data", "-d",
        type=str,
        default=None,
        help="Snapshot path (default: configured data file)",
    )
    export_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Output CSV path (default: stdout)",
    )
    export_parser.set_defaults(func=proof.export_cmd)

    # --- template command ---
    template_parser = subparsers.add_parser(
        "template",
        help="Write a sample address,amount CSV",
    )
    template_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Output CSV path (default: stdout)",
    )
    template_parser.set_defaults(func=template_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Show or initialize configuration",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template merkledrop.json in the current directory",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def template_cmd(args: argparse.Namespace) -> int:
    """Handle template command."""
    content = template_csv()
    if args.out:
        Path(args.out).write_text(content + "\n", encoding="utf-8")
        print(f"Template written to {args.out}")
    else:
        print(content)
    return EXIT_SUCCESS


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path.cwd() / "merkledrop.json"
        if config_path.exists():
            print(f"Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        config_path.write_text(get_default_config_template() + "\n", encoding="utf-8")
        print(f"Created config file: {config_path}")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: merkledrop config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed / not found)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_runtime_config(args.config)
    except (OSError, ValueError, TypeError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
