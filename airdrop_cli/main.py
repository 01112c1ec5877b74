"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    airdrop build [INPUT] [--out PATH] [--output-dir DIR] [--workers N] [--no-verify] [--json]
    airdrop verify <artifact> [--json] [--debug]
    airdrop proof <artifact> <address> [--json]
    airdrop config --init|--show [--path PATH]

Environment Variables:
    AIRDROP_INPUT_PATH          Recipient CSV (default: ./data/airdrop/airdrop.csv)
    AIRDROP_OUTPUT_DIR          Artifact directory (default: ./data/airdrop)
    AIRDROP_OUTPUT_FILE         Artifact file name (default: airdrop_setup.json)
    AIRDROP_WORKERS             Proof generation threads (default: 1)
    AIRDROP_VERIFY_PROOFS       Self-check proofs before writing (default: true)
    AIRDROP_LOG_LEVEL           Log level (default: INFO)
    AIRDROP_LOG_FILE            Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

import yaml

from airdrop_cli import __version__
from airdrop_cli.commands import build, verify, proof
from airdrop_cli.config import CONFIG_FILE_NAME, load_config, get_default_config_template


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
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="airdrop",
        description="Merkle airdrop builder - build distribution artifacts, verify them, and look up proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help=f"Path to configuration file (default: ./{CONFIG_FILE_NAME} or ~/.config/airdrop/config.yaml)",
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
        help="Build the distribution artifact from a recipient list",
        description="Validate the recipient CSV, build the Merkle tree and write every proof.",
    )
    build_parser.add_argument(
        "input",
        type=str,
        nargs="?",
        default=None,
        help="Recipient CSV with an address,amount header (default: from config)",
    )
    build_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Output path for the artifact (overrides --output-dir)",
    )
    build_parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory for the artifact, written under the configured file name",
    )
    build_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Threads used for proof generation (default: from config)",
    )
    build_parser.add_argument(
        "--no-verify",
        action="store_true",
        default=False,
        help="Skip re-verifying every proof before writing",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a distribution artifact offline",
        description="Re-derive the root, re-verify every proof and check the total supply.",
    )
    verify_parser.add_argument(
        "artifact",
        type=str,
        help="Path to the artifact JSON file",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Include detailed checks",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Show one recipient's claim data",
        description="Look up a recipient's value, index and proof, and check the proof.",
    )
    proof_parser.add_argument(
        "artifact",
        type=str,
        help="Path to the artifact JSON file",
    )
    proof_parser.add_argument(
        "address",
        type=str,
        help="Recipient address (0x prefix optional, any case)",
    )
    proof_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default=CONFIG_FILE_NAME,
        help=f"Path for config file (default: {CONFIG_FILE_NAME})",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (AIRDROP_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config_path = Path(args.path)
        config = load_config(config_path) if config_path.exists() else args.cli_config
        print(yaml.safe_dump(config.to_dict(), sort_keys=False), end="")
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: airdrop config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        elif getattr(args, "json", False):
            print(json.dumps({"code": "AIRDROP_ERROR", "message": str(e)}, indent=2))
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
