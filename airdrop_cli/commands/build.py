"""
CLI Build Command

Build the distribution artifact from a recipient list:
- Validate every row (any malformed row aborts, nothing is written)
- Build the tree and every proof
- Write the artifact atomically

Usage:
    airdrop build [recipients.csv] [--out PATH] [--output-dir DIR] [--workers N] [--no-verify] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from core.config.runtime import PipelineConfig, RuntimeConfig
from core.schemas.errors import AirdropException

from orchestrator.pipeline import ArtifactPipeline, RunResult


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class BuildSummary:
    """Summary of an artifact build for CLI output."""
    input_path: str = ""
    output_path: str = ""
    root: str = ""
    total_supply: str = ""
    entries: int = 0
    success: bool = False
    warnings: list[str] = field(default_factory=list)
    error: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if d["error"] is None:
            del d["error"]
        if not d["warnings"]:
            del d["warnings"]
        return d

    @classmethod
    def from_run(cls, result: RunResult) -> "BuildSummary":
        return cls(
            input_path=str(result.input_path),
            output_path=str(result.output_path),
            root=result.root,
            total_supply=result.total_supply,
            entries=result.entry_count,
            success=True,
            warnings=list(result.warnings),
        )


def resolve_paths(args: Namespace, config: RuntimeConfig) -> tuple[Path, Path]:
    """Input and output paths; CLI flags take precedence over config."""
    input_path = Path(args.input) if args.input else Path(config.io.input_path)

    if args.out:
        output_path = Path(args.out)
    elif args.output_dir:
        output_path = Path(args.output_dir) / config.io.output_file
    else:
        output_path = config.output_path

    return input_path, output_path


def resolve_pipeline_config(args: Namespace, config: RuntimeConfig) -> PipelineConfig:
    """Pipeline settings; CLI flags take precedence over config."""
    workers = args.workers if args.workers is not None else config.pipeline.workers
    verify_proofs = config.pipeline.verify_proofs and not args.no_verify
    return PipelineConfig(workers=workers, verify_proofs=verify_proofs)


def print_summary_human(summary: BuildSummary) -> None:
    """Print summary in human-readable format."""
    if not summary.success:
        message = summary.error["message"] if summary.error else "unknown error"
        print(f"Error: {message}", file=sys.stderr)
        return

    print(f"input: {summary.input_path}")
    print(f"output: {summary.output_path}")
    print(f"entries: {summary.entries}")
    print(f"total_supply: {summary.total_supply}")
    print(f"root: {summary.root}")

    if summary.warnings:
        print(f"\nwarnings ({len(summary.warnings)}):")
        for warning in summary.warnings[:10]:
            print(f"  ! {warning}")


def print_summary_json(summary: BuildSummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config: RuntimeConfig = args.cli_config
    output_json = args.json

    input_path, output_path = resolve_paths(args, config)
    summary = BuildSummary(input_path=str(input_path), output_path=str(output_path))

    try:
        pipeline = ArtifactPipeline(config=resolve_pipeline_config(args, config))
        result = pipeline.run(input_path, output_path)
    except AirdropException as e:
        logger.error("Build failed: %s", e)
        summary.error = e.to_error_model().model_dump()
        if output_json:
            print_summary_json(summary)
        else:
            print_summary_human(summary)
        return EXIT_RUNTIME_ERROR

    summary = BuildSummary.from_run(result)
    if output_json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS
