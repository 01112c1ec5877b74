"""
CLI Verify Command

Re-check a distribution artifact offline:
- Leaf indices, total supply
- Root re-derived from (recipient, value) pairs
- Every stored proof

Usage:
    airdrop verify airdrop_setup.json [--json] [--debug]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from core.schemas.distribution import DistributionArtifact
from core.schemas.errors import AirdropException
from core.schemas.verification import VerificationResult

from orchestrator.artifacts.audit import audit_artifact
from orchestrator.artifacts.io import load_artifact


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of artifact verification for CLI output."""
    artifact_path: str = ""
    root: str = ""
    total_supply: str = ""
    entries: int = 0
    ok: bool = False
    checks: list[dict[str, Any]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["checks"]:
            del d["checks"]
        if not d["warnings"]:
            del d["warnings"]
        if not d["errors"]:
            del d["errors"]
        return d


def build_summary(
    artifact_path: str,
    artifact: DistributionArtifact,
    result: VerificationResult,
    debug: bool = False,
) -> VerifySummary:
    """Build a VerifySummary from the audit result."""
    summary = VerifySummary(
        artifact_path=artifact_path,
        root=artifact.root,
        total_supply=artifact.total_supply,
        entries=artifact.entry_count,
        ok=result.ok,
        errors=result.get_error_messages(),
        warnings=result.get_warning_messages(),
    )

    if debug:
        summary.checks = [
            {
                "check_id": check.check_id,
                "ok": check.ok,
                "severity": check.severity,
                "message": check.message,
                "details": check.details,
            }
            for check in result.checks
        ]

    return summary


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"artifact: {summary.artifact_path}")
    print(f"root: {summary.root}")
    print(f"total_supply: {summary.total_supply}")
    print(f"entries: {summary.entries}")
    print(f"ok: {str(summary.ok).lower()}")

    if summary.errors:
        print(f"\nerrors ({len(summary.errors)}):")
        for err in summary.errors[:10]:
            print(f"  ✗ {err}")

    if summary.warnings:
        print(f"\nwarnings ({len(summary.warnings)}):")
        for warning in summary.warnings:
            print(f"  ! {warning}")

    if summary.checks:
        passed = sum(1 for c in summary.checks if c["ok"])
        failed = len(summary.checks) - passed
        print(f"\nchecks: {passed} passed, {failed} failed")
        for check in summary.checks:
            status = "✓" if check["ok"] else "✗"
            print(f"  {status} {check['check_id']}")


def print_summary_json(summary: VerifySummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    artifact_path = Path(args.artifact)
    output_json = args.json
    debug = args.debug

    try:
        artifact = load_artifact(artifact_path)
    except AirdropException as e:
        if output_json:
            print(json.dumps(e.to_error_model().model_dump(), indent=2))
        else:
            print(f"Error loading artifact: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    logger.info("Auditing artifact: %s", artifact_path)
    result = audit_artifact(artifact)

    summary = build_summary(str(artifact_path), artifact, result, debug=debug)
    if output_json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)

    if summary.ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS

    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
