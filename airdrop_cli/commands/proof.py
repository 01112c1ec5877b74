"""
CLI Proof Command

Look up one recipient's claim data (value, index, proof) in an artifact
and check the proof against the artifact's root.

Usage:
    airdrop proof airdrop_setup.json 0x9621dde636de098b43efb0fa9b61facfe328f99d [--json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from core.crypto.hashing import from_hex
from core.merkle.leaf import LeafRecord
from core.merkle.merkle_proofs import verify_proof
from core.schemas.distribution import ArtifactLeaf
from core.schemas.errors import AirdropException

from orchestrator.artifacts.audit import find_entry
from orchestrator.artifacts.io import load_artifact


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class ProofSummary:
    """Claim data for one recipient."""
    address: str = ""
    found: bool = False
    valid: bool = False
    recipient: str = ""
    value: str = ""
    index: int | None = None
    proof: list[str] = field(default_factory=list)
    root: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not self.found:
            for key in ("recipient", "value", "index", "proof"):
                del d[key]
        return d


def check_entry(entry: ArtifactLeaf, root: str) -> bool:
    """Verify an entry's stored proof against the root."""
    record = LeafRecord.from_strings(entry.recipient, entry.value)
    siblings = [from_hex(sibling) for sibling in entry.proof]
    return verify_proof(record.digest(), siblings, entry.index, from_hex(root))


def print_summary_human(summary: ProofSummary) -> None:
    """Print summary in human-readable format."""
    if not summary.found:
        print(f"Recipient not found: {summary.address}", file=sys.stderr)
        return

    print(f"recipient: {summary.recipient}")
    print(f"value: {summary.value}")
    print(f"index: {summary.index}")
    print(f"root: {summary.root}")
    print(f"valid: {str(summary.valid).lower()}")
    print(f"proof ({len(summary.proof)}):")
    for sibling in summary.proof:
        print(f"  {sibling}")


def print_summary_json(summary: ProofSummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def proof_cmd(args: Namespace) -> int:
    """
    Execute the proof command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (2 when the recipient is absent or the proof does not verify)
    """
    output_json = args.json

    try:
        artifact = load_artifact(Path(args.artifact))
        entry = find_entry(artifact, args.address)
    except AirdropException as e:
        if output_json:
            print(json.dumps(e.to_error_model().model_dump(), indent=2))
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = ProofSummary(address=args.address, root=artifact.root)
    if entry is not None:
        summary.found = True
        summary.recipient = entry.recipient
        summary.value = entry.value
        summary.index = entry.index
        summary.proof = list(entry.proof)
        summary.valid = check_entry(entry, artifact.root)

    if output_json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS if summary.valid else EXIT_VERIFICATION_FAILED
