"""
Artifact Audit
File: audit.py

Purpose: Re-check a produced artifact offline before its root is published.

Every concern yields a CheckResult instead of raising, so one pass
reports all problems with the artifact.
"""

from __future__ import annotations

import logging
from collections import Counter

from core.crypto.hashing import from_hex, to_hex
from core.merkle.leaf import LeafRecord, encode_leaf, parse_address
from core.merkle.merkle_proofs import verify_proof
from core.merkle.merkle_tree import build_merkle_tree
from core.schemas.distribution import ArtifactLeaf, DistributionArtifact
from core.schemas.verification import CheckResult, VerificationResult


logger = logging.getLogger(__name__)


def _leaf_digest(entry: ArtifactLeaf) -> bytes:
    return encode_leaf(parse_address(entry.recipient), entry.amount)


def check_entries_present(artifact: DistributionArtifact) -> CheckResult:
    """The artifact must commit to at least one recipient."""
    if artifact.entry_count == 0:
        return CheckResult.failed("entries_present", "Artifact contains no leaves")
    return CheckResult.passed(
        "entries_present",
        f"Artifact contains {artifact.entry_count} leaves",
        {"entries": artifact.entry_count},
    )


def check_indices_sequential(artifact: DistributionArtifact) -> CheckResult:
    """leaves[i].index must equal i."""
    mismatched = [
        {"position": pos, "index": entry.index}
        for pos, entry in enumerate(artifact.leaves)
        if entry.index != pos
    ]
    if mismatched:
        return CheckResult.failed(
            "indices_sequential",
            f"{len(mismatched)} leaves have an index that does not match their position",
            {"mismatched": mismatched},
        )
    return CheckResult.passed("indices_sequential", "Leaf indices match positions")


def check_total_supply(artifact: DistributionArtifact) -> CheckResult:
    """totalSupply must equal the sum of all values."""
    computed = sum(entry.amount for entry in artifact.leaves)
    if computed != artifact.total_supply_amount:
        return CheckResult.failed(
            "total_supply",
            "Total supply does not match the sum of leaf values",
            {"expected": str(computed), "actual": artifact.total_supply},
        )
    return CheckResult.passed("total_supply", "Total supply matches leaf values")


def check_root_rederived(artifact: DistributionArtifact) -> CheckResult:
    """Rebuild the tree from (recipient, value) pairs, ignoring stored proofs."""
    records = [
        LeafRecord(recipient=parse_address(entry.recipient), amount=entry.amount)
        for entry in artifact.leaves
    ]
    tree = build_merkle_tree([record.digest() for record in records])
    rederived = to_hex(tree.root)
    if rederived != artifact.root.lower():
        return CheckResult.failed(
            "root_rederived",
            "Root rebuilt from leaf values does not match the stored root",
            {"expected": rederived, "actual": artifact.root},
        )
    return CheckResult.passed("root_rederived", "Root rebuilt from leaf values matches")


def check_proofs_valid(artifact: DistributionArtifact) -> CheckResult:
    """Every stored proof must verify for its own leaf, index and the root."""
    root = from_hex(artifact.root)
    invalid: list[int] = []
    for entry in artifact.leaves:
        proof = [from_hex(sibling) for sibling in entry.proof]
        if not verify_proof(_leaf_digest(entry), proof, entry.index, root):
            invalid.append(entry.index)

    if invalid:
        return CheckResult.failed(
            "proofs_valid",
            f"{len(invalid)} of {artifact.entry_count} proofs do not verify",
            {"invalid_indices": invalid},
        )
    return CheckResult.passed("proofs_valid", f"All {artifact.entry_count} proofs verify")


def check_duplicate_recipients(artifact: DistributionArtifact) -> CheckResult:
    """Repeated recipients can only claim once on-chain; reported as a warning."""
    counts = Counter(entry.recipient.lower() for entry in artifact.leaves)
    duplicates = sorted(address for address, count in counts.items() if count > 1)
    if duplicates:
        return CheckResult.warning(
            "duplicate_recipients",
            f"{len(duplicates)} recipients appear more than once",
            {"recipients": duplicates},
        )
    return CheckResult.passed("duplicate_recipients", "No duplicate recipients")


def audit_artifact(artifact: DistributionArtifact) -> VerificationResult:
    """
    Run every artifact check.

    Returns:
        VerificationResult; ok is False if any error-level check failed
    """
    checks = [check_entries_present(artifact)]
    if artifact.entry_count == 0:
        return VerificationResult.from_checks(checks)

    checks.extend([
        check_indices_sequential(artifact),
        check_total_supply(artifact),
        check_root_rederived(artifact),
        check_proofs_valid(artifact),
        check_duplicate_recipients(artifact),
    ])
    result = VerificationResult.from_checks(checks)
    logger.info(
        "Audit finished: %d/%d checks passed", result.passed_count, len(result.checks)
    )
    return result


def find_entry(artifact: DistributionArtifact, address: str) -> ArtifactLeaf | None:
    """
    Locate a recipient's entry.

    The address may omit 0x and may use any letter case. Returns the first
    matching entry, or None when the address is absent.

    Raises:
        InvalidAddressException: If address is not a valid 20-byte hex value
    """
    wanted = parse_address(address)
    for entry in artifact.leaves:
        if parse_address(entry.recipient) == wanted:
            return entry
    return None


__all__ = [
    "audit_artifact",
    "find_entry",
    "check_entries_present",
    "check_indices_sequential",
    "check_total_supply",
    "check_root_rederived",
    "check_proofs_valid",
    "check_duplicate_recipients",
]
