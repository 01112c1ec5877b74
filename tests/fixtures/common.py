"""
Factories shared by the unit tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from core.merkle.leaf import LeafRecord
from core.schemas.distribution import DistributionArtifact
from orchestrator.pipeline import ArtifactPipeline

from .vectors import (
    ALICE,
    ALICE_AMOUNT,
    BOB,
    BOB_AMOUNT,
    CREATOR,
    CREATOR_AMOUNT,
)


def make_record(address: str = ALICE, amount: int = ALICE_AMOUNT) -> LeafRecord:
    """Create a LeafRecord from a textual address."""
    return LeafRecord.from_strings(address, str(amount))


def make_records(count: int | None = None) -> list[LeafRecord]:
    """
    The fixed Alice/Bob/Creator records.

    With count greater than three, synthetic recipients are appended
    (address 0x00..01, 0x00..02, ... with amount i + 1).
    """
    records = [
        make_record(ALICE, ALICE_AMOUNT),
        make_record(BOB, BOB_AMOUNT),
        make_record(CREATOR, CREATOR_AMOUNT),
    ]
    if count is None:
        return records
    for i in range(len(records), count):
        records.append(LeafRecord(recipient=(i + 1).to_bytes(20, "big"), amount=i + 1))
    return records[:count]


def make_csv(rows: Sequence[tuple[str, str]], header: str = "address,amount") -> str:
    """Render rows as CSV text."""
    lines = [header] + [f"{address},{amount}" for address, amount in rows]
    return "\n".join(lines) + "\n"


def write_csv(path: Path, text: str) -> Path:
    """Write CSV text to path and return it."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def make_artifact(count: int = 3) -> DistributionArtifact:
    """Build an artifact in memory over make_records(count)."""
    return ArtifactPipeline().build(make_records(count))


def tamper_leaf(artifact: DistributionArtifact, index: int, /, **changes) -> DistributionArtifact:
    """Copy of the artifact with fields of one leaf replaced."""
    leaves = list(artifact.leaves)
    leaves[index] = leaves[index].model_copy(update=changes)
    return artifact.model_copy(update={"leaves": tuple(leaves)})
