"""
Artifact Pipeline

Deterministic batch runner: recipient list -> leaves -> tree -> proofs -> artifact.

Key features:
- Whole-run abort on any malformed row (no partial artifacts)
- Total supply bounded to uint256
- Optional self-check of every proof before anything is written
- Order-preserving proof generation, sequential or threaded
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Sequence

from core.config.runtime import PipelineConfig, RuntimeConfig
from core.crypto.hashing import to_hex
from core.merkle.leaf import LeafRecord
from core.merkle.merkle_proofs import get_proofs, verify_proof
from core.merkle.merkle_tree import build_merkle_tree
from core.schemas.distribution import UINT256_MAX, ArtifactLeaf, DistributionArtifact
from core.schemas.errors import (
    AmountOverflowException,
    EmptyDistributionException,
    MerkleVerificationException,
)

from orchestrator.artifacts.io import save_artifact
from orchestrator.ingest import load_records


logger = logging.getLogger(__name__)


# =============================================================================
# Run Result
# =============================================================================

@dataclass
class RunResult:
    """Result of a pipeline run that produced an artifact."""
    artifact: DistributionArtifact
    input_path: Optional[Path] = None
    output_path: Optional[Path] = None
    warnings: list[str] = field(default_factory=list)

    @property
    def root(self) -> str:
        return self.artifact.root

    @property
    def total_supply(self) -> str:
        return self.artifact.total_supply

    @property
    def entry_count(self) -> int:
        return self.artifact.entry_count

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": True,
            "root": self.root,
            "total_supply": self.total_supply,
            "entries": self.entry_count,
            "input_path": str(self.input_path) if self.input_path else None,
            "output_path": str(self.output_path) if self.output_path else None,
            "warnings": self.warnings,
        }


# =============================================================================
# Pipeline Class
# =============================================================================

def compute_total_supply(records: Sequence[LeafRecord]) -> int:
    """
    Sum all amounts.

    Raises:
        AmountOverflowException: If the sum exceeds uint256 capacity
    """
    total = sum(record.amount for record in records)
    if total > UINT256_MAX:
        raise AmountOverflowException(
            "Total supply exceeds uint256 capacity",
            details={"total_supply": str(total)},
        )
    return total


class ArtifactPipeline:
    """
    Builds the distribution artifact for a recipient list.

    Each call constructs and discards its own tree; the instance holds
    configuration only.
    """

    def __init__(self, config: Optional[PipelineConfig] = None) -> None:
        self.config = config or PipelineConfig()

    def build(self, records: Sequence[LeafRecord]) -> DistributionArtifact:
        """
        Build the artifact in memory.

        Args:
            records: Entries in distribution order; entry i gets index i

        Returns:
            DistributionArtifact with root, total supply and every proof

        Raises:
            EmptyDistributionException: If records is empty
            AmountOverflowException: If the total supply overflows uint256
            MerkleVerificationException: If a generated proof fails the self-check
        """
        if len(records) == 0:
            raise EmptyDistributionException()

        total_supply = compute_total_supply(records)

        leaves = [record.digest() for record in records]
        tree = build_merkle_tree(leaves)
        logger.info(
            "Built Merkle tree: %d leaves, depth %d, root %s",
            tree.leaf_count, tree.depth, to_hex(tree.root),
        )

        proofs = get_proofs(tree, workers=self.config.workers)

        if self.config.verify_proofs:
            self._self_check(leaves, proofs, tree.root)

        entries = [
            ArtifactLeaf(
                recipient=record.address,
                value=str(record.amount),
                index=i,
                proof=tuple(to_hex(sibling) for sibling in proof),
            )
            for i, (record, proof) in enumerate(zip(records, proofs))
        ]

        return DistributionArtifact(
            root=to_hex(tree.root),
            total_supply=str(total_supply),
            leaves=tuple(entries),
        )

    def run(
        self,
        input_path: str | Path,
        output_path: str | Path,
    ) -> RunResult:
        """
        Load, build and persist in one pass.

        Nothing is written unless every row validated and the artifact
        was fully built.
        """
        input_path = Path(input_path)
        output_path = Path(output_path)

        records = load_records(input_path)
        artifact = self.build(records)
        saved = save_artifact(artifact, output_path)

        logger.info("Artifact written to %s", saved)
        return RunResult(
            artifact=artifact,
            input_path=input_path,
            output_path=saved,
            warnings=_duplicate_warnings(records),
        )

    @staticmethod
    def _self_check(
        leaves: Sequence[bytes],
        proofs: Sequence[Sequence[bytes]],
        root: bytes,
    ) -> None:
        for i, (leaf, proof) in enumerate(zip(leaves, proofs)):
            if not verify_proof(leaf, proof, i, root):
                raise MerkleVerificationException(
                    f"Generated proof for leaf {i} does not verify against the root",
                    leaf_index=i,
                )
        logger.debug("Self-check passed for %d proofs", len(proofs))


def _duplicate_warnings(records: Sequence[LeafRecord]) -> list[str]:
    seen: set[bytes] = set()
    warnings: list[str] = []
    for i, record in enumerate(records):
        if record.recipient in seen:
            warnings.append(f"Duplicate recipient {record.address} at index {i}")
        seen.add(record.recipient)
    return warnings


def create_pipeline(config: Optional[RuntimeConfig] = None) -> ArtifactPipeline:
    """Create a pipeline from a runtime configuration."""
    runtime = config or RuntimeConfig()
    return ArtifactPipeline(config=runtime.pipeline)


def run_from_config(config: RuntimeConfig) -> RunResult:
    """Run the pipeline with input and output locations taken from config."""
    pipeline = create_pipeline(config)
    return pipeline.run(config.io.input_path, config.output_path)
