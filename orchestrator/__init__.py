"""
Distribution Pipeline

Deterministic, in-process runner that turns a recipient list into a
distribution artifact.

Public API:
- ArtifactPipeline: Builds (and optionally persists) the artifact
- RunResult: Result of a pipeline run that wrote an artifact
- load_records / parse_rows: Recipient list ingestion
- create_pipeline / run_from_config: Config-driven entry points
"""

from orchestrator.ingest import (
    load_records,
    parse_rows,
)
from orchestrator.pipeline import (
    ArtifactPipeline,
    RunResult,
    compute_total_supply,
    create_pipeline,
    run_from_config,
)


__all__ = [
    # Ingestion
    "load_records",
    "parse_rows",
    # Pipeline
    "ArtifactPipeline",
    "RunResult",
    "compute_total_supply",
    "create_pipeline",
    "run_from_config",
]
