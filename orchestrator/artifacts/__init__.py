"""
Artifact IO and Audit

Provides functionality for saving, loading, and re-checking the
distribution artifact.
"""

from orchestrator.artifacts.io import (
    default_output_path,
    dump_artifact,
    save_artifact,
    parse_artifact,
    load_artifact,
)

from orchestrator.artifacts.audit import (
    audit_artifact,
    find_entry,
    check_entries_present,
    check_indices_sequential,
    check_total_supply,
    check_root_rederived,
    check_proofs_valid,
    check_duplicate_recipients,
)

__all__ = [
    # IO
    "default_output_path",
    "dump_artifact",
    "save_artifact",
    "parse_artifact",
    "load_artifact",
    # Audit
    "audit_artifact",
    "find_entry",
    "check_entries_present",
    "check_indices_sequential",
    "check_total_supply",
    "check_root_rederived",
    "check_proofs_valid",
    "check_duplicate_recipients",
]
