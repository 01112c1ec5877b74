"""
Test fixtures package for the airdrop builder tests.

This package provides known-answer vectors and factory functions:
- vectors.py: Fixed leaves and roots for small distributions
- common.py: Record, CSV and artifact factories

Usage:
    from fixtures import make_records, make_artifact, ROOT_AB

    def test_something():
        artifact = make_artifact(2)
        assert artifact.root == ROOT_AB
"""

from .vectors import *  # noqa: F401,F403

from .common import (
    make_record,
    make_records,
    make_csv,
    write_csv,
    make_artifact,
    tamper_leaf,
)

__all__ = [
    "make_record",
    "make_records",
    "make_csv",
    "write_csv",
    "make_artifact",
    "tamper_leaf",
]
