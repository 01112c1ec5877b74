"""
Core cryptographic utilities.

Keccak-256 hashing and hex helpers shared by the tree, the pipeline
and the artifact auditor.
"""
from .hashing import (
    HASH_SIZE,
    keccak256,
    hash_pair,
    to_hex,
    from_hex,
)

__all__ = [
    "HASH_SIZE",
    "keccak256",
    "hash_pair",
    "to_hex",
    "from_hex",
]
